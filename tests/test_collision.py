import pytest

from systems.collision import actors_collide, point_in_grid, swapped_tiles
from systems.entities import Actor


def test_point_in_grid():
    assert point_in_grid((0, 0), (19, 21))
    assert not point_in_grid((19, 0), (19, 21))
    assert not point_in_grid((0, -1), (19, 21))


def test_same_tile_collides():
    assert actors_collide(Actor(3, 3), Actor(3, 3))
    assert not actors_collide(Actor(3, 3), Actor(4, 3))


def test_actors_swapping_tiles_collide():
    a = Actor(5, 5)
    b = Actor(6, 5)
    a.begin_move(6, 5)
    b.begin_move(5, 5)
    assert swapped_tiles(a, b)
    assert actors_collide(a, b, "tile")


def test_distance_geometry_uses_interpolated_positions():
    a = Actor(3, 3)
    b = Actor(4, 3)
    b.begin_move(3, 3)
    b.progress = 0.4
    assert not actors_collide(a, b, "distance", 0.5)
    b.progress = 0.6
    assert actors_collide(a, b, "distance", 0.5)


def test_distance_geometry_wraps_across_the_tunnel():
    a = Actor(0, 9)
    b = Actor(18, 9)
    assert not actors_collide(a, b, "distance", 0.5, cols=19)
    assert actors_collide(a, b, "distance", 1.5, cols=19)


def test_unknown_geometry_is_rejected():
    with pytest.raises(ValueError):
        actors_collide(Actor(1, 1), Actor(1, 1), "hexagonal")

import pytest

from systems.maze import GHOST_HOME, MAZE_LAYOUT, PACMAN_START, Maze, Tile


def test_builtin_layout_dimensions_and_dot_count():
    maze = Maze()
    assert (maze.cols, maze.rows) == (19, 21)
    assert maze.total_dots == 154
    assert maze.dots_remaining == 154
    assert len(maze.tiles_of(Tile.POWER_PELLET)) == 4


def test_start_is_walkable_and_flanked_by_walls():
    maze = Maze()
    assert maze.is_walkable(*PACMAN_START)
    assert maze.get(8, 15) is Tile.WALL
    assert maze.get(10, 15) is Tile.WALL


def test_out_of_bounds_reads_as_wall():
    maze = Maze()
    assert maze.get(-1, 3) is Tile.WALL
    assert maze.get(3, 99) is Tile.WALL


def test_step_wraps_horizontally_only():
    maze = Maze()
    assert maze.step(18, 9, 1, 0) == (0, 9)
    assert maze.step(0, 9, -1, 0) == (18, 9)
    assert maze.step(5, 0, 0, -1) is None


def test_gate_passable_only_when_allowed():
    maze = Maze()
    assert maze.get(9, 8) is Tile.GATE
    assert not maze.is_walkable(9, 8)
    assert maze.is_walkable(9, 8, through_gate=True)


def test_neighbors_follow_up_left_down_right_order():
    maze = Maze()
    assert maze.neighbors(GHOST_HOME, through_gate=True) == [(9, 8), (8, 9), (10, 9)]
    assert maze.neighbors(GHOST_HOME) == [(8, 9), (10, 9)]


def test_collect_empties_the_tile_once():
    maze = Maze()
    assert maze.collect(9, 16) is Tile.DOT
    assert maze.get(9, 16) is Tile.EMPTY
    assert maze.dots_remaining == 153
    assert maze.collect(9, 16) is None
    assert maze.dots_remaining == 153


def test_reset_restores_dots():
    maze = Maze()
    maze.collect(1, 2)
    maze.reset()
    assert maze.get(1, 2) is Tile.POWER_PELLET
    assert maze.dots_remaining == maze.total_dots


def test_unreachable_dots_are_dropped():
    layout = [
        "#######",
        "#..#..#",
        "#######",
    ]
    maze = Maze(layout, start=(1, 1))
    assert maze.total_dots == 2
    assert maze.get(4, 1) is Tile.EMPTY


def test_every_walkable_tile_is_connected():
    maze = Maze()
    reachable = maze.reachable_from(PACMAN_START)
    for pos in maze.tiles_of(Tile.DOT, Tile.POWER_PELLET):
        assert pos in reachable


@pytest.mark.parametrize("layout", [[], [""], ["###", "##"]])
def test_bad_layouts_are_rejected(layout):
    with pytest.raises(ValueError):
        Maze(layout, start=(0, 0))


def test_start_on_a_wall_is_rejected():
    with pytest.raises(ValueError):
        Maze(MAZE_LAYOUT, start=(0, 0))

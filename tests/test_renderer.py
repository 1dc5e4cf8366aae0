import copy

import pygame
import pytest

from systems.engine import Fruit, Phase
from systems.entities import Direction, GhostMode
from systems.maze import FRUIT_TILE
from systems.renderer import Renderer


def snapshot(engine):
    return (
        copy.deepcopy(engine.state),
        copy.deepcopy(engine.pacman),
        copy.deepcopy(engine.ghosts),
        [row[:] for row in engine.maze.cells],
        engine.accumulator,
    )


@pytest.fixture
def renderer(fonts):
    surface = pygame.Surface((960, 720))
    return Renderer(surface, tile_size=30, offset=(195, 60))


def test_drawing_leaves_the_engine_untouched(make_engine, renderer):
    engine = make_engine()
    engine.set_direction(Direction.DOWN)
    engine.tick(0.1)
    before = snapshot(engine)
    renderer.draw(engine, 1000)
    renderer.draw(engine, 1016)
    assert snapshot(engine) == before


@pytest.mark.parametrize("phase", list(Phase))
def test_every_phase_draws(make_engine, renderer, phase):
    engine = make_engine()
    engine.state.phase = phase
    engine.state.phase_timer = 0.5
    before = snapshot(engine)
    renderer.draw(engine, 500)
    assert snapshot(engine) == before


def test_frightened_eaten_and_fruit_draw(make_engine, renderer):
    engine = make_engine()
    engine.state.power_mode = True
    engine.state.power_timer = 1.5
    engine.state.fruit = Fruit("cherry", 100, FRUIT_TILE, 5.0)
    engine.ghosts[0].mode = GhostMode.FRIGHTENED
    engine.ghosts[1].mode = GhostMode.EATEN
    engine.state.paused = True
    before = snapshot(engine)
    for now in (0, 200, 400):
        renderer.draw(engine, now)
    assert snapshot(engine) == before


def test_board_is_painted(make_engine, renderer):
    engine = make_engine()
    renderer.draw(engine, 0)
    # Top-left wall tile and Pac-Man's centre.
    assert renderer.screen.get_at((195 + 15, 60 + 15))[:3] != (0, 0, 0)
    cx, cy = renderer.center_of(*engine.pacman.position())
    assert renderer.screen.get_at((cx - 5, cy))[:3] == (255, 255, 0)

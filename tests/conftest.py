import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pygame
import pytest

from highscore import HighScoreStore
from settings import StorageConfig
from systems.engine import GameEngine
from systems.rules import get_rules


@pytest.fixture
def storage(tmp_path):
    return StorageConfig(path=tmp_path / "pacman.db")


@pytest.fixture
def store(storage):
    return HighScoreStore(storage)


@pytest.fixture
def make_engine(store):
    def factory(game="pac_man", **overrides):
        rules = get_rules(game, **overrides).data
        return GameEngine(rules, store=store, rng=random.Random(1))
    return factory


@pytest.fixture
def fonts():
    pygame.font.init()
    yield
    pygame.font.quit()

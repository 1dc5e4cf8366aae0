import pygame
import pytest

from games import GAME_REGISTRY
from games.pac_man import ClassicPacManGame, PacManGame
from highscore import HighScoreStore
from settings import Settings
from systems.engine import Phase
from systems.entities import Direction


class RecordingSounds:
    def __init__(self):
        self.played = []

    def play(self, key):
        self.played.append(key)


@pytest.fixture
def game(fonts, storage):
    cfg = Settings(storage=storage)
    screen = pygame.Surface(cfg.screen_size)
    g = PacManGame(screen, cfg, RecordingSounds())
    g.start()
    return g


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_registry_holds_both_variants():
    assert GAME_REGISTRY["pac_man"] is PacManGame
    assert GAME_REGISTRY["pac_man_classic"] is ClassicPacManGame
    assert ClassicPacManGame.rules_key == "pac_man_classic"


def test_arrow_key_stages_a_direction(game):
    game.handle_event(key(pygame.K_LEFT))
    assert game.engine.pacman.next_direction is Direction.LEFT


def test_pause_key_toggles(game):
    game.handle_event(key(pygame.K_p))
    assert game.engine.state.paused
    game.handle_event(key(pygame.K_SPACE))
    assert not game.engine.state.paused


def test_mouse_swipe_stages_a_direction(game):
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 100), button=1))
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(100, 20), button=1))
    assert game.engine.pacman.next_direction is Direction.UP


def test_direction_pad_click(game):
    direction, rect = game.pad.buttons[3]
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=rect.center, button=1))
    assert game.engine.pacman.next_direction is direction
    assert game.pad_active is direction
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=rect.center, button=1))
    assert game.pad_active is None


def test_update_plays_event_sounds(game):
    game.handle_event(key(pygame.K_DOWN))
    for _ in range(8):
        game.update(1 / 60)
    assert "dot" in game.sounds.played
    assert game.engine.state.score == 10


def test_restart_after_game_over(game):
    game.engine.state.score = 500
    game.engine.state.phase = Phase.GAME_OVER
    game.handle_event(key(pygame.K_LEFT))
    assert game.engine.pacman.next_direction is Direction.NONE
    game.handle_event(key(pygame.K_RETURN))
    assert game.engine.state.phase is Phase.PLAYING
    assert game.engine.state.score == 0


def test_draw_does_not_raise(game):
    game.draw()


def test_classic_variant_uses_tile_movement(fonts, storage):
    cfg = Settings(storage=storage)
    g = ClassicPacManGame(pygame.Surface(cfg.screen_size), cfg, RecordingSounds())
    assert g.engine.tile_mode
    assert g.engine.rules["collision"] == "tile"


def test_resize_refits_the_board(game):
    smaller = pygame.Surface((640, 480))
    game.resize(smaller)
    assert game.screen is smaller
    assert game.renderer.screen is smaller
    assert game.renderer.tile == 18


def test_leaving_mid_run_keeps_a_new_record(game):
    game.engine.store.save(100)
    game.reset()
    game.engine.state.score = 5_000
    game.handle_event(key(pygame.K_DOWN))
    for _ in range(8):
        game.update(1 / 60)
    game.stop()
    assert game.engine.state.phase is Phase.PLAYING
    assert HighScoreStore(game.cfg.storage).load() == 5_010

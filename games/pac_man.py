from __future__ import annotations
from typing import List, Optional, Tuple
import pygame
from . import BaseGame, register_game
from highscore import HighScoreStore
from systems.controls import PAUSE_KEYS, DirectionPad, SwipeTracker, key_direction
from systems.engine import GameEngine, GameEvent, Phase
from systems.entities import Direction
from systems.renderer import Renderer
from systems.rules import get_rules

RESTART_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_r)

@register_game("pac_man")
class PacManGame(BaseGame):
    title = "Pac-Man"
    rules_key = "pac_man"

    def __init__(self, screen: pygame.Surface, cfg, sounds, engine: Optional[GameEngine] = None):
        super().__init__(screen, cfg, sounds)
        self.engine = engine or GameEngine(get_rules(self.rules_key).data, store=HighScoreStore(cfg.storage))
        self.swipe = SwipeTracker()
        self.pad_active: Optional[Direction] = None
        self.last_events: List[GameEvent] = []
        self.layout()

    def layout(self) -> None:
        """Fit the board to the window; called again after a display mode change."""
        maze = self.engine.maze
        w, h = self.screen.get_size()
        # Leave room for the HUD above and the lives row below.
        tile = max(8, min(self.cfg.tile_size, (h - 100) // maze.rows, (w - 220) // maze.cols))
        board_w, board_h = maze.cols * tile, maze.rows * tile
        offset = ((w - board_w) // 2, max(50, (h - board_h) // 2))
        self.renderer = Renderer(self.screen, tile_size=tile, offset=offset)
        pad_x = min(w - 90, offset[0] + board_w + 100)
        self.pad = DirectionPad((pad_x, offset[1] + board_h - 100))

    def resize(self, screen: pygame.Surface) -> None:
        super().resize(screen)
        self.layout()

    def reset(self) -> None:
        self.engine.restart()
        self.swipe = SwipeTracker()
        self.pad_active = None
        self.last_events = []

    # ----- Input -----
    def _pointer_down(self, pos: Tuple[float, float]) -> None:
        hit = self.pad.hit(pos)
        if hit is not None:
            self.pad_active = hit
            self.engine.set_direction(hit)
            return
        self.swipe.begin(pos)

    def _pointer_up(self, pos: Tuple[float, float]) -> None:
        self.pad_active = None
        direction = self.swipe.end(pos)
        if direction is not None:
            self.engine.set_direction(direction)

    def _finger_pos(self, event: pygame.event.Event) -> Tuple[float, float]:
        w, h = self.screen.get_size()
        return (event.x * w, event.y * h)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.USEREVENT, {"action": "back_to_menu"}))
                return
            if self.engine.state.phase is Phase.GAME_OVER:
                if event.key in RESTART_KEYS:
                    self.reset()
                return
            if event.key in PAUSE_KEYS:
                self.engine.toggle_pause()
                return
            direction = key_direction(event.key)
            if direction is not None:
                self.engine.set_direction(direction)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.engine.state.phase is Phase.GAME_OVER:
                self.reset()
                return
            self._pointer_down(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._pointer_up(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._pointer_down(self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self._pointer_up(self._finger_pos(event))

    # ----- Frame -----
    def update(self, dt: float) -> None:
        self.last_events = self.engine.tick(dt)
        for ev in self.last_events:
            self.sounds.play(ev.value)

    def draw(self) -> None:
        self.renderer.draw(self.engine, pygame.time.get_ticks())
        self.pad.draw(self.screen, self.pad_active)


@register_game("pac_man_classic")
class ClassicPacManGame(PacManGame):
    """Grid-stepped variant: one tile per step, same-tile collisions, ghosts sent straight home."""
    title = "Pac-Man Classic"
    rules_key = "pac_man_classic"

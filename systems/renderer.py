from __future__ import annotations
import math
from typing import Optional, Tuple
import pygame

from systems.engine import GameEngine, Phase
from systems.entities import Direction, Ghost, GhostMode
from systems.maze import Tile
from systems.scoring import format_score

BG_COLOR = (0, 0, 0)
MAZE_COLOR = (33, 33, 222)
MAZE_EDGE_COLOR = (80, 80, 255)
GATE_COLOR = (255, 184, 255)
PELLET_COLOR = (255, 184, 174)
ENERGIZER_COLOR = (255, 184, 174)
PLAYER_COLOR = (255, 255, 0)
FRIGHTENED_COLOR = (33, 33, 255)
FRIGHTENED_FLASH_COLOR = (255, 255, 255)
EYE_WHITE = (255, 255, 255)
PUPIL_COLOR = (33, 33, 200)
HUD_COLOR = (255, 255, 255)
HUD_ACCENT = (255, 215, 0)

GHOST_COLORS = {
    "blinky": (255, 0, 0),
    "pinky": (255, 184, 255),
    "inky": (0, 255, 255),
    "clyde": (255, 184, 82),
}

FRUIT_COLORS = {
    "cherry": (255, 0, 0),
    "strawberry": (255, 105, 180),
    "orange": (255, 165, 0),
    "apple": (0, 255, 0),
    "melon": (144, 238, 144),
}

# Frightened ghosts start flashing when this many seconds of power remain.
FLASH_WINDOW = 2.0

_FACING = {
    Direction.RIGHT: 0.0,
    Direction.UP: 90.0,
    Direction.LEFT: 180.0,
    Direction.DOWN: 270.0,
}


class Renderer:
    """Paints the whole frame from engine state. Never writes to the engine."""

    def __init__(
        self,
        screen: pygame.Surface,
        tile_size: int = 30,
        offset: Tuple[int, int] = (0, 0),
        font: Optional[pygame.font.Font] = None,
        title_font: Optional[pygame.font.Font] = None,
    ):
        self.screen = screen
        self.tile = tile_size
        self.offset = offset
        self.font = font or pygame.font.SysFont("arial", 20)
        self.title_font = title_font or pygame.font.SysFont("arial", 32)

    def center_of(self, x: float, y: float) -> Tuple[int, int]:
        ox, oy = self.offset
        return (int(ox + (x + 0.5) * self.tile), int(oy + (y + 0.5) * self.tile))

    def draw(self, engine: GameEngine, now_ms: int) -> None:
        self.screen.fill(BG_COLOR)
        self._draw_maze(engine, now_ms)
        self._draw_fruit(engine)
        if engine.state.phase is Phase.DYING:
            self._draw_pacman_death(engine)
        else:
            self._draw_pacman(engine)
        for ghost in engine.ghosts:
            self._draw_ghost(engine, ghost, now_ms)
        self._draw_hud(engine)
        self._draw_overlay(engine)

    # ----- Board -----
    def _draw_maze(self, engine: GameEngine, now_ms: int) -> None:
        ox, oy = self.offset
        t = self.tile
        scale = t / 30.0
        pulse = math.sin(now_ms / 200.0) * 2 + 6
        for y, row in enumerate(engine.maze.cells):
            for x, cell in enumerate(row):
                px, py = ox + x * t, oy + y * t
                if cell is Tile.WALL:
                    rect = pygame.Rect(px + 1, py + 1, t - 2, t - 2)
                    pygame.draw.rect(self.screen, MAZE_COLOR, rect, border_radius=4)
                    pygame.draw.rect(self.screen, MAZE_EDGE_COLOR, rect, width=1, border_radius=4)
                elif cell is Tile.DOT:
                    pygame.draw.circle(self.screen, PELLET_COLOR, (px + t // 2, py + t // 2), max(2, int(3 * scale)))
                elif cell is Tile.POWER_PELLET:
                    pygame.draw.circle(self.screen, ENERGIZER_COLOR, (px + t // 2, py + t // 2), max(3, int(pulse * scale)))
                elif cell is Tile.GATE:
                    pygame.draw.rect(self.screen, GATE_COLOR, pygame.Rect(px, py + t // 2 - 2, t, 4))

    def _draw_fruit(self, engine: GameEngine) -> None:
        fruit = engine.state.fruit
        if fruit is None:
            return
        cx, cy = self.center_of(*fruit.tile)
        r = self.tile // 3
        color = FRUIT_COLORS.get(fruit.name, (255, 50, 50))
        pygame.draw.circle(self.screen, color, (cx, cy + 2), r)
        pygame.draw.line(self.screen, (74, 160, 67), (cx, cy - r + 2), (cx + r // 2, cy - r - 4), 2)

    # ----- Actors -----
    def _draw_pacman(self, engine: GameEngine) -> None:
        pac = engine.pacman
        cx, cy = self.center_of(*pac.position())
        radius = int(self.tile * 0.4)
        pygame.draw.circle(self.screen, PLAYER_COLOR, (cx, cy), radius)

        facing = _FACING.get(pac.direction, 0.0)
        mouth = math.degrees(pac.mouth_angle * math.pi)
        rad1 = math.radians(facing - mouth)
        rad2 = math.radians(facing + mouth)
        p1 = (cx + radius * math.cos(rad1), cy - radius * math.sin(rad1))
        p2 = (cx + radius * math.cos(rad2), cy - radius * math.sin(rad2))
        pygame.draw.polygon(self.screen, BG_COLOR, [(cx, cy), p1, p2])

    def _draw_pacman_death(self, engine: GameEngine) -> None:
        pac = engine.pacman
        cx, cy = self.center_of(*pac.position())
        duration = engine.rules["death_duration"] or 1.0
        progress = min(1.0, max(0.0, 1.0 - engine.state.phase_timer / duration))
        radius = int(self.tile * 0.4 * (1.0 - progress))
        if radius > 0:
            pygame.draw.circle(self.screen, PLAYER_COLOR, (cx, cy), radius)

    def _ghost_color(self, engine: GameEngine, ghost: Ghost, now_ms: int) -> Tuple[int, int, int]:
        if ghost.mode is GhostMode.FRIGHTENED:
            if engine.state.power_timer < FLASH_WINDOW and (now_ms // 200) % 2:
                return FRIGHTENED_FLASH_COLOR
            return FRIGHTENED_COLOR
        return GHOST_COLORS.get(ghost.name, (255, 0, 0))

    def _draw_ghost(self, engine: GameEngine, ghost: Ghost, now_ms: int) -> None:
        cx, cy = self.center_of(*ghost.position())
        r = int(self.tile * 0.4)
        if ghost.mode is not GhostMode.EATEN:
            color = self._ghost_color(engine, ghost, now_ms)
            pygame.draw.circle(self.screen, color, (cx, cy - 2), r)
            body = pygame.Rect(cx - r, cy - 2, r * 2, r)
            pygame.draw.rect(self.screen, color, body)
            # Wavy skirt
            waves = 3
            wave_w = (r * 2) / waves
            phase = ghost.anim_time * 5 * math.pi
            skirt = [(cx - r, cy - 2 + r)]
            for i in range(waves + 1):
                sx = cx - r + i * wave_w
                sy = cy - 2 + r + math.sin(phase + i) * 3
                skirt.append((sx, sy))
            skirt.append((cx + r, cy - 2 + r))
            pygame.draw.polygon(self.screen, color, skirt)
            if ghost.mode is GhostMode.FRIGHTENED:
                self._draw_frightened_face(cx, cy)
                return
        self._draw_eyes(cx, cy, ghost.direction)

    def _draw_eyes(self, cx: int, cy: int, direction: Direction) -> None:
        er = max(2, self.tile // 8)
        pr = max(1, er // 2)
        for ex in (cx - er - 1, cx + er + 1):
            pygame.draw.circle(self.screen, EYE_WHITE, (ex, cy - 3), er)
            pygame.draw.circle(self.screen, PUPIL_COLOR, (ex + direction.dx * pr, cy - 3 + direction.dy * pr), pr)

    def _draw_frightened_face(self, cx: int, cy: int) -> None:
        pygame.draw.rect(self.screen, EYE_WHITE, pygame.Rect(cx - 7, cy - 5, 4, 4))
        pygame.draw.rect(self.screen, EYE_WHITE, pygame.Rect(cx + 3, cy - 5, 4, 4))
        mouth = [(cx - 8 + i * 4, cy + 4 + int(math.sin(i * math.pi / 2) * 2)) for i in range(5)]
        pygame.draw.lines(self.screen, EYE_WHITE, False, mouth, 2)

    # ----- HUD -----
    def _draw_hud(self, engine: GameEngine) -> None:
        s = engine.state
        ox, oy = self.offset
        board_w = engine.maze.cols * self.tile
        top = max(4, oy - 40)

        score = self.font.render(f"SCORE {format_score(s.score)}", True, HUD_COLOR)
        high = self.font.render(f"HIGH {format_score(s.high_score)}", True, HUD_ACCENT)
        level = self.font.render(f"LEVEL {s.level}", True, HUD_COLOR)
        self.screen.blit(score, (ox, top))
        self.screen.blit(high, (ox + board_w // 2 - high.get_width() // 2, top))
        self.screen.blit(level, (ox + board_w - level.get_width(), top))

        # Lives as small Pac-Man icons under the board
        base_y = oy + engine.maze.rows * self.tile + 16
        icon_r = max(5, self.tile // 3)
        for i in range(s.lives):
            icx = ox + icon_r + i * (icon_r * 2 + 6)
            pygame.draw.circle(self.screen, PLAYER_COLOR, (icx, base_y), icon_r)
            pygame.draw.polygon(
                self.screen,
                BG_COLOR,
                [(icx, base_y), (icx + icon_r, base_y - icon_r // 2), (icx + icon_r, base_y + icon_r // 2)],
            )

        if s.power_mode:
            power = self.font.render(f"POWER {max(0.0, s.power_timer):.1f}", True, FRIGHTENED_FLASH_COLOR)
            self.screen.blit(power, (ox + board_w - power.get_width(), base_y - power.get_height() // 2))

    def _draw_overlay(self, engine: GameEngine) -> None:
        s = engine.state
        if s.paused:
            lines = ["Paused", "Press Space or P to resume"]
        elif s.phase is Phase.GAME_OVER:
            lines = ["Game Over", f"Score: {s.score}"]
            if s.new_high_score:
                lines.append("New high score!")
            lines.append("Press Enter to play again")
        elif s.phase is Phase.LEVEL_COMPLETE:
            lines = [f"Level {s.level} Complete!"]
        else:
            return

        w, h = self.screen.get_size()
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        self.screen.blit(overlay, (0, 0))

        title = self.title_font.render(lines[0], True, HUD_ACCENT)
        y = h // 2 - 60
        self.screen.blit(title, (w // 2 - title.get_width() // 2, y))
        y += title.get_height() + 12
        for line in lines[1:]:
            surf = self.font.render(line, True, HUD_COLOR)
            self.screen.blit(surf, (w // 2 - surf.get_width() // 2, y))
            y += surf.get_height() + 6

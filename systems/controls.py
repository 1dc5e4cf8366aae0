from __future__ import annotations
from typing import List, Optional, Tuple
import pygame

from systems.entities import Direction

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)
SOUND_KEY = pygame.K_m

SWIPE_THRESHOLD = 30

def key_direction(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)

def swipe_direction(start: Tuple[float, float], end: Tuple[float, float], threshold: float = SWIPE_THRESHOLD) -> Optional[Direction]:
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class SwipeTracker:
    """Turns a press/release pair (mouse or finger) into a direction."""

    def __init__(self, threshold: float = SWIPE_THRESHOLD):
        self.threshold = threshold
        self.origin: Optional[Tuple[float, float]] = None

    def begin(self, pos: Tuple[float, float]) -> None:
        self.origin = pos

    def end(self, pos: Tuple[float, float]) -> Optional[Direction]:
        if self.origin is None:
            return None
        start, self.origin = self.origin, None
        return swipe_direction(start, pos, self.threshold)


class DirectionPad:
    """Four on-screen arrow buttons laid out as a plus sign."""

    def __init__(self, center: Tuple[int, int], button: int = 48, gap: int = 4):
        cx, cy = center
        step = button + gap
        half = button // 2
        self.buttons: List[Tuple[Direction, pygame.Rect]] = [
            (Direction.UP, pygame.Rect(cx - half, cy - step - half, button, button)),
            (Direction.LEFT, pygame.Rect(cx - step - half, cy - half, button, button)),
            (Direction.DOWN, pygame.Rect(cx - half, cy + step - half, button, button)),
            (Direction.RIGHT, pygame.Rect(cx + step - half, cy - half, button, button)),
        ]

    def hit(self, pos: Tuple[int, int]) -> Optional[Direction]:
        for direction, rect in self.buttons:
            if rect.collidepoint(pos):
                return direction
        return None

    def draw(self, screen: pygame.Surface, active: Optional[Direction] = None) -> None:
        for direction, rect in self.buttons:
            hovered = direction is active
            fill = (70, 80, 120) if hovered else (40, 45, 85)
            border = (255, 255, 255) if hovered else (140, 150, 190)
            pygame.draw.rect(screen, fill, rect, border_radius=8)
            pygame.draw.rect(screen, border, rect, width=2, border_radius=8)
            cx, cy = rect.center
            r = rect.width // 4
            tip = (cx + direction.dx * r, cy + direction.dy * r)
            # Perpendicular base of the arrow head.
            px, py = -direction.dy, direction.dx
            base = (cx - direction.dx * r, cy - direction.dy * r)
            pygame.draw.polygon(
                screen,
                (255, 255, 255),
                [tip, (base[0] + px * r, base[1] + py * r), (base[0] - px * r, base[1] - py * r)],
            )

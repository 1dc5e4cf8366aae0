from __future__ import annotations
from dataclasses import dataclass
import math
from enum import Enum
from typing import Tuple

Vec2 = Tuple[int, int]

# Tolerance on ``progress`` for "standing on a tile centre".
EPSILON = 1e-6


class Direction(Enum):
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.NONE: Direction.NONE,
}

# Enumeration order doubles as the ghost AI's tie-break order.
MOVES = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)


class GhostMode(Enum):
    HOUSE = "house"
    SCATTER = "scatter"
    CHASE = "chase"
    FRIGHTENED = "frightened"
    EATEN = "eaten"


class GhostEvent(Enum):
    RELEASED = "released"
    WAVE_CHANGED = "wave_changed"
    POWER_PELLET = "power_pellet"
    POWER_EXPIRED = "power_expired"
    EATEN = "eaten"
    REACHED_HOME = "reached_home"
    RESET = "reset"


def transition(mode: GhostMode, event: GhostEvent, wave: GhostMode) -> GhostMode:
    """Next ghost mode after ``event``; ``wave`` is the current global scatter/chase mode.

    Events that make no sense for the current mode leave it unchanged.
    """
    if event is GhostEvent.RESET:
        return GhostMode.HOUSE
    if mode is GhostMode.HOUSE:
        return wave if event is GhostEvent.RELEASED else mode
    if mode in (GhostMode.SCATTER, GhostMode.CHASE):
        if event is GhostEvent.WAVE_CHANGED:
            return wave
        if event is GhostEvent.POWER_PELLET:
            return GhostMode.FRIGHTENED
        return mode
    if mode is GhostMode.FRIGHTENED:
        if event is GhostEvent.POWER_EXPIRED:
            return wave
        if event is GhostEvent.EATEN:
            return GhostMode.EATEN
        return mode
    if mode is GhostMode.EATEN and event is GhostEvent.REACHED_HOME:
        return GhostMode.HOUSE
    return mode


@dataclass
class Actor:
    x: int
    y: int
    speed: float = 0.0
    direction: Direction = Direction.NONE
    next_direction: Direction = Direction.NONE
    from_x: int = 0
    from_y: int = 0
    # Fraction of the edge from (from_x, from_y) to (x, y) already travelled; 1.0 means centred on (x, y).
    progress: float = 1.0
    start: Vec2 = (0, 0)

    def __post_init__(self):
        self.from_x, self.from_y = self.x, self.y
        self.start = (self.x, self.y)

    @property
    def tile(self) -> Vec2:
        return (self.x, self.y)

    @property
    def from_tile(self) -> Vec2:
        return (self.from_x, self.from_y)

    @property
    def at_center(self) -> bool:
        return self.progress >= 1.0 - EPSILON

    def place(self, x: int, y: int) -> None:
        self.x, self.y = x, y
        self.from_x, self.from_y = x, y
        self.progress = 1.0

    def begin_move(self, x: int, y: int) -> None:
        self.from_x, self.from_y = self.x, self.y
        self.x, self.y = x, y
        self.progress = 0.0

    def position(self) -> Tuple[float, float]:
        """Interpolated tile coordinates (tile centres are whole numbers)."""
        if self.at_center:
            return (float(self.x), float(self.y))
        t = self.progress
        return (
            self.from_x + (self.x - self.from_x) * t,
            self.from_y + (self.y - self.from_y) * t,
        )

    def reverse(self) -> None:
        self.direction = self.direction.opposite
        if not self.at_center:
            self.x, self.from_x = self.from_x, self.x
            self.y, self.from_y = self.from_y, self.y
            self.progress = 1.0 - self.progress

    def reset(self) -> None:
        self.place(*self.start)
        self.direction = Direction.NONE
        self.next_direction = Direction.NONE


@dataclass
class PacMan(Actor):
    anim_time: float = 0.0

    @property
    def mouth_angle(self) -> float:
        """Half-opening of the mouth as a fraction of pi."""
        if self.direction is Direction.NONE:
            return 0.2
        return abs(math.sin(self.anim_time * 15 * math.pi)) * 0.3 + 0.05

    def reset(self) -> None:
        super().reset()
        self.anim_time = 0.0


@dataclass
class Ghost(Actor):
    name: str = "blinky"
    scatter_target: Vec2 = (0, 0)
    home: Vec2 = (0, 0)
    mode: GhostMode = GhostMode.HOUSE
    release_delay: float = 0.0
    release_timer: float = 0.0
    anim_time: float = 0.0

    def apply(self, event: GhostEvent, wave: GhostMode) -> GhostMode:
        self.mode = transition(self.mode, event, wave)
        return self.mode

    @property
    def active(self) -> bool:
        """Whether the ghost can touch Pac-Man."""
        return self.mode not in (GhostMode.HOUSE, GhostMode.EATEN)

    def reset(self) -> None:
        super().reset()
        self.mode = GhostMode.HOUSE
        self.release_timer = self.release_delay
        self.anim_time = 0.0

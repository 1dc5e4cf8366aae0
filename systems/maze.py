"""
Maze grid: a fixed tile array with dot bookkeeping and the horizontal tunnel.

Layout legend::

    #  wall          .  dot           o  power pellet
    -  ghost gate       (space) empty
"""

from __future__ import annotations
from collections import deque
from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from systems.collision import point_in_grid

Vec2 = Tuple[int, int]

MAZE_LAYOUT = [
    "###################",
    "#........#........#",
    "#o##.###.#.###.##o#",
    "#.................#",
    "#.##.#.#####.#.##.#",
    "#....#...#...#....#",
    "####.###.#.###.####",
    "####.#       #.####",
    "####.# ##-## #.####",
    "    .. #   # ..    ",
    "####.# ##### #.####",
    "####.#       #.####",
    "####.# ##### #.####",
    "#........#........#",
    "#.##.###. .###.##.#",
    "#o.#....# #....#.o#",
    "##.#.#.##.##.#.#.##",
    "#....#.......#....#",
    "#.######.#.######.#",
    "#.................#",
    "###################",
]

PACMAN_START: Vec2 = (9, 15)
GHOST_EXIT: Vec2 = (9, 7)
GHOST_HOME: Vec2 = (9, 9)
FRUIT_TILE: Vec2 = (9, 11)


class Tile(Enum):
    WALL = "#"
    EMPTY = " "
    DOT = "."
    POWER_PELLET = "o"
    GATE = "-"


class Maze:
    def __init__(self, layout: Sequence[str] = MAZE_LAYOUT, start: Vec2 = PACMAN_START):
        if not layout or not layout[0]:
            raise ValueError("maze layout is empty")
        width = len(layout[0])
        if any(len(row) != width for row in layout):
            raise ValueError("maze layout rows must all have the same width")
        self.layout = list(layout)
        self.rows = len(layout)
        self.cols = width
        self.start = start
        self.cells: List[List[Tile]] = []
        self.total_dots = 0
        self.dots_remaining = 0
        self.reset()

    def reset(self) -> None:
        self.cells = [[Tile(ch) for ch in row] for row in self.layout]
        if not self.is_walkable(*self.start):
            raise ValueError(f"start tile {self.start} is not walkable")
        # Dots Pac-Man can never reach would make the level unclearable.
        reachable = self.reachable_from(self.start)
        for y, row in enumerate(self.cells):
            for x, tile in enumerate(row):
                if tile in (Tile.DOT, Tile.POWER_PELLET) and (x, y) not in reachable:
                    row[x] = Tile.EMPTY
        self.total_dots = sum(
            1 for row in self.cells for tile in row if tile in (Tile.DOT, Tile.POWER_PELLET)
        )
        self.dots_remaining = self.total_dots

    def get(self, x: int, y: int) -> Tile:
        if not point_in_grid((x, y), (self.cols, self.rows)):
            return Tile.WALL
        return self.cells[y][x]

    def is_walkable(self, x: int, y: int, through_gate: bool = False) -> bool:
        tile = self.get(x, y)
        if tile is Tile.GATE:
            return through_gate
        return tile is not Tile.WALL

    def step(self, x: int, y: int, dx: int, dy: int) -> Optional[Vec2]:
        """Neighbouring tile in a direction, wrapping horizontally; ``None`` off the top/bottom."""
        nx, ny = x + dx, y + dy
        if not 0 <= ny < self.rows:
            return None
        return (nx % self.cols, ny)

    def collect(self, x: int, y: int) -> Optional[Tile]:
        tile = self.get(x, y)
        if tile not in (Tile.DOT, Tile.POWER_PELLET):
            return None
        self.cells[y][x] = Tile.EMPTY
        self.dots_remaining -= 1
        return tile

    def tiles_of(self, *kinds: Tile) -> List[Vec2]:
        return [
            (x, y)
            for y, row in enumerate(self.cells)
            for x, tile in enumerate(row)
            if tile in kinds
        ]

    def neighbors(self, node: Vec2, through_gate: bool = False) -> List[Vec2]:
        x, y = node
        out = []
        for dx, dy in ((0, -1), (-1, 0), (0, 1), (1, 0)):
            nxt = self.step(x, y, dx, dy)
            if nxt is not None and self.is_walkable(*nxt, through_gate=through_gate):
                out.append(nxt)
        return out

    def reachable_from(self, start: Vec2, through_gate: bool = False) -> Set[Vec2]:
        visited: Set[Vec2] = set()
        queue = deque([start])
        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            for nxt in self.neighbors(node, through_gate=through_gate):
                if nxt not in visited:
                    queue.append(nxt)
        return visited

from __future__ import annotations
import random
from heapq import heappush, heappop
from typing import Dict, List, Tuple, Optional, Sequence

from systems.entities import Direction, Ghost, GhostMode, MOVES, PacMan
from systems.maze import Maze

Node = Tuple[int, int]

# Clyde gives up the chase inside this many tiles.
CLYDE_SHY_DISTANCE = 8
PINKY_LOOKAHEAD = 4
INKY_LOOKAHEAD = 2

def heuristic(a: Node, b: Node) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

def astar(start: Node, goal: Node, maze: Maze, through_gate: bool = False) -> Optional[List[Node]]:
    open_set: List[Tuple[int, Node]] = []
    heappush(open_set, (0, start))
    came_from: Dict[Node, Optional[Node]] = {start: None}
    g_score: Dict[Node, int] = {start: 0}

    while open_set:
        _, current = heappop(open_set)
        if current == goal:
            path: List[Node] = []
            while current:
                path.append(current)
                current = came_from[current]
            return list(reversed(path))

        for nxt in maze.neighbors(current, through_gate=through_gate):
            tentative = g_score[current] + 1
            if tentative < g_score.get(nxt, 1_000_000):
                came_from[nxt] = current
                g_score[nxt] = tentative
                f_score = tentative + heuristic(nxt, goal)
                heappush(open_set, (f_score, nxt))
    return None

def direction_between(maze: Maze, a: Node, b: Node) -> Direction:
    for d in MOVES:
        if maze.step(a[0], a[1], d.dx, d.dy) == b:
            return d
    return Direction.NONE

def direction_towards(maze: Maze, start: Node, goal: Node, through_gate: bool = False) -> Direction:
    """First step of the shortest path from ``start`` to ``goal``, or NONE if already there or cut off."""
    path = astar(start, goal, maze, through_gate=through_gate)
    if not path or len(path) < 2:
        return Direction.NONE
    return direction_between(maze, path[0], path[1])

def legal_moves(maze: Maze, ghost: Ghost, through_gate: bool = False) -> List[Direction]:
    """Non-reversing open directions; the reversal only when it is the sole way out."""
    reverse = ghost.direction.opposite
    moves = []
    for d in MOVES:
        if d is reverse:
            continue
        nxt = maze.step(ghost.x, ghost.y, d.dx, d.dy)
        if nxt is not None and maze.is_walkable(*nxt, through_gate=through_gate):
            moves.append(d)
    if not moves and reverse is not Direction.NONE:
        nxt = maze.step(ghost.x, ghost.y, reverse.dx, reverse.dy)
        if nxt is not None and maze.is_walkable(*nxt, through_gate=through_gate):
            moves.append(reverse)
    return moves

def chase_target(ghost: Ghost, pacman: PacMan, ghosts: Sequence[Ghost]) -> Node:
    p = pacman.tile
    d = pacman.direction
    if ghost.name == "pinky":
        return (p[0] + PINKY_LOOKAHEAD * d.dx, p[1] + PINKY_LOOKAHEAD * d.dy)
    if ghost.name == "inky":
        blinky = next((g for g in ghosts if g.name == "blinky"), ghost)
        pivot = (p[0] + INKY_LOOKAHEAD * d.dx, p[1] + INKY_LOOKAHEAD * d.dy)
        return (2 * pivot[0] - blinky.x, 2 * pivot[1] - blinky.y)
    if ghost.name == "clyde":
        return p if heuristic(ghost.tile, p) > CLYDE_SHY_DISTANCE else ghost.scatter_target
    return p

def ghost_target(ghost: Ghost, pacman: PacMan, ghosts: Sequence[Ghost]) -> Tuple[Node, bool]:
    """Target tile for the current mode and whether to run away from it."""
    if ghost.mode is GhostMode.FRIGHTENED:
        return pacman.tile, True
    if ghost.mode is GhostMode.SCATTER:
        return ghost.scatter_target, False
    return chase_target(ghost, pacman, ghosts), False

def choose_direction(
    maze: Maze,
    ghost: Ghost,
    target: Node,
    flee: bool = False,
    rng: Optional[random.Random] = None,
    random_turn_chance: float = 0.0,
) -> Direction:
    options = legal_moves(maze, ghost)
    if not options:
        return Direction.NONE
    ranked = []
    for order, d in enumerate(options):
        nxt = maze.step(ghost.x, ghost.y, d.dx, d.dy)
        dist = heuristic(nxt, target)
        ranked.append((-dist if flee else dist, order, d))
    ranked.sort(key=lambda item: (item[0], item[1]))
    if random_turn_chance > 0 and len(ranked) > 1:
        roll = (rng or random).random()
        if roll < random_turn_chance:
            return ranked[1][2]
    return ranked[0][2]

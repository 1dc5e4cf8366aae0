"""
Fixed-step Pac-Man simulation.

``GameEngine`` owns every piece of mutable game state: the maze, the actors and
the ``GameState`` scalars. A frame driver calls ``tick(dt)`` with wall-clock
time; the engine slices it into fixed steps and runs the rules on each. Input
only ever stages ``PacMan.next_direction`` through ``set_direction`` and is
consumed at the next tile centre.

Two movement models are supported, selected by the ``movement`` rule:

* ``smooth``: 60 steps a second, every actor travels ``speed * dt`` tiles per
  step with sub-tile interpolation.
* ``tile``: one step every ``step_interval`` seconds, Pac-Man moves exactly one
  tile per step and ghosts move one tile on alternate steps.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from systems import ai
from systems.collision import actors_collide
from systems.entities import EPSILON, Actor, Direction, Ghost, GhostEvent, GhostMode, PacMan
from systems.maze import FRUIT_TILE, GHOST_EXIT, GHOST_HOME, MAZE_LAYOUT, PACMAN_START, Maze, Tile, Vec2
from systems.rules import get_rules
from systems.scoring import DOT_POINTS, PELLET_POINTS, extra_lives_earned, fruit_for_level, ghost_bonus

SMOOTH_STEP = 1.0 / 60.0
# Longest slice of wall-clock time accepted per tick; a stalled frame must not replay seconds of play.
MAX_FRAME = 0.25

GHOST_STARTS: Dict[str, Vec2] = {
    "blinky": GHOST_EXIT,
    "pinky": GHOST_HOME,
    "inky": (GHOST_HOME[0] - 1, GHOST_HOME[1]),
    "clyde": (GHOST_HOME[0] + 1, GHOST_HOME[1]),
}


class Phase(Enum):
    PLAYING = "playing"
    DYING = "dying"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    DOT = "dot"
    POWER_PELLET = "power_pellet"
    EAT_GHOST = "eat_ghost"
    FRUIT = "fruit"
    EXTRA_LIFE = "extra_life"
    DEATH = "death"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


@dataclass
class Fruit:
    name: str
    points: int
    tile: Vec2
    timer: float


@dataclass
class GameState:
    score: int = 0
    high_score: int = 0
    lives: int = 3
    level: int = 1
    phase: Phase = Phase.PLAYING
    paused: bool = False
    power_mode: bool = False
    power_timer: float = 0.0
    ghost_streak: int = 0
    wave_mode: GhostMode = GhostMode.SCATTER
    wave_timer: float = 0.0
    phase_timer: float = 0.0
    dots_eaten: int = 0
    fruit: Optional[Fruit] = None
    new_high_score: bool = False
    events: List[GameEvent] = field(default_factory=list)

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


def scatter_corner(name: str, cols: int, rows: int) -> Vec2:
    return {
        "blinky": (cols - 2, 1),
        "pinky": (1, 1),
        "inky": (cols - 2, rows - 2),
        "clyde": (1, rows - 2),
    }.get(name, (cols // 2, 1))


class GameEngine:
    def __init__(
        self,
        rules: Optional[Dict[str, Any]] = None,
        store=None,
        rng: Optional[random.Random] = None,
        layout: Sequence[str] = MAZE_LAYOUT,
    ):
        self.rules: Dict[str, Any] = dict(rules if rules is not None else get_rules("pac_man").data)
        self.store = store
        self.rng = rng or random.Random()
        self.tile_mode = self.rules["movement"] == "tile"
        self.maze = Maze(layout, start=PACMAN_START)
        self.pacman = PacMan(*PACMAN_START)
        self.ghosts: List[Ghost] = self._make_ghosts()
        self.ghost_speed = 0.0
        self.state = GameState()
        self.accumulator = 0.0
        self.step_count = 0
        self._stored_high_score = 0
        self.restart()

    def _make_ghosts(self) -> List[Ghost]:
        delays = self.rules["ghost_release_delays"]
        ghosts = []
        for idx, name in enumerate(self.rules["ghost_names"]):
            x, y = GHOST_STARTS.get(name, GHOST_HOME)
            ghost = Ghost(
                x,
                y,
                name=name,
                scatter_target=scatter_corner(name, self.maze.cols, self.maze.rows),
                home=GHOST_HOME,
                release_delay=delays[idx] if idx < len(delays) else delays[-1],
            )
            ghost.reset()
            ghosts.append(ghost)
        return ghosts

    # ----- Lifecycle -----
    def restart(self) -> None:
        self._stored_high_score = self._load_high_score()
        self.state = GameState(lives=self.rules["lives"], high_score=self._stored_high_score)
        self.maze.reset()
        self._apply_level_speeds()
        self._reset_actors()

    def _load_high_score(self) -> int:
        if self.store is None:
            return 0
        return self.store.load()

    def _reset_actors(self) -> None:
        s = self.state
        self.pacman.reset()
        for ghost in self.ghosts:
            ghost.reset()
        s.power_mode = False
        s.power_timer = 0.0
        s.ghost_streak = 0
        s.wave_mode = GhostMode.SCATTER
        s.wave_timer = 0.0
        s.fruit = None
        self.accumulator = 0.0

    def _apply_level_speeds(self) -> None:
        r = self.rules
        lvl = self.state.level - 1
        self.pacman.speed = min(
            r.get("pacman_speed", 0.0) + r.get("pacman_speed_per_level", 0.0) * lvl,
            r.get("pacman_speed_max", float("inf")),
        )
        self.ghost_speed = min(
            r.get("ghost_speed", 0.0) + r.get("ghost_speed_per_level", 0.0) * lvl,
            r.get("ghost_speed_max", float("inf")),
        )

    @property
    def step_length(self) -> float:
        if not self.tile_mode:
            return SMOOTH_STEP
        r = self.rules
        return max(r["step_interval_min"], r["step_interval"] - r["step_interval_per_level"] * (self.state.level - 1))

    # ----- Input -----
    def set_direction(self, direction: Direction) -> None:
        self.pacman.next_direction = direction

    def toggle_pause(self) -> None:
        if self.state.phase is Phase.GAME_OVER:
            return
        self.state.paused = not self.state.paused
        self.accumulator = 0.0

    # ----- Scheduler -----
    def tick(self, dt: float) -> List[GameEvent]:
        """Advance by ``dt`` seconds of wall-clock time; returns the events raised meanwhile."""
        s = self.state
        s.events = []
        if s.paused or s.phase is Phase.GAME_OVER:
            return s.events
        self.accumulator += min(max(dt, 0.0), MAX_FRAME)
        step = self.step_length
        while self.accumulator >= step - EPSILON:
            self.accumulator -= step
            self._step(step)
            if s.phase is Phase.GAME_OVER:
                self.accumulator = 0.0
                break
            step = self.step_length
        return s.events

    def _step(self, dt: float) -> None:
        s = self.state
        self.step_count += 1
        if s.phase is Phase.DYING:
            s.phase_timer -= dt
            if s.phase_timer <= 0:
                s.phase = Phase.PLAYING
                self._reset_actors()
            return
        if s.phase is Phase.LEVEL_COMPLETE:
            s.phase_timer -= dt
            if s.phase_timer <= 0:
                self._next_level()
            return

        self._update_timers(dt)
        self._move_pacman(dt)
        if s.phase is not Phase.PLAYING:
            return
        self._check_collisions()
        if s.phase is not Phase.PLAYING:
            return
        self._move_ghosts(dt)
        self._check_collisions()

    def _update_timers(self, dt: float) -> None:
        s = self.state
        if s.power_mode:
            s.power_timer -= dt
            if s.power_timer <= 0:
                self._end_power()
        else:
            s.wave_timer += dt
            limit = self.rules["scatter_duration"] if s.wave_mode is GhostMode.SCATTER else self.rules["chase_duration"]
            if s.wave_timer >= limit:
                s.wave_mode = GhostMode.CHASE if s.wave_mode is GhostMode.SCATTER else GhostMode.SCATTER
                s.wave_timer = 0.0
                for ghost in self.ghosts:
                    ghost.apply(GhostEvent.WAVE_CHANGED, s.wave_mode)

        if s.fruit is not None:
            s.fruit.timer -= dt
            if s.fruit.timer <= 0:
                s.fruit = None

        if self.pacman.direction is not Direction.NONE:
            self.pacman.anim_time += dt
        for ghost in self.ghosts:
            ghost.anim_time += dt
            if ghost.mode is GhostMode.HOUSE and ghost.release_timer > 0:
                ghost.release_timer = max(0.0, ghost.release_timer - dt)

    # ----- Movement -----
    def _advance(
        self,
        actor: Actor,
        budget: float,
        decide: Callable[[Actor], Direction],
        arrive: Callable[[Actor], None],
        through_gate: Callable[[Actor], bool],
    ) -> None:
        while budget > EPSILON:
            if not actor.at_center:
                travel = min(budget, 1.0 - actor.progress)
                actor.progress += travel
                budget -= travel
                if actor.at_center:
                    actor.progress = 1.0
                    arrive(actor)
                    if self.state.phase is not Phase.PLAYING:
                        return
                continue

            direction = decide(actor)
            actor.direction = direction
            if direction is Direction.NONE:
                return
            nxt = self.maze.step(actor.x, actor.y, direction.dx, direction.dy)
            if nxt is None or not self.maze.is_walkable(*nxt, through_gate=through_gate(actor)):
                actor.direction = Direction.NONE
                return
            if abs(nxt[0] - actor.x) > 1:
                # Tunnel: reappear on the opposite edge at once.
                actor.place(*nxt)
                arrive(actor)
                return
            actor.begin_move(*nxt)

    def _is_open(self, actor: Actor, direction: Direction, through_gate: bool = False) -> bool:
        if direction is Direction.NONE:
            return False
        nxt = self.maze.step(actor.x, actor.y, direction.dx, direction.dy)
        return nxt is not None and self.maze.is_walkable(*nxt, through_gate=through_gate)

    def _move_pacman(self, dt: float) -> None:
        budget = 1.0 if self.tile_mode else self.pacman.speed * dt
        self._advance(self.pacman, budget, self._pacman_turn, self._pacman_arrived, lambda _: False)

    def _pacman_turn(self, pacman: PacMan) -> Direction:
        wanted = pacman.next_direction
        if wanted is not Direction.NONE and self._is_open(pacman, wanted):
            pacman.direction = wanted
            pacman.next_direction = Direction.NONE
        if not self._is_open(pacman, pacman.direction):
            return Direction.NONE
        return pacman.direction

    def _move_ghosts(self, dt: float) -> None:
        stagger = self.rules.get("ghost_stagger", False)
        for idx, ghost in enumerate(self.ghosts):
            if ghost.mode is GhostMode.HOUSE and ghost.release_timer > 0:
                continue
            if self.tile_mode:
                if stagger and idx % 2 != self.step_count % 2:
                    continue
                budget = 1.0
            else:
                budget = self._ghost_speed(ghost) * dt
            self._advance(ghost, budget, self._ghost_turn, self._ghost_arrived, self._ghost_uses_gate)

    def _ghost_speed(self, ghost: Ghost) -> float:
        if ghost.mode is GhostMode.FRIGHTENED:
            return self.rules["frightened_speed"]
        if ghost.mode is GhostMode.EATEN:
            return self.rules["eaten_speed"]
        return self.ghost_speed

    @staticmethod
    def _ghost_uses_gate(ghost: Ghost) -> bool:
        return ghost.mode in (GhostMode.HOUSE, GhostMode.EATEN)

    def _ghost_turn(self, ghost: Ghost) -> Direction:
        s = self.state
        if ghost.mode is GhostMode.HOUSE:
            if ghost.release_timer > 0:
                return Direction.NONE
            if ghost.tile != GHOST_EXIT:
                return ai.direction_towards(self.maze, ghost.tile, GHOST_EXIT, through_gate=True)
            ghost.apply(GhostEvent.RELEASED, s.wave_mode)
        if ghost.mode is GhostMode.EATEN:
            return ai.direction_towards(self.maze, ghost.tile, ghost.home, through_gate=True)
        target, flee = ai.ghost_target(ghost, self.pacman, self.ghosts)
        return ai.choose_direction(
            self.maze,
            ghost,
            target,
            flee=flee,
            rng=self.rng,
            random_turn_chance=self.rules["random_turn_chance"],
        )

    def _ghost_arrived(self, ghost: Ghost) -> None:
        if ghost.mode is GhostMode.EATEN and ghost.tile == ghost.home:
            self._send_home(ghost)

    def _send_home(self, ghost: Ghost) -> None:
        ghost.place(*ghost.home)
        ghost.direction = Direction.NONE
        ghost.apply(GhostEvent.REACHED_HOME, self.state.wave_mode)
        ghost.release_timer = self.rules["respawn_delay"]

    # ----- Pickups and scoring -----
    def _add_score(self, points: int) -> None:
        s = self.state
        old = s.score
        s.score += points
        gained = extra_lives_earned(old, s.score, self.rules["extra_life_every"])
        if gained:
            s.lives += gained
            s.events.append(GameEvent.EXTRA_LIFE)
        self._record_high_score()

    def _record_high_score(self) -> None:
        """Persist the score as soon as it beats the stored record, so leaving mid-run keeps it."""
        s = self.state
        if s.score > s.high_score:
            s.high_score = s.score
        if s.score <= self._stored_high_score:
            return
        s.new_high_score = True
        self._stored_high_score = s.score
        if self.store is not None:
            self.store.save(s.score)

    def _pacman_arrived(self, pacman: PacMan) -> None:
        s = self.state
        tile = self.maze.collect(pacman.x, pacman.y)
        if tile is Tile.DOT:
            s.dots_eaten += 1
            self._add_score(DOT_POINTS)
            s.events.append(GameEvent.DOT)
        elif tile is Tile.POWER_PELLET:
            s.dots_eaten += 1
            self._add_score(PELLET_POINTS)
            s.events.append(GameEvent.POWER_PELLET)
            self._start_power()

        if tile is not None:
            self._maybe_spawn_fruit()

        if s.fruit is not None and pacman.tile == s.fruit.tile:
            self._add_score(s.fruit.points)
            s.events.append(GameEvent.FRUIT)
            s.fruit = None

        if tile is not None and self.maze.dots_remaining == 0:
            self._level_complete()

    def _maybe_spawn_fruit(self) -> None:
        s = self.state
        total = self.maze.total_dots
        if s.fruit is not None or total < 3:
            return
        if s.dots_eaten in (total // 3, 2 * total // 3):
            name, points = fruit_for_level(s.level)
            s.fruit = Fruit(name, points, FRUIT_TILE, self.rules["fruit_duration"])

    def _start_power(self) -> None:
        s = self.state
        s.power_mode = True
        s.power_timer = self.rules["power_duration"] + self.rules["power_duration_per_level"] * (s.level - 1)
        s.ghost_streak = 0
        for ghost in self.ghosts:
            if ghost.mode in (GhostMode.SCATTER, GhostMode.CHASE):
                ghost.apply(GhostEvent.POWER_PELLET, s.wave_mode)
                if ghost.direction is not Direction.NONE:
                    ghost.reverse()

    def _end_power(self) -> None:
        s = self.state
        s.power_mode = False
        s.power_timer = 0.0
        s.ghost_streak = 0
        for ghost in self.ghosts:
            ghost.apply(GhostEvent.POWER_EXPIRED, s.wave_mode)

    # ----- Collisions -----
    def _check_collisions(self) -> None:
        for ghost in self.ghosts:
            if not ghost.active:
                continue
            if not actors_collide(
                self.pacman,
                ghost,
                self.rules["collision"],
                self.rules["collision_threshold"],
                self.maze.cols,
            ):
                continue
            if ghost.mode is GhostMode.FRIGHTENED:
                self._eat_ghost(ghost)
            else:
                self._lose_life()
                return

    def _eat_ghost(self, ghost: Ghost) -> None:
        s = self.state
        points = ghost_bonus(s.ghost_streak, self.rules["ghost_scoring"])
        s.ghost_streak += 1
        self._add_score(points)
        s.events.append(GameEvent.EAT_GHOST)
        ghost.apply(GhostEvent.EATEN, s.wave_mode)
        if self.rules["eaten_ghost"] == "teleport":
            self._send_home(ghost)

    def _lose_life(self) -> None:
        s = self.state
        s.lives -= 1
        s.events.append(GameEvent.DEATH)
        self.pacman.direction = Direction.NONE
        self.pacman.next_direction = Direction.NONE
        if s.lives <= 0:
            s.lives = 0
            self._game_over()
        else:
            s.phase = Phase.DYING
            s.phase_timer = self.rules["death_duration"]

    def _game_over(self) -> None:
        s = self.state
        if s.phase is Phase.GAME_OVER:
            return
        s.phase = Phase.GAME_OVER
        s.power_mode = False
        s.events.append(GameEvent.GAME_OVER)
        self._record_high_score()

    # ----- Levels -----
    def _level_complete(self) -> None:
        s = self.state
        s.phase = Phase.LEVEL_COMPLETE
        s.phase_timer = self.rules["level_clear_delay"]
        s.events.append(GameEvent.LEVEL_COMPLETE)
        bonus = self.rules["level_clear_bonus"] * s.level
        if bonus:
            self._add_score(bonus)

    def _next_level(self) -> None:
        s = self.state
        s.level += 1
        s.dots_eaten = 0
        s.phase = Phase.PLAYING
        self.maze.reset()
        self._apply_level_speeds()
        self._reset_actors()

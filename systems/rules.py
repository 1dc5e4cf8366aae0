from dataclasses import dataclass, field
from typing import Dict, Any

@dataclass
class GameRuleSet:
    name: str
    data: Dict[str, Any] = field(default_factory=dict)

# Speeds are in tiles per second.
_COMMON = {
    "lives": 3,
    "ghost_names": ("blinky", "pinky", "inky", "clyde"),
    "ghost_release_delays": (0.0, 2.0, 4.0, 6.0),
    "scatter_duration": 7.0,
    "chase_duration": 20.0,
    "power_duration": 8.0,
    "power_duration_per_level": 0.0,
    "respawn_delay": 1.0,
    "death_duration": 1.0,
    "level_clear_delay": 1.0,
    "level_clear_bonus": 0,
    "fruit_duration": 10.0,
    "extra_life_every": 10_000,
    "ghost_scoring": "escalating",
    "random_turn_chance": 0.0,
}

DEFAULT_RULES = {
    "pac_man": GameRuleSet(
        name="pac_man",
        data={
            **_COMMON,
            "movement": "smooth",
            "collision": "distance",
            "collision_threshold": 0.5,
            "eaten_ghost": "eyes",
            "pacman_speed": 7.5,
            "pacman_speed_per_level": 0.15,
            "pacman_speed_max": 9.0,
            "ghost_speed": 6.0,
            "ghost_speed_per_level": 0.3,
            "ghost_speed_max": 10.5,
            "frightened_speed": 4.5,
            "eaten_speed": 12.0,
        },
    ),
    "pac_man_classic": GameRuleSet(
        name="pac_man_classic",
        data={
            **_COMMON,
            "movement": "tile",
            "collision": "tile",
            "collision_threshold": 0.5,
            "eaten_ghost": "teleport",
            "step_interval": 0.15,
            "step_interval_per_level": 0.01,
            "step_interval_min": 0.08,
            "ghost_stagger": True,
            "power_duration": 9.0,
            "power_duration_per_level": 0.75,
            "level_clear_delay": 4.5,
            "level_clear_bonus": 1000,
            "death_duration": 3.0,
            "random_turn_chance": 0.1,
            "fruit_duration": 15.0,
        },
    ),
}

def get_rules(game: str, **overrides: Any) -> GameRuleSet:
    base = DEFAULT_RULES.get(game, GameRuleSet(name=game))
    data = dict(base.data)
    for key, value in overrides.items():
        if base.data and key not in base.data:
            raise KeyError(f"unknown rule {key!r} for {game}")
        data[key] = value
    return GameRuleSet(name=base.name, data=data)

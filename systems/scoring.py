from __future__ import annotations

DOT_POINTS = 10
PELLET_POINTS = 50
GHOST_BASE_POINTS = 200
GHOST_MAX_POINTS = 1600

# (last level, fruit, points)
FRUIT_TABLE = [
    (1, "cherry", 100),
    (2, "strawberry", 300),
    (3, "orange", 500),
    (4, "apple", 700),
    (99, "melon", 1000),
]

def ghost_bonus(streak: int, scheme: str = "escalating") -> int:
    """Points for the ghost eaten after ``streak`` others in the same power window."""
    if scheme == "flat":
        return GHOST_BASE_POINTS
    if scheme != "escalating":
        raise ValueError(f"unknown ghost scoring scheme: {scheme}")
    return min(GHOST_BASE_POINTS * 2 ** streak, GHOST_MAX_POINTS)

def fruit_for_level(level: int) -> tuple[str, int]:
    for last_level, name, points in FRUIT_TABLE:
        if level <= last_level:
            return name, points
    _, name, points = FRUIT_TABLE[-1]
    return name, points

def extra_lives_earned(old_score: int, new_score: int, every: int) -> int:
    if every <= 0:
        return 0
    return max(0, new_score // every - old_score // every)

def format_score(score: int, width: int = 6) -> str:
    return str(max(0, score)).zfill(width)

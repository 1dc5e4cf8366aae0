from __future__ import annotations
from typing import Tuple

def point_in_grid(point: Tuple[int, int], grid_size: Tuple[int, int]) -> bool:
    x, y = point
    width, height = grid_size
    return 0 <= x < width and 0 <= y < height

def same_tile(a, b) -> bool:
    return a.tile == b.tile

def swapped_tiles(a, b) -> bool:
    # Two actors that trade tiles in one step pass through each other without ever sharing one.
    return a.tile == b.from_tile and b.tile == a.from_tile and a.tile != b.tile

def within_distance(a, b, threshold: float, cols: int) -> bool:
    ax, ay = a.position()
    bx, by = b.position()
    dx = abs(ax - bx)
    dx = min(dx, cols - dx)
    return dx < threshold and abs(ay - by) < threshold

def actors_collide(a, b, geometry: str = "tile", threshold: float = 0.5, cols: int = 19) -> bool:
    if geometry == "tile":
        return same_tile(a, b) or swapped_tiles(a, b)
    if geometry == "distance":
        return within_distance(a, b, threshold, cols)
    raise ValueError(f"unknown collision geometry: {geometry}")

"""
Grid helpers - position arithmetic over the square tile space.
"""

from typing import Iterator, Tuple

from .constants import DIRECTION_ORDER

Position = Tuple[int, int]
Direction = Tuple[int, int]


def in_bounds(pos: Position, tile_count: int) -> bool:
    """True iff both coordinates lie in [0, tile_count)."""
    x, y = pos
    return 0 <= x < tile_count and 0 <= y < tile_count


def step(pos: Position, direction: Direction) -> Position:
    return (pos[0] + direction[0], pos[1] + direction[1])


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def neighbors(pos: Position, tile_count: int) -> Iterator[Tuple[Direction, Position]]:
    """Yield (direction, cell) for in-bounds neighbours in up, down, left, right order."""
    for direction in DIRECTION_ORDER:
        cell = step(pos, direction)
        if in_bounds(cell, tile_count):
            yield direction, cell


def is_opposite(a: Direction, b: Direction) -> bool:
    return a != (0, 0) and a[0] == -b[0] and a[1] == -b[1]

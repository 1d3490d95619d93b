"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, List

from .constants import NO_DIRECTION
from .grid import Direction, Position, step


class Snake:
    """
    Represents a snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        just_ate: when set, the next advance keeps the tail (growth by one)
    """

    def __init__(self, positions: Iterable[Position] = ()):
        self.positions = deque(positions)
        self.just_ate = False

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def body(self) -> List[Position]:
        """Every segment except the head."""
        return list(self.positions)[1:]

    def __len__(self) -> int:
        return len(self.positions)

    def __bool__(self) -> bool:
        return bool(self.positions)

    def occupies(self, pos: Position) -> bool:
        return pos in self.positions

    def mark_ate(self) -> None:
        self.just_ate = True

    def advance(self, direction: Direction) -> bool:
        """
        Move the snake one cell in `direction`.

        A null direction or a step back onto the second segment leaves the
        snake untouched. Returns True when the snake actually moved.
        """
        if not self.positions or direction == NO_DIRECTION:
            return False

        new_head = step(self.head, direction)
        if len(self.positions) > 1 and new_head == self.positions[1]:
            return False

        self.positions.appendleft(new_head)
        if self.just_ate:
            self.just_ate = False
        else:
            self.positions.pop()
        return True

    def __repr__(self):
        return f"<Snake len={len(self.positions)} head={self.head if self.positions else None}>"

"""
Human player - moves come from input handling, not from the snapshot.
"""

from typing import Optional, Tuple

from domain.game_state import GameSnapshot
from .base import Player


class HumanPlayer(Player):
    """
    Holds no decision logic: the session's direction is set through
    `engine.set_direction` and reused every tick.
    """

    def get_move(self, snapshot: GameSnapshot) -> Optional[Tuple[int, int]]:
        return None

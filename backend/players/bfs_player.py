"""
Computer player that chases the food with breadth-first search.
"""

from typing import Optional, Tuple

from domain.game_state import GameSnapshot
from .base import Player
from .pathfinding import ai_next_move


class BfsPlayer(Player):
    """Recomputes a shortest path to the food every tick; nothing is cached."""

    def get_move(self, snapshot: GameSnapshot) -> Optional[Tuple[int, int]]:
        return ai_next_move(
            self.own_segments(snapshot),
            self.other_segments(snapshot),
            snapshot.food,
            snapshot.tile_count,
        )

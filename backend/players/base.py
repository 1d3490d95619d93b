"""
Base player interface for the game engine.
"""

from typing import Optional, Tuple

from domain.game_state import GameSnapshot

PLAYER_SLOT = "player"
AI_SLOT = "ai"


class Player:
    """
    Base class/interface for player logic.

    Each player steers the snake in its slot ('player' or 'ai') and returns
    a move given the current snapshot.
    """

    def __init__(self, slot: str = PLAYER_SLOT):
        if slot not in (PLAYER_SLOT, AI_SLOT):
            raise ValueError(f"Unknown snake slot: {slot}")
        self.slot = slot

    def own_segments(self, snapshot: GameSnapshot):
        return snapshot.snake if self.slot == PLAYER_SLOT else snapshot.ai_snake

    def other_segments(self, snapshot: GameSnapshot):
        return snapshot.ai_snake if self.slot == PLAYER_SLOT else snapshot.snake

    def get_move(self, snapshot: GameSnapshot) -> Optional[Tuple[int, int]]:
        """
        Return a move direction given the current snapshot.

        Args:
            snapshot: Current state of the game

        Returns:
            A unit (dx, dy) vector, or None to keep the current direction
        """
        raise NotImplementedError

"""
Data access layer for the Snake Arcade.

The core engine persists exactly one value: the player's high score.
"""

from .high_score import get_high_score, set_high_score, reset_high_score

__all__ = [
    'get_high_score',
    'set_high_score',
    'reset_high_score',
]

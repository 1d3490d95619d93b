"""
Domain entities for the Snake Arcade engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, scheduling).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, NO_DIRECTION, VALID_MOVES,
    SPEED, BONUS, SLOW, POWERUP_KINDS,
    MODE_HUMAN, MODE_AI, MODE_VS, VALID_MODES,
    Outcome,
)
from .config import GameConfig
from .snake import Snake
from .powerup import PowerUp, ActivePower
from .game_state import GameSnapshot, TickResult

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'NO_DIRECTION', 'VALID_MOVES',
    'SPEED', 'BONUS', 'SLOW', 'POWERUP_KINDS',
    'MODE_HUMAN', 'MODE_AI', 'MODE_VS', 'VALID_MODES',
    'Outcome',
    'GameConfig',
    'Snake',
    'PowerUp',
    'ActivePower',
    'GameSnapshot',
    'TickResult',
]

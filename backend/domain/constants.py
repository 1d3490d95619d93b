"""
Game constants for the Snake Arcade engine.
"""

from enum import Enum

# Movement directions as (dx, dy) unit vectors; rows grow downward
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
NO_DIRECTION = (0, 0)

# Fixed expansion order used by the pathfinder for deterministic tie-breaking
DIRECTION_ORDER = (UP, DOWN, LEFT, RIGHT)
VALID_MOVES = set(DIRECTION_ORDER)

# Power-up kinds
SPEED = "speed"
BONUS = "bonus"
SLOW = "slow"
POWERUP_KINDS = (SPEED, BONUS, SLOW)

# Cumulative thresholds on a uniform [0, 1) draw
POWERUP_WEIGHTS = ((0.55, SPEED), (0.85, SLOW), (1.0, BONUS))

# Game modes
MODE_HUMAN = "human"
MODE_AI = "ai"
MODE_VS = "vs"
VALID_MODES = {MODE_HUMAN, MODE_AI, MODE_VS}


class Outcome(str, Enum):
    """Winner of a finished round; None on the session means no winner."""

    PLAYER_WON = "PLAYER"
    AI_WON = "AI"
    TIE = "TIE"

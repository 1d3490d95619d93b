"""
Player implementations for the Snake Arcade engine.

This module contains the player abstractions and implementations
that control snake movement decisions.
"""

from .base import Player, PLAYER_SLOT, AI_SLOT
from .human_player import HumanPlayer
from .bfs_player import BfsPlayer
from .pathfinding import ai_next_move
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'PLAYER_SLOT',
    'AI_SLOT',
    'HumanPlayer',
    'BfsPlayer',
    'ai_next_move',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]

"""
Registry for player implementations.

Maps controller keys (e.g., 'human', 'bfs') to player classes so the CLI and
API can choose who steers each snake slot by name.
"""

from typing import Dict, Type

from .base import Player
from .bfs_player import BfsPlayer
from .human_player import HumanPlayer


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "human": HumanPlayer,
    "bfs": BfsPlayer,
}

AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant: str) -> Type[Player]:
    """
    Get the player class for a given controller key.

    Raises:
        ValueError: If the key is not registered
    """
    try:
        return PLAYER_VARIANTS[variant]
    except KeyError:
        raise ValueError(
            f"Unknown player variant '{variant}'. Available: {AVAILABLE_VARIANTS}"
        ) from None


def list_variants() -> Dict[str, str]:
    """Return the registered controllers with the first line of their docstrings."""
    return {
        key: (cls.__doc__ or "").strip().splitlines()[0] if cls.__doc__ else ""
        for key, cls in PLAYER_VARIANTS.items()
    }

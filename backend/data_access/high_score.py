"""
High score persistence functions.

These functions delegate to the HighScoreRepository for actual database operations.
"""

from .repositories import HighScoreRepository

# Repository instance
_high_score_repo = HighScoreRepository()


def get_high_score() -> int:
    """Return the persisted high score, 0 if none has been recorded."""
    return _high_score_repo.get()


def set_high_score(value: int) -> int:
    """
    Persist a new high score.

    Args:
        value: candidate score; lower values leave the record untouched

    Returns:
        The stored high score after the write
    """
    return _high_score_repo.set(value)


def reset_high_score() -> None:
    _high_score_repo.clear()

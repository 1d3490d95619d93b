"""
Repository for the persisted high score.
"""

import logging

from .base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snakeHighScore"


class HighScoreRepository(BaseRepository):
    """Reads and writes a single integer per key; the stored value never decreases."""

    def get(self, key: str = DEFAULT_KEY) -> int:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT value FROM high_scores WHERE key = ?", (key,))
            row = cursor.fetchone()
            return int(row["value"]) if row else 0

    def set(self, value: int, key: str = DEFAULT_KEY) -> int:
        """
        Store `value` if it beats the current record.

        Returns:
            The high score after the write.

        Raises:
            ValueError: If value is negative
        """
        value = int(value)
        if value < 0:
            raise ValueError(f"High score must be non-negative, got {value}")

        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO high_scores (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = MAX(high_scores.value, excluded.value),
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            cursor.execute("SELECT value FROM high_scores WHERE key = ?", (key,))
            stored = int(cursor.fetchone()["value"])

        if stored == value:
            logger.info("High score for %s is now %s", key, stored)
        return stored

    def clear(self, key: str = DEFAULT_KEY) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute("DELETE FROM high_scores WHERE key = ?", (key,))

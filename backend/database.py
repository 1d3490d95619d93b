"""
Database configuration and schema management for the Snake Arcade.

This module provides database connection management with environment-aware
path selection and schema initialization. The only persisted value is the
high score.
"""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the appropriate database path based on environment.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH if set
        - Railway (production): /data/snake_arcade.db
        - Local (development): backend/snake_arcade.db
    """
    explicit = os.getenv('SNAKE_DB_PATH')
    if explicit:
        parent = os.path.dirname(explicit)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return explicit

    if os.getenv('RAILWAY_ENVIRONMENT'):
        # Production: use volume-mounted path
        os.makedirs('/data', exist_ok=True)
        return '/data/snake_arcade.db'

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'snake_arcade.db')


def get_connection() -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


SCHEMA = """
    CREATE TABLE IF NOT EXISTS high_scores (
        key TEXT PRIMARY KEY,
        value INTEGER NOT NULL DEFAULT 0 CHECK(value >= 0),
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


def init_database() -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    cursor = conn.cursor()

    try:
        cursor.execute(SCHEMA)
        conn.commit()
        logger.debug("Database schema ready at %s", get_database_path())
    except Exception:
        conn.rollback()
        logger.exception("Error initializing database")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    logger.info("Database ready at: %s", get_database_path())

"""
Base repository with connection management.

Provides a context manager for database connections that handles:
- Schema creation on first use
- Transaction commit on success
- Transaction rollback on failure
"""

from contextlib import contextmanager
from typing import Generator, Any

import database


class BaseRepository:
    """
    Base class for all repositories.

    Provides connection management via context manager pattern.
    Subclasses should use self.connection() to get database connections.
    """

    def __init__(self):
        self._schema_ready_for = None

    def _ensure_schema(self) -> None:
        # The database path can change between calls (tests, env reloads)
        path = database.get_database_path()
        if self._schema_ready_for != path:
            database.init_database()
            self._schema_ready_for = path

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[Any, None, None]:
        """
        Context manager for database connections.

        Automatically handles:
        - Opening a connection
        - Committing on successful exit (if auto_commit=True)
        - Rolling back on exception
        - Closing the connection in all cases

        Args:
            auto_commit: If True, commit transaction on successful exit.

        Yields:
            A tuple of (connection, cursor) for database operations.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("SELECT value FROM high_scores")
                row = cursor.fetchone()
        """
        self._ensure_schema()
        conn = database.get_connection()
        cursor = conn.cursor()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[Any, None, None]:
        """
        Context manager for read-only operations.

        Yields:
            A tuple of (connection, cursor) for database operations.
        """
        self._ensure_schema()
        conn = database.get_connection()
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()

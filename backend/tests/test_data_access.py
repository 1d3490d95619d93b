"""
Tests for the high score data access layer.

Each test points SNAKE_DB_PATH at a fresh SQLite file.
"""

import sqlite3
import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import database
from data_access import get_high_score, set_high_score, reset_high_score
from data_access.repositories import HighScoreRepository


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "nested" / "scores.db"
    monkeypatch.setenv("SNAKE_DB_PATH", str(path))
    return path


class TestDatabase:
    """Tests for connection and schema management."""

    def test_explicit_path_wins(self, db_path):
        assert database.get_database_path() == str(db_path)
        assert db_path.parent.exists()

    def test_init_database_is_idempotent(self, db_path):
        database.init_database()
        database.init_database()
        conn = sqlite3.connect(db_path)
        tables = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")]
        conn.close()
        assert "high_scores" in tables

    def test_default_path_is_beside_backend(self, monkeypatch):
        monkeypatch.delenv("SNAKE_DB_PATH", raising=False)
        monkeypatch.delenv("RAILWAY_ENVIRONMENT", raising=False)
        assert database.get_database_path().endswith("snake_arcade.db")


class TestHighScoreRepository:
    """Tests for HighScoreRepository."""

    def test_missing_score_reads_as_zero(self, db_path):
        assert HighScoreRepository().get() == 0

    def test_set_then_get(self, db_path):
        repo = HighScoreRepository()
        assert repo.set(120) == 120
        assert repo.get() == 120

    def test_lower_score_does_not_overwrite(self, db_path):
        repo = HighScoreRepository()
        repo.set(300)
        assert repo.set(90) == 300
        assert repo.get() == 300

    def test_negative_score_rejected(self, db_path):
        with pytest.raises(ValueError):
            HighScoreRepository().set(-1)

    def test_keys_are_independent(self, db_path):
        repo = HighScoreRepository()
        repo.set(10, key="a")
        repo.set(20, key="b")
        assert repo.get("a") == 10
        assert repo.get("b") == 20

    def test_failed_write_rolls_back(self, db_path):
        repo = HighScoreRepository()
        repo.set(50)
        with pytest.raises(RuntimeError):
            with repo.connection() as (conn, cursor):
                cursor.execute("UPDATE high_scores SET value = 999")
                raise RuntimeError("boom")
        assert repo.get() == 50


class TestHighScoreFunctions:
    """Tests for the module-level helpers used by the API and CLI."""

    def test_round_trip_and_reset(self, db_path):
        assert get_high_score() == 0
        set_high_score(75)
        assert get_high_score() == 75
        reset_high_score()
        assert get_high_score() == 0

    def test_switching_database_path_creates_schema(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "one.db"))
        set_high_score(5)
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "two.db"))
        assert get_high_score() == 0

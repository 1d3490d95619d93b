"""
In-memory registry of live game sessions for the HTTP API.

Flask may serve requests on several threads; every access to a session goes
through its own lock so that only one request mutates it at a time.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, Optional

from domain.config import GameConfig
from engine.session import GameSession, new_session

logger = logging.getLogger(__name__)

MAX_SESSIONS = 256


class SessionNotFound(KeyError):
    """Raised when a session id is unknown or has been discarded."""


@dataclass
class _Entry:
    session: GameSession
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    def __init__(self, config: Optional[GameConfig] = None, max_sessions: int = MAX_SESSIONS):
        self.config = config or GameConfig()
        self.max_sessions = max_sessions
        self._entries: Dict[str, _Entry] = {}
        self._registry_lock = threading.Lock()

    def create(self, mode: str, high_score: int = 0) -> str:
        """Create a session and return its id; the oldest session is evicted when full."""
        session = new_session(mode, self.config, high_score=high_score)
        session_id = str(uuid.uuid4())
        with self._registry_lock:
            if len(self._entries) >= self.max_sessions:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.warning("Session limit %s reached; evicted %s", self.max_sessions, oldest)
            self._entries[session_id] = _Entry(session)
        logger.info("Created session %s (mode=%s)", session_id, mode)
        return session_id

    @contextmanager
    def use(self, session_id: str) -> Generator[GameSession, None, None]:
        """Hold the session's lock for the duration of the block."""
        with self._registry_lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFound(session_id)
        with entry.lock:
            yield entry.session

    def discard(self, session_id: str) -> None:
        with self._registry_lock:
            if self._entries.pop(session_id, None) is None:
                raise SessionNotFound(session_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._entries

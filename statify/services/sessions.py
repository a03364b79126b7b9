"""Server-side sessions and the helpers that bind them to users."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from uuid import uuid4

from statify.models import User


@dataclass(slots=True)
class Session:
    """Represents the server-held state behind a session cookie."""

    session_id: str
    user_id: Optional[int] = None
    external_id: Optional[str] = None
    authenticated: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


def bind(session: Session, user: User) -> None:
    """Mark ``session`` as authenticated for ``user``."""
    session.user_id = user.id
    session.external_id = user.external_id
    session.authenticated = True
    session.touch()


def is_authenticated(session: Optional[Session]) -> bool:
    if session is None:
        return False
    return session.authenticated is True and session.user_id is not None


def current_user_id(session: Optional[Session]) -> Optional[int]:
    if not is_authenticated(session):
        return None
    return session.user_id


class SessionStore:
    """In-memory session store with TTL pruning."""

    def __init__(self, ttl_seconds: int = 24 * 60 * 60) -> None:
        self._ttl = ttl_seconds
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def _prune(self) -> None:
        threshold = datetime.now(timezone.utc) - timedelta(seconds=self._ttl)
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.updated_at < threshold
        ]
        for session_id in expired:
            del self._sessions[session_id]

    def create(self) -> Session:
        session = Session(session_id=uuid4().hex)
        with self._lock:
            self._prune()
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            self._prune()
            return self._sessions.get(session_id)

    def save(self, session: Session) -> None:
        session.touch()
        with self._lock:
            self._sessions[session.session_id] = session

    def destroy(self, session_id: str) -> None:
        """Remove a session; unknown ids are ignored."""
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._sessions)


__all__ = [
    "Session",
    "SessionStore",
    "bind",
    "current_user_id",
    "is_authenticated",
]

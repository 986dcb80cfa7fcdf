"""In-memory session store.

Reference implementation used by :class:`SessionManager`. Not thread-safe:
the caller serializes access to a given session.
"""
from __future__ import annotations

from typing import Dict, List

from ..base.errors import NotFoundError
from ..base.models import Session


class InMemorySessionStore:
    """Dictionary-backed session storage keyed by session id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def add(self, session: Session) -> None:
        self._sessions[session.id] = session

    def get(self, session_id: str) -> Session:
        """Return the session or raise ``NotFoundError``."""
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError(f"unknown session: {session_id}", session_id=session_id)
        return session

    def remove(self, session_id: str) -> Session:
        session = self.get(session_id)
        del self._sessions[session_id]
        return session

    def list_ids(self) -> List[str]:
        return list(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["InMemorySessionStore"]

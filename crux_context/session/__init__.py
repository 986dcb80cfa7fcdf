"""Session facade and storage."""

from .manager import SessionManager
from .store import InMemorySessionStore

__all__ = ["SessionManager", "InMemorySessionStore"]

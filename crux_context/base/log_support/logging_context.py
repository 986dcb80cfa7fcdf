"""Structured logging context object for context engine events.

Defines :class:`LogContext`, carrying the session, provider and model a log
event relates to, plus an ``extra`` mapping. ``to_dict`` merges ``extra``
and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for context engine logging events."""

    session_id: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def for_session(cls, session: Any) -> "LogContext":
        """Build a context from any object exposing ``id``/``provider``/``model_id``."""
        return cls(
            session_id=getattr(session, "id", None),
            provider=getattr(session, "provider", None),
            model=getattr(session, "model_id", None),
        )


__all__ = ["LogContext"]

"""
Structured context engine exception types.

Every failure raised by the engine carries a normalized `ErrorCode` plus the
session/provider/model it relates to, so callers and structured logs can
classify it without parsing messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ContextEngineError(Exception):
    """Base structured error for the context engine.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        provider: Provider key involved in the failure, when known.
        model: Model identifier involved in the failure, when known.
        session_id: Session identifier involved in the failure, when known.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    provider: Optional[str] = None
    model: Optional[str] = None
    session_id: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        scope = f"{self.provider or '-'}:{self.model or '-'}"
        if self.session_id:
            scope = f"{scope} session={self.session_id}"
        return f"{scope} {self.code.value}: {self.message}"


__all__ = ["ContextEngineError"]

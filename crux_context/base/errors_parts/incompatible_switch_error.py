"""Refused provider switches."""
from __future__ import annotations

from dataclasses import dataclass, field

from .context_error import ContextEngineError
from .error_code import ErrorCode


@dataclass
class IncompatibleSwitchError(ContextEngineError):
    """A provider switch was refused because the target is not compatible."""

    code: ErrorCode = field(default=ErrorCode.INCOMPATIBLE)


__all__ = ["IncompatibleSwitchError"]

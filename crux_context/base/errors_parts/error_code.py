"""
Normalized context engine error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by every component of the
context engine. Values are lowercase snake_case and are considered a stable
public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    NOT_FOUND = "not_found"
    FORMAT = "format"
    CONFIGURATION = "configuration"
    INCOMPATIBLE = "incompatible"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

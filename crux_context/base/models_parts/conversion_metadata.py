"""Provenance record attached to messages rewritten for another backend."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ConversionMetadata:
    """Records which backend a message was converted from and to.

    Attributes:
        from_provider: Backend whose native encoding was read.
        to_provider: Backend whose native encoding was written.
        converted_at: UTC time of the conversion.
        truncated: True when content was cut to fit the target's limit.
        original_length: Content length before truncation, when truncated.
    """

    from_provider: str
    to_provider: str
    converted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    truncated: bool = False
    original_length: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["converted_at"] = self.converted_at.isoformat()
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["ConversionMetadata"]

"""Backend-ready message payload produced by the translator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .provider import Provider


@dataclass
class WirePayload:
    """Formatted conversation for one backend.

    Attributes:
        provider: Backend the payload targets.
        messages: Wire turns in send order.
        system: Hoisted system text for backends with a top-level system
            field; ``None`` when the system prompt travels as a turn.
    """

    provider: Provider
    messages: List[Dict[str, Any]] = field(default_factory=list)
    system: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the request body fragment (``system`` + ``messages``)."""
        body: Dict[str, Any] = {"messages": self.messages}
        if self.system is not None:
            body["system"] = self.system
        return body


__all__ = ["WirePayload"]

"""
ModelCapability DTO for the model capability registry.

Captures the facts the engine needs about a model: its context window,
feature support and per-1K token pricing.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ModelCapability:
    """Capabilities and pricing of one model.

    Attributes:
        id: Stable model identifier.
        context_window: Maximum context size in tokens.
        supports_functions: Whether the model accepts tool definitions.
        supports_images: Whether the model accepts image inputs.
        input_cost_per_1k: USD per 1000 input tokens.
        output_cost_per_1k: USD per 1000 output tokens.
    """

    id: str
    context_window: int
    supports_functions: bool = False
    supports_images: bool = False
    input_cost_per_1k: float = 0.0
    output_cost_per_1k: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = ["ModelCapability"]

"""Built-in model capability catalog.

Pricing is USD per 1000 tokens. Figures track the public price lists of
each backend and are only used for estimates.
"""
from __future__ import annotations

from typing import Dict, Tuple

from ..models import ModelCapability

DEFAULT_CATALOG: Dict[str, Tuple[ModelCapability, ...]] = {
    "anthropic": (
        ModelCapability("claude-3-opus-20240229", 200000, True, True, 0.015, 0.075),
        ModelCapability("claude-3-sonnet-20240229", 200000, True, True, 0.003, 0.015),
        ModelCapability("claude-3-haiku-20240307", 200000, True, True, 0.00025, 0.00125),
        ModelCapability("claude-3-5-sonnet-20241022", 200000, True, True, 0.003, 0.015),
        ModelCapability("claude-3-5-haiku-20241022", 200000, True, False, 0.0008, 0.004),
    ),
    "openai": (
        ModelCapability("gpt-4o", 128000, True, True, 0.005, 0.015),
        ModelCapability("gpt-4o-mini", 128000, True, True, 0.00015, 0.0006),
        ModelCapability("gpt-4-turbo", 128000, True, True, 0.01, 0.03),
        ModelCapability("gpt-4", 8192, True, False, 0.03, 0.06),
        ModelCapability("gpt-3.5-turbo", 16000, True, False, 0.0005, 0.0015),
    ),
    "grok": (
        ModelCapability("grok-2-1212", 131072, True, False, 0.002, 0.01),
        ModelCapability("grok-2-vision-1212", 32768, True, True, 0.002, 0.01),
        ModelCapability("grok-beta", 131072, True, False, 0.005, 0.015),
    ),
}


__all__ = ["DEFAULT_CATALOG"]

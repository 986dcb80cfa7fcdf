"""Criteria for picking a model from the registry."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

OptimizeFor = Literal["cost", "performance", "balanced"]


class ModelSelectionCriteria(BaseModel):
    """Requirements and preference used by ``get_recommended_model``."""

    min_context_window: Optional[int] = Field(default=None, gt=0)
    require_function_calling: bool = False
    require_image_support: bool = False
    optimize_for: OptimizeFor = "balanced"
    preferred_provider: Optional[str] = None


__all__ = ["ModelSelectionCriteria", "OptimizeFor"]

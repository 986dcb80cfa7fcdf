"""Model capability registry."""

from .catalog import DEFAULT_CATALOG
from .model_registry import ModelRegistry, build_default_registry
from .selection_criteria import ModelSelectionCriteria, OptimizeFor

__all__ = [
    "DEFAULT_CATALOG",
    "ModelRegistry",
    "ModelSelectionCriteria",
    "OptimizeFor",
    "build_default_registry",
]

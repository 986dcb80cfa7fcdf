"""In-memory model capability registry.

Answers ``get_model(provider, model_id)`` for the tracker, the compatibility
checker and the session facade, and recommends models by criteria.
Registries are plain objects; build one per container or test.
"""
from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from ..errors import NotFoundError
from ..logging import get_logger
from ..models import ModelCapability
from .catalog import DEFAULT_CATALOG
from .selection_criteria import ModelSelectionCriteria


class ModelRegistry:
    """Provider-keyed store of :class:`ModelCapability` entries."""

    def __init__(self) -> None:
        self._models: Dict[str, Dict[str, ModelCapability]] = {}
        self.logger = get_logger("registry")

    def register_model(self, provider: str, capability: ModelCapability) -> None:
        """Add or replace the capability entry for ``provider``/``capability.id``."""
        key = provider.strip().lower()
        self._models.setdefault(key, {})[capability.id] = capability

    def get_model(self, provider: str, model_id: str) -> ModelCapability:
        """Return the capability entry or raise ``NotFoundError``."""
        key = provider.strip().lower()
        models = self._models.get(key)
        if models is None:
            raise NotFoundError(f"unknown provider: {provider}", provider=provider, model=model_id)
        capability = models.get(model_id)
        if capability is None:
            raise NotFoundError(f"unknown model {model_id} for provider {provider}", provider=provider, model=model_id)
        return capability

    def has_model(self, provider: str, model_id: str) -> bool:
        return model_id in self._models.get(provider.strip().lower(), {})

    def providers(self) -> List[str]:
        return sorted(self._models)

    def list_models(self, provider: Optional[str] = None) -> List[ModelCapability]:
        """Return models for one provider, or all models when ``provider`` is None."""
        if provider is not None:
            return list(self._models.get(provider.strip().lower(), {}).values())
        return [cap for models in self._models.values() for cap in models.values()]

    def _candidates(self, criteria: ModelSelectionCriteria) -> List[Tuple[str, ModelCapability]]:
        found: List[Tuple[str, ModelCapability]] = []
        for provider, models in self._models.items():
            for cap in models.values():
                if criteria.min_context_window and cap.context_window < criteria.min_context_window:
                    continue
                if criteria.require_function_calling and not cap.supports_functions:
                    continue
                if criteria.require_image_support and not cap.supports_images:
                    continue
                found.append((provider, cap))
        return found

    def get_recommended_model(self, criteria: ModelSelectionCriteria) -> Tuple[str, ModelCapability]:
        """Return the ``(provider, capability)`` best matching ``criteria``.

        ``preferred_provider`` narrows the candidates only when that provider
        has at least one matching model. Ties keep registration order.

        Raises:
            NotFoundError: No registered model satisfies the requirements.
        """
        candidates = self._candidates(criteria)
        if criteria.preferred_provider:
            preferred = criteria.preferred_provider.strip().lower()
            narrowed = [c for c in candidates if c[0] == preferred]
            if narrowed:
                candidates = narrowed
        if not candidates:
            raise NotFoundError("no registered model matches the selection criteria")

        def total_cost(item: Tuple[str, ModelCapability]) -> float:
            return item[1].input_cost_per_1k + item[1].output_cost_per_1k

        if criteria.optimize_for == "cost":
            return min(candidates, key=total_cost)
        if criteria.optimize_for == "performance":
            return max(candidates, key=lambda item: item[1].context_window)
        # cost per order of magnitude of context
        return min(candidates, key=lambda item: total_cost(item) / math.log10(max(item[1].context_window, 10)))


def build_default_registry() -> ModelRegistry:
    """Return a registry seeded with the built-in catalog."""
    registry = ModelRegistry()
    for provider, models in DEFAULT_CATALOG.items():
        for capability in models:
            registry.register_model(provider, capability)
    return registry


__all__ = ["ModelRegistry", "build_default_registry"]

"""Minimal dependency injection container for the context engine.

Goals:
- Centralize construction of the registry and the engine components.
- Give each container its own instances; nothing is process-global.
- Keep zero external dependencies.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..base.registry import ModelRegistry, build_default_registry
from ..base.tokens import ApproximateTokenCounter, TiktokenCounter, TokenCounter
from ..compatibility import CompatibilityChecker
from ..config.defaults import COST_PER_1K_TOKENS
from ..optimization import ContextOptimizationEngine, Summarizer
from ..session import SessionManager
from ..tracking import ContextWindowTracker
from ..translation import MessageConverter, MessageTranslator


class ContextEngineContainer:
    """Lazily builds and caches the context engine collaborators.

    Recognized config keys:
        ``token_counter``: ``"approximate"`` (default) or ``"tiktoken"``.
        ``cost_per_1k_tokens``: rate used by the cost-savings ledger.
        ``summarizer``: a :class:`Summarizer` for the summarize strategy.
        ``registry``: a prebuilt :class:`ModelRegistry`.
    """

    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        """Initialize the container with optional configuration.

        Args:
            config: Optional dictionary of configuration values.
        """
        self._config = config or {}
        self._singletons: Dict[str, Any] = {}

    def _get(self, key: str, factory: Callable[[], Any]) -> Any:
        if key not in self._singletons:
            self._singletons[key] = factory()
        return self._singletons[key]

    # ---- Shared singletons ----
    def model_registry(self) -> ModelRegistry:
        return self._get("model_registry", lambda: self._config.get("registry") or build_default_registry())

    def token_counter(self) -> TokenCounter:
        def build() -> TokenCounter:
            if self._config.get("token_counter") == "tiktoken":
                return TiktokenCounter()
            return ApproximateTokenCounter()

        return self._get("token_counter", build)

    def translator(self) -> MessageTranslator:
        return self._get("translator", MessageTranslator)

    def converter(self) -> MessageConverter:
        return self._get("converter", MessageConverter)

    def tracker(self) -> ContextWindowTracker:
        return self._get("tracker", lambda: ContextWindowTracker(self.model_registry()))

    def summarizer(self) -> Optional[Summarizer]:
        return self._config.get("summarizer")

    def optimization_engine(self) -> ContextOptimizationEngine:
        return self._get(
            "optimization_engine",
            lambda: ContextOptimizationEngine(
                self.tracker(),
                summarizer=self.summarizer(),
                cost_per_1k_tokens=float(self._config.get("cost_per_1k_tokens", COST_PER_1K_TOKENS)),
            ),
        )

    def compatibility_checker(self) -> CompatibilityChecker:
        return self._get("compatibility_checker", lambda: CompatibilityChecker(self.model_registry()))

    def session_manager(self) -> SessionManager:
        return self._get(
            "session_manager",
            lambda: SessionManager(
                self.model_registry(),
                counter=self.token_counter(),
                translator=self.translator(),
                converter=self.converter(),
                tracker=self.tracker(),
                engine=self.optimization_engine(),
                checker=self.compatibility_checker(),
            ),
        )

    def clear(self) -> None:  # testing convenience
        """Drop every cached instance."""
        self._singletons.clear()


def build_container(config: Dict[str, Any] | None = None) -> ContextEngineContainer:
    """Construct and return a new :class:`ContextEngineContainer`."""
    return ContextEngineContainer(config=config)


__all__ = ["ContextEngineContainer", "build_container"]

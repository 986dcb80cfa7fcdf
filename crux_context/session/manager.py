"""Session facade used by orchestrators.

``SessionManager`` wires the engine components around a session store:
messages are counted and appended, metrics are recomputed after every
append, critical sessions are optimized automatically, payloads are built
for the session's backend and provider switches go through the
compatibility checker and the message converter.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.errors import ConfigurationError, IncompatibleSwitchError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import (
    ContextSettings,
    ConversationMessage,
    CostSavingsLedger,
    ProviderSwitch,
    Role,
    Session,
    TokenMetrics,
    ToolInvocation,
    ToolResult,
)
from ..base.registry import ModelRegistry
from ..base.tokens import ApproximateTokenCounter, TokenCounter, count_message_tokens
from ..compatibility import CompatibilityChecker, CompatibilityResult, MigrationPlan, MigrationPlanOptions
from ..config import load_context_settings
from ..config.defaults import OPTIMIZATION_TARGET_RATIO
from ..optimization import ContextOptimizationEngine, StrategyRecommendation, recommend_strategy
from ..tracking import ContextWindowTracker, CostEstimate
from ..translation import MessageConverter, MessageTranslator, Provider, WirePayload
from .store import InMemorySessionStore


class SessionManager:
    """Orchestrator-facing API over sessions and the context engine."""

    def __init__(
        self,
        registry: ModelRegistry,
        *,
        counter: Optional[TokenCounter] = None,
        translator: Optional[MessageTranslator] = None,
        converter: Optional[MessageConverter] = None,
        tracker: Optional[ContextWindowTracker] = None,
        engine: Optional[ContextOptimizationEngine] = None,
        checker: Optional[CompatibilityChecker] = None,
        store: Optional[InMemorySessionStore] = None,
    ) -> None:
        self.registry = registry
        self.counter = counter or ApproximateTokenCounter()
        self.translator = translator or MessageTranslator()
        self.converter = converter or MessageConverter()
        self.tracker = tracker or ContextWindowTracker(registry)
        self.engine = engine or ContextOptimizationEngine(self.tracker)
        self.checker = checker or CompatibilityChecker(registry)
        self.store = store or InMemorySessionStore()
        self.logger = get_logger("session")

    # ------------------------------------------------------------------ sessions

    def create_session(
        self,
        provider: Union[Provider, str],
        model_id: str,
        *,
        system_prompt: Optional[str] = None,
        settings: Union[ContextSettings, Mapping[str, Any], None] = None,
    ) -> Session:
        """Create and store a session.

        ``settings`` may be a settings object or a mapping of overrides on
        top of the configured defaults.

        Raises:
            FormatError: Unsupported provider.
            NotFoundError: Model not registered for the provider.
            ConfigurationError: Invalid settings.
        """
        backend = Provider.parse(provider).value
        self.registry.get_model(backend, model_id)
        if not isinstance(settings, ContextSettings):
            settings = load_context_settings(settings)
        session = Session(provider=backend, model_id=model_id, context_settings=settings)
        self.store.add(session)
        if system_prompt:
            self.add_message(session.id, "system", system_prompt)
        else:
            self.tracker.recompute(session)
        log_event(self.logger, "session.created", LogContext.for_session(session))
        return session

    def get_session(self, session_id: str) -> Session:
        return self.store.get(session_id)

    def remove_session(self, session_id: str) -> None:
        self.store.remove(session_id)

    def get_messages(self, session_id: str) -> List[ConversationMessage]:
        """Return the session's messages ordered by timestamp."""
        return self.store.get(session_id).sorted_messages()

    # ------------------------------------------------------------------ messages

    def add_message(
        self,
        session_id: str,
        role: Role,
        content: Optional[str] = None,
        *,
        tool_invocation: Optional[ToolInvocation] = None,
        tool_result: Optional[ToolResult] = None,
        timestamp: Optional[datetime] = None,
    ) -> ConversationMessage:
        """Count, append and account for a new message.

        When ``auto_truncate`` is on and the window is critical, or the total
        exceeds ``max_token_limit``, the session is optimized right away. A
        configured strategy that cannot run falls back to oldest-first so the
        append never fails after the message is stored.
        """
        session = self.store.get(session_id)
        tokens = count_message_tokens(
            self.counter,
            content,
            tool_invocation=tool_invocation,
            tool_result=tool_result,
            model_hint=session.model_id,
        )
        message = ConversationMessage(
            role=role,
            content=content,
            timestamp=timestamp or datetime.now(timezone.utc),
            tokens=tokens,
            tool_invocation=tool_invocation,
            tool_result=tool_result,
        )
        session.messages.append(message)
        metrics = self.tracker.recompute(session)

        settings = session.context_settings
        over_limit = settings.max_token_limit is not None and metrics.total_tokens > settings.max_token_limit
        if settings.auto_truncate and (session.is_context_window_critical or over_limit):
            self.optimize_context(session_id, strategy=self._fit_strategy(session))
        return message

    def set_context_settings(self, session_id: str, **updates: Any) -> ContextSettings:
        """Apply a validated partial update to the session's settings."""
        session = self.store.get(session_id)
        try:
            session.context_settings = session.context_settings.updated(**updates)
        except ValidationError as e:
            raise ConfigurationError(f"invalid context settings: {e}", session_id=session_id) from e
        return session.context_settings

    # ---------------------------------------------------------------- accounting

    def get_token_usage(self, session_id: str) -> TokenMetrics:
        return self.tracker.recompute(self.store.get(session_id))

    def default_target_tokens(self, session: Session) -> int:
        """``floor(0.7 * budget)`` where the budget is ``max_token_limit`` or the window."""
        budget = session.context_settings.max_token_limit or self.tracker.context_window(session)
        return math.floor(budget * OPTIMIZATION_TARGET_RATIO)

    def optimize_context(
        self,
        session_id: str,
        target_tokens: Optional[int] = None,
        strategy: Optional[str] = None,
    ) -> TokenMetrics:
        session = self.store.get(session_id)
        if target_tokens is None:
            target_tokens = self.default_target_tokens(session)
        return self.engine.optimize(session, target_tokens, strategy)  # type: ignore[arg-type]

    def estimate_costs(self, session_id: str, provider: str, model_id: str) -> CostEstimate:
        return self.tracker.estimate_costs(self.store.get(session_id), provider, model_id)

    def get_cost_savings_report(self, session_id: str) -> CostSavingsLedger:
        """Return the session's ledger; an empty one before any cost-tier run."""
        return self.store.get(session_id).cost_savings or CostSavingsLedger()

    def recommend_strategy(self, session_id: str) -> StrategyRecommendation:
        return recommend_strategy(self.store.get(session_id))

    # ------------------------------------------------------------------ backends

    def build_payload(self, session_id: str) -> WirePayload:
        """Translate the session's history for its current backend."""
        session = self.store.get(session_id)
        return self.translator.translate(session.sorted_messages(), session.provider)

    def check_switch(self, session_id: str, provider: Union[Provider, str], model_id: str) -> CompatibilityResult:
        session = self.store.get(session_id)
        target = Provider.parse(provider).value
        return self.checker.check_compatibility(session.provider, session.model_id, target, model_id)

    def plan_switch(self, session_id: str, provider: Union[Provider, str], model_id: str) -> MigrationPlan:
        session = self.store.get(session_id)
        target = Provider.parse(provider).value
        return self.checker.get_migration_plan(
            session.provider, session.model_id, target, model_id, self._plan_options(session)
        )

    def switch_provider(
        self,
        session_id: str,
        provider: Union[Provider, str],
        model_id: str,
        *,
        force: bool = False,
    ) -> MigrationPlan:
        """Move the session to another backend/model.

        The stored history is converted to the target's native encoding and,
        when it no longer fits the new window, optimized down to 70% of it.

        Raises:
            FormatError: Unsupported provider or malformed stored tool data.
            NotFoundError: Unknown session or target model.
            IncompatibleSwitchError: The pair is incompatible and ``force`` is off.
        """
        session = self.store.get(session_id)
        target = Provider.parse(provider).value
        capability = self.registry.get_model(target, model_id)
        result = self.checker.check_compatibility(session.provider, session.model_id, target, model_id)
        if not result.compatible and not force:
            raise IncompatibleSwitchError(
                f"switch to {target}:{model_id} is not compatible (score {result.score})",
                provider=target,
                model=model_id,
                session_id=session_id,
            )
        plan = self.checker.get_migration_plan(
            session.provider, session.model_id, target, model_id, self._plan_options(session)
        )
        converted = self.converter.convert_history(session.messages, session.provider, target)

        switch = ProviderSwitch(
            provider=session.provider,
            model_id=session.model_id,
            switch_time=datetime.now(timezone.utc),
        )
        session.messages[:] = converted
        session.previous_providers.append(switch)
        session.provider, session.model_id = target, model_id
        metrics = self.tracker.recompute(session)
        if metrics.total_tokens > capability.context_window:
            fit_target = math.floor(capability.context_window * OPTIMIZATION_TARGET_RATIO)
            self.engine.optimize(session, fit_target, self._fit_strategy(session))

        log_event(
            self.logger,
            "session.switch",
            LogContext.for_session(session),
            from_provider=switch.provider,
            from_model=switch.model_id,
            score=result.score,
            forced=force and not result.compatible,
        )
        return plan

    def _plan_options(self, session: Session) -> MigrationPlanOptions:
        return MigrationPlanOptions(
            current_context_size=session.total_tokens(),
            uses_tools=any(m.is_tool_invocation or m.is_tool_result for m in session.messages),
        )

    def _fit_strategy(self, session: Session) -> Optional[str]:
        try:
            self.engine.resolve_strategy(session)
        except ConfigurationError as e:
            log_event(
                self.logger,
                "session.strategy_fallback",
                LogContext.for_session(session),
                level=logging.WARNING,
                reason=e.message,
                strategy="oldest-first",
            )
            return "oldest-first"
        return None


__all__ = ["SessionManager"]

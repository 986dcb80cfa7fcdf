"""Pytest configuration for the context engine test suite.

Provides fresh component instances per test (nothing is shared between
tests) and isolates tests from ambient ``CRUX_CONTEXT_*`` environment
variables and config files.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from crux_context.base.registry import ModelRegistry, build_default_registry
from crux_context.compatibility import CompatibilityChecker
from crux_context.config import reset_config_cache
from crux_context.config.defaults import DEFAULT_CONTEXT_SETTINGS
from crux_context.config.env import CONFIG_FILE_ENV, env_var_name
from crux_context.optimization import ContextOptimizationEngine
from crux_context.session import SessionManager
from crux_context.tracking import ContextWindowTracker
from crux_context.translation import MessageConverter, MessageTranslator


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear context settings env vars and the config file cache."""
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    for field in DEFAULT_CONTEXT_SETTINGS:
        monkeypatch.delenv(env_var_name(field), raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def registry() -> ModelRegistry:
    return build_default_registry()


@pytest.fixture()
def tracker(registry: ModelRegistry) -> ContextWindowTracker:
    return ContextWindowTracker(registry)


@pytest.fixture()
def engine(tracker: ContextWindowTracker) -> ContextOptimizationEngine:
    return ContextOptimizationEngine(tracker)


@pytest.fixture()
def translator() -> MessageTranslator:
    return MessageTranslator()


@pytest.fixture()
def converter() -> MessageConverter:
    return MessageConverter()


@pytest.fixture()
def checker(registry: ModelRegistry) -> CompatibilityChecker:
    return CompatibilityChecker(registry)


@pytest.fixture()
def manager(registry: ModelRegistry) -> SessionManager:
    return SessionManager(registry)

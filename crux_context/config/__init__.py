"""Unified configuration layer for the context engine.

Goals
-----
* Centralize default context settings.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``CRUX_CONTEXT_CONFIG_FILE``, section ``context``
    3. Environment variables ``CRUX_CONTEXT_<FIELD>``
    4. In-code overrides passed to the helper
* Provide a single call site: ``load_context_settings(overrides=None)``.

External Config File
--------------------
JSON is tried first, then YAML (PyYAML). Structure example:

```
context:
  max_token_limit: 8000
  truncation_strategy: selective
  cost_optimization_mode: true
  cost_optimization_level: aggressive
```

Public API
----------
* load_context_settings(overrides: dict | None = None) -> ContextSettings
* get_context_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..base.errors import ConfigurationError
from ..base.models import ContextSettings
from .defaults import DEFAULT_CONTEXT_SETTINGS
from .env import CONFIG_FILE_ENV, read_env_settings

CONFIG_SECTION = "context"

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def reset_config_cache() -> None:
    """Forget previously loaded config files."""
    _FILE_CACHE.clear()


def _parse_config_text(text: str, path: Path) -> Any:
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    if not p.exists():
        _FILE_CACHE[path] = {}
        return {}
    try:
        data = _parse_config_text(p.read_text(encoding="utf-8"), p)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"cannot parse config file {path}: {e}") from e
    if not isinstance(data, dict):
        data = {}
    section = data.get(CONFIG_SECTION, {})
    _FILE_CACHE[path] = dict(section) if isinstance(section, Mapping) else {}
    return _FILE_CACHE[path]


def get_context_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged, unvalidated context settings mapping.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    cfg: Dict[str, Any] = dict(DEFAULT_CONTEXT_SETTINGS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULT_CONTEXT_SETTINGS}
    cfg |= read_env_settings(DEFAULT_CONTEXT_SETTINGS)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def load_context_settings(overrides: Optional[Mapping[str, Any]] = None) -> ContextSettings:
    """Return validated :class:`ContextSettings` from all configuration sources.

    Raises:
        ConfigurationError: A merged value fails validation.
    """
    try:
        return ContextSettings.model_validate(get_context_config(overrides))
    except ValidationError as e:
        raise ConfigurationError(f"invalid context settings: {e}") from e


__all__ = [
    "CONFIG_SECTION",
    "get_context_config",
    "load_context_settings",
    "reset_config_cache",
]

"""Base structured logging utilities for the context engine.

One place configures consistent JSON (or plain) logging for every
component. Components obtain child loggers with ``get_logger("tracking")``
and emit events with ``log_event``; records propagate to the shared
``crux_context`` logger, which owns the stderr handler. The level comes from
``CRUX_CONTEXT_LOG_LEVEL`` and falls back to the level passed by the caller.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, List, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "crux_context"
LOG_LEVEL_ENV = "CRUX_CONTEXT_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# 10MB x 5 backups
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Marker attributes for handlers this module owns.
_READY_ATTR = "_crux_context_ready"
_CONSOLE_ATTR = "_crux_context_console"
_FILE_ATTR = "_crux_context_file"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name (case-insensitive) to its constant, else ``default``."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _console_handler(level: int, json_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_ATTR, True)
    return handler


def _owned(logger: logging.Logger, marker: str) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, marker, False)]


def _drop_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(OSError):
        handler.close()


def _refresh_console(logger: logging.Logger, level: int, json_mode: bool) -> None:
    """Point owned console handlers at the current ``sys.stderr``.

    Test runners swap (and close) stderr between tests; a handler still bound
    to a closed stream is replaced, a live one is rebound.
    """
    for handler in _owned(logger, _CONSOLE_ATTR):
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            logger.removeHandler(handler)
            logger.addHandler(_console_handler(level, json_mode))
            continue
        handler.setLevel(level)
        if stream is not sys.stderr and isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``crux_context`` logger, initializing it once."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _READY_ATTR, False):
        logger.setLevel(wanted)
        _refresh_console(logger, wanted, json_mode)
        return logger

    logger.setLevel(wanted)
    logger.handlers[:] = [_console_handler(wanted, json_mode)]
    logger.propagate = False
    setattr(logger, _READY_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the base logger, or a child of it for component ``name``.

    Names not already under ``crux_context.`` are prefixed, so
    ``get_logger("optimization")`` yields ``crux_context.optimization``.
    """
    base = _base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    qualified = name if name.startswith(f"{BASE_LOGGER_NAME}.") else f"{BASE_LOGGER_NAME}.{name}"
    child = logging.getLogger(qualified)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _attach_file_handler(logger: logging.Logger, file_path: str, json_mode: bool) -> None:
    target = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(target), exist_ok=True)
    reuse: Optional[logging.Handler] = None
    for handler in _owned(logger, _FILE_ATTR):
        if getattr(handler, "baseFilename", None) == target and reuse is None:
            reuse = handler
        else:
            _drop_handler(logger, handler)
    if reuse is None:
        reuse = RotatingFileHandler(
            target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
        )
        setattr(reuse, _FILE_ATTR, True)
        logger.addHandler(reuse)
    reuse.setLevel(logger.level)
    reuse.setFormatter(_formatter(json_mode))


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``crux_context`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level, numeric or by name. ``None`` keeps the current level.
    file_path: Optional[str]
        Attach (or keep) a rotating file handler writing to this path. With
        ``None`` any file handler added earlier by this function is removed.
    json_mode: bool
        JSON formatter when True, plain text otherwise.

    Returns
    -------
    logging.Logger
        The base logger. Handlers added by other code are left alone.
    """
    logger = get_logger(json_mode=json_mode)
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    if file_path is None:
        for handler in _owned(logger, _FILE_ATTR):
            _drop_handler(logger, handler)
    else:
        _attach_file_handler(logger, file_path, json_mode)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON object per line.

    ``ctx`` contributes ``session_id``/``provider``/``model`` (and its
    ``extra`` mapping); ``fields`` are merged on top. ``None`` values are
    dropped unless ``keep_none`` is set. Nothing is serialized when the
    logger is not enabled for ``level``.
    """
    if not logger.isEnabledFor(level):
        return
    record = {"event": event, **(ctx.to_dict() if ctx else {})}
    record.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]

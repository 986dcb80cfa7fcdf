"""Composition root for the context engine."""

from .container import ContextEngineContainer, build_container

__all__ = ["ContextEngineContainer", "build_container"]

# src/logging/context.py - v2
"""Contextual logging support: attach document_id, artifact, plugin and phase to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per document request.
_document_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document_id", default=None
)
_artifact: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "artifact", default=None
)
_plugin: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "plugin", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    document_id: str | None = None
    artifact: str | None = None
    plugin: str | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        document_id=_document_id.get(),
        artifact=_artifact.get(),
        plugin=_plugin.get(),
        phase=_phase.get(),
    )


def set_document_context(document_id: str, artifact: str | None = None) -> None:
    """Set document-level context (called once per artifact request)."""
    _document_id.set(document_id)
    _artifact.set(artifact)


def set_plugin_context(plugin: str, phase: str | None = None) -> None:
    """Set plugin-level context (called per plugin hook)."""
    _plugin.set(plugin)
    _phase.set(phase)


@contextmanager
def plugin_context(plugin: str, phase: str) -> Iterator[None]:
    """Set plugin context for the duration of one hook call, then restore it."""
    plugin_token = _plugin.set(plugin)
    phase_token = _phase.set(phase)
    try:
        yield
    finally:
        _phase.reset(phase_token)
        _plugin.reset(plugin_token)


def clear_context() -> None:
    """Reset all context variables."""
    _document_id.set(None)
    _artifact.set(None)
    _plugin.set(None)
    _phase.set(None)

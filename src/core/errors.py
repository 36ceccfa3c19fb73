# src/core/errors.py - v1
"""Typed failures surfaced by artifact requests.

PluginFailure and ParseFailure abort a single document's tree build and are
never cached. CacheUnavailable is normally absorbed by ArtifactCache (a failed
get is a miss, a failed set is ignored) and only escapes in strict mode.
"""

from __future__ import annotations

from typing import Literal

PluginPhase = Literal["parser_extension", "source_mutation", "tree_transform"]


class ArtifactError(Exception):
    """Base class for failures raised while deriving a document artifact."""

    def __init__(self, message: str, document_id: str | None = None) -> None:
        self.document_id = document_id
        super().__init__(message)


class PluginFailure(ArtifactError):
    """A plugin hook raised, rejected or timed out."""

    def __init__(
        self,
        plugin: str,
        phase: PluginPhase,
        document_id: str | None = None,
        reason: str = "",
    ) -> None:
        self.plugin = plugin
        self.phase = phase
        self.reason = reason
        target = f" for document '{document_id}'" if document_id else ""
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Plugin '{plugin}' failed during {phase}{target}{detail}",
            document_id=document_id,
        )


class ParseFailure(ArtifactError):
    """The parser could not turn (mutated) content into a tree."""

    def __init__(self, document_id: str | None = None, reason: str = "") -> None:
        self.reason = reason
        target = f"document '{document_id}'" if document_id else "document"
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to parse {target}{detail}", document_id=document_id)


class CacheUnavailable(ArtifactError):
    """The cache store failed on get or set."""

    def __init__(self, key: str, operation: Literal["get", "set"], reason: str = "") -> None:
        self.key = key
        self.operation = operation
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cache {operation} failed for key {key!r}{detail}")

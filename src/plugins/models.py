# src/plugins/models.py - v2
"""Plugin registration models: ParserExtension, PluginRegistration, PluginSet."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from docartifacts.cache.fingerprint import compute_plugin_fingerprint
from docartifacts.plugins.base_plugin import (
    BasePlugin,
    ParserExtensionProvider,
    SourceMutator,
    TreeTransformer,
)


@dataclass(frozen=True)
class ParserExtension:
    """A markdown-it plugin function plus the keyword options to ``md.use`` it with."""

    name: str
    plugin: Callable[..., None]
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PluginRegistration:
    """A plugin instance together with its user-supplied options."""

    plugin: BasePlugin
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.plugin.name


@dataclass(frozen=True)
class PluginSet:
    """Immutable, ordered set of active plugins.

    ``fingerprint`` identifies the set (names, order and options) and is
    threaded into every cache key; it is derived from the registrations and
    cannot drift from them. Build instances with PluginRegistry.freeze().
    """

    registrations: tuple[PluginRegistration, ...] = ()
    fingerprint: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "fingerprint",
            compute_plugin_fingerprint(self.names, [r.options for r in self.registrations]),
        )

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.registrations]

    @property
    def extension_providers(self) -> list[tuple[ParserExtensionProvider, dict[str, Any]]]:
        return [
            (r.plugin, r.options)
            for r in self.registrations
            if isinstance(r.plugin, ParserExtensionProvider)
        ]

    @property
    def source_mutators(self) -> list[tuple[SourceMutator, dict[str, Any]]]:
        return [
            (r.plugin, r.options)
            for r in self.registrations
            if isinstance(r.plugin, SourceMutator)
        ]

    @property
    def tree_transformers(self) -> list[tuple[TreeTransformer, dict[str, Any]]]:
        return [
            (r.plugin, r.options)
            for r in self.registrations
            if isinstance(r.plugin, TreeTransformer)
        ]

    def __len__(self) -> int:
        return len(self.registrations)

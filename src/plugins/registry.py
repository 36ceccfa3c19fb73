# src/plugins/registry.py - v2
"""Plugin registry: load plugins once at startup and freeze them into a PluginSet.

Plugins are registered explicitly or loaded from the PLUGINS setting (dotted
class paths). Registration order is execution order and is part of the
plugin-set fingerprint.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from docartifacts.plugins.base_plugin import (
    BasePlugin,
    ParserExtensionProvider,
    SourceMutator,
    TreeTransformer,
)
from docartifacts.plugins.models import PluginRegistration, PluginSet

logger = logging.getLogger(__name__)

_CAPABILITIES: tuple[tuple[str, type], ...] = (
    ("parser_extension", ParserExtensionProvider),
    ("source_mutation", SourceMutator),
    ("tree_transform", TreeTransformer),
)


class RegistryError(Exception):
    """Raised when plugin loading or registration fails."""


def capabilities_of(plugin: BasePlugin) -> list[str]:
    """Names of the capabilities ``plugin`` implements, in phase order."""
    return [name for name, cls in _CAPABILITIES if isinstance(plugin, cls)]


class PluginRegistry:
    """Ordered registry of plugins.

    Mutable while the application starts up; ``freeze()`` returns the
    immutable PluginSet that the pipeline and cache keys use.
    """

    def __init__(self) -> None:
        self._registrations: list[PluginRegistration] = []

    @property
    def plugin_names(self) -> list[str]:
        """Registered plugin names in registration order."""
        return [r.name for r in self._registrations]

    def register(
        self, plugin: BasePlugin, options: Mapping[str, Any] | None = None
    ) -> None:
        """Append a plugin instance.

        Raises:
            RegistryError: If the object is not a plugin or the name is taken.
        """
        if not isinstance(plugin, BasePlugin):
            raise RegistryError(f"{plugin!r} is not a BasePlugin instance")
        if plugin.name in self.plugin_names:
            raise RegistryError(f"Plugin '{plugin.name}' is already registered")

        capabilities = capabilities_of(plugin)
        if not capabilities:
            logger.warning(
                "Plugin '%s' implements no capability; it only affects cache keys",
                plugin.name,
            )
        self._registrations.append(
            PluginRegistration(plugin=plugin, options=dict(options or {}))
        )
        logger.debug(
            "Registered plugin: %s v%s %s", plugin.name, plugin.version, capabilities
        )

    def load_all(
        self,
        class_paths: Iterable[str],
        options: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        """Import, instantiate and register plugins from dotted class paths.

        Args:
            class_paths: e.g. ``docartifacts.plugins.builtin.wiki_links.WikiLinkPlugin``.
            options: Plugin name -> options mapping.

        Raises:
            RegistryError: If any class cannot be imported or is not a plugin.
        """
        options = options or {}
        for class_path in class_paths:
            plugin = _import_plugin(class_path)
            self.register(plugin, options.get(plugin.name))

        logger.info(
            "Registry loaded %d plugins: %s", len(self._registrations), self.plugin_names
        )

    def get(self, name: str) -> BasePlugin | None:
        """Get plugin by name, or None if not registered."""
        for registration in self._registrations:
            if registration.name == name:
                return registration.plugin
        return None

    def get_or_raise(self, name: str) -> BasePlugin:
        """Get plugin by name, raise if not found."""
        plugin = self.get(name)
        if plugin is None:
            raise RegistryError(f"Plugin '{name}' not found in registry")
        return plugin

    def freeze(self) -> PluginSet:
        """Snapshot the current registrations as an immutable PluginSet."""
        plugin_set = PluginSet(registrations=tuple(self._registrations))
        logger.info(
            "Plugin set frozen: %d plugins, fingerprint=%s",
            len(plugin_set),
            plugin_set.fingerprint[:12],
        )
        return plugin_set


def _import_plugin(class_path: str) -> BasePlugin:
    """Import and instantiate a plugin from a dotted class path."""
    parts = class_path.rsplit(".", 1)
    if len(parts) != 2:
        raise RegistryError(f"Invalid class path: {class_path}")
    module_path, class_name = parts

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise RegistryError(f"Cannot import module {module_path}: {exc}") from exc

    cls = getattr(module, class_name, None)
    if cls is None:
        raise RegistryError(f"Class {class_name} not found in {module_path}")

    if not isinstance(cls, type) or not issubclass(cls, BasePlugin):
        raise RegistryError(f"{class_path} is not a BasePlugin subclass")

    return cls()

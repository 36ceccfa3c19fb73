# tests/unit/plugins/test_registry.py - v2
"""Tests for plugins/registry.py and plugins/models.py."""

from __future__ import annotations

import logging

import pytest

from docartifacts.cache.fingerprint import compute_plugin_fingerprint
from docartifacts.plugins.base_plugin import BasePlugin, SourceMutator, TreeTransformer
from docartifacts.plugins.builtin.heading_offset import HeadingOffsetPlugin
from docartifacts.plugins.builtin.task_list import TaskListPlugin
from docartifacts.plugins.builtin.wiki_links import WikiLinkPlugin
from docartifacts.plugins.models import PluginRegistration, PluginSet
from docartifacts.plugins.registry import PluginRegistry, RegistryError, capabilities_of


class _Inert(BasePlugin):
    @property
    def name(self) -> str:
        return "inert"


class _Both(BasePlugin, SourceMutator, TreeTransformer):
    @property
    def name(self) -> str:
        return "both"

    async def mutate_source(self, document, all_documents, options):
        return None

    async def transform_tree(self, tree, document, all_documents, registry, options):
        return None


class NotAPlugin:
    pass


class TestCapabilities:
    def test_builtin_capabilities(self):
        assert capabilities_of(WikiLinkPlugin()) == ["source_mutation"]
        assert capabilities_of(HeadingOffsetPlugin()) == ["tree_transform"]
        assert capabilities_of(TaskListPlugin()) == ["parser_extension"]

    def test_multiple_capabilities(self):
        assert capabilities_of(_Both()) == ["source_mutation", "tree_transform"]


class TestPluginRegistry:
    def test_register_keeps_order(self):
        registry = PluginRegistry()
        registry.register(HeadingOffsetPlugin())
        registry.register(WikiLinkPlugin())
        assert registry.plugin_names == ["heading_offset", "wiki_links"]

    def test_duplicate_name(self):
        registry = PluginRegistry()
        registry.register(WikiLinkPlugin())
        with pytest.raises(RegistryError, match="already registered"):
            registry.register(WikiLinkPlugin())

    def test_rejects_non_plugin(self):
        with pytest.raises(RegistryError, match="not a BasePlugin"):
            PluginRegistry().register(NotAPlugin())  # type: ignore[arg-type]

    def test_warns_without_capability(self, caplog):
        with caplog.at_level(logging.WARNING):
            PluginRegistry().register(_Inert())
        assert "implements no capability" in caplog.text

    def test_get(self):
        registry = PluginRegistry()
        plugin = WikiLinkPlugin()
        registry.register(plugin)
        assert registry.get("wiki_links") is plugin
        assert registry.get("missing") is None
        with pytest.raises(RegistryError, match="not found"):
            registry.get_or_raise("missing")

    def test_load_all_from_class_paths(self):
        registry = PluginRegistry()
        registry.load_all(
            [
                "docartifacts.plugins.builtin.task_list.TaskListPlugin",
                "docartifacts.plugins.builtin.heading_offset.HeadingOffsetPlugin",
            ],
            options={"heading_offset": {"offset": 2}},
        )
        plugin_set = registry.freeze()
        assert plugin_set.names == ["task_list", "heading_offset"]
        assert plugin_set.tree_transformers[0][1] == {"offset": 2}

    @pytest.mark.parametrize(
        "class_path,match",
        [
            ("NoDots", "Invalid class path"),
            ("docartifacts.no_such_module.Plugin", "Cannot import"),
            ("docartifacts.plugins.builtin.task_list.Missing", "not found"),
            ("docartifacts.plugins.builtin.task_list.task_list_plugin", "not a BasePlugin"),
        ],
    )
    def test_load_errors(self, class_path, match):
        with pytest.raises(RegistryError, match=match):
            PluginRegistry().load_all([class_path])


class TestPluginSet:
    def test_fingerprint_derived_from_names(self):
        registry = PluginRegistry()
        registry.register(TaskListPlugin())
        registry.register(WikiLinkPlugin())
        plugin_set = registry.freeze()
        assert plugin_set.fingerprint == compute_plugin_fingerprint(["task_list", "wiki_links"])

    def test_order_changes_fingerprint(self):
        a = PluginSet((PluginRegistration(TaskListPlugin()), PluginRegistration(WikiLinkPlugin())))
        b = PluginSet((PluginRegistration(WikiLinkPlugin()), PluginRegistration(TaskListPlugin())))
        assert a.fingerprint != b.fingerprint

    def test_empty_set(self):
        plugin_set = PluginSet()
        assert len(plugin_set) == 0
        assert plugin_set.fingerprint == compute_plugin_fingerprint([])

    def test_options_change_fingerprint(self):
        plain = PluginSet((PluginRegistration(HeadingOffsetPlugin()),))
        shifted = PluginSet((PluginRegistration(HeadingOffsetPlugin(), {"offset": 2}),))
        assert plain.fingerprint != shifted.fingerprint
        assert shifted.fingerprint == compute_plugin_fingerprint(
            ["heading_offset"], [{"offset": 2}]
        )

    def test_capability_views(self):
        plugin_set = PluginSet(
            (
                PluginRegistration(TaskListPlugin()),
                PluginRegistration(_Both(), {"k": 1}),
                PluginRegistration(WikiLinkPlugin()),
            )
        )
        assert [p.name for p, _ in plugin_set.extension_providers] == ["task_list"]
        assert [p.name for p, _ in plugin_set.source_mutators] == ["both", "wiki_links"]
        assert [(p.name, o) for p, o in plugin_set.tree_transformers] == [("both", {"k": 1})]

    def test_frozen(self):
        plugin_set = PluginSet()
        with pytest.raises(AttributeError):
            plugin_set.fingerprint = "x"  # type: ignore[misc]

    def test_freeze_is_a_snapshot(self):
        registry = PluginRegistry()
        registry.register(TaskListPlugin())
        frozen = registry.freeze()
        registry.register(WikiLinkPlugin())
        assert frozen.names == ["task_list"]

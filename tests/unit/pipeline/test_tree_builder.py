# tests/unit/pipeline/test_tree_builder.py - v1
"""Tests for pipeline/tree_builder.py - reclassification and ast caching."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from docartifacts.cache.artifact_cache import ArtifactCache
from docartifacts.cache.keys import artifact_cache_key
from docartifacts.cache.memory_store import MemoryCacheStore
from docartifacts.core.errors import ParseFailure, PluginFailure
from docartifacts.core.tree import (
    BlockquoteNode,
    CodeNode,
    ComponentNode,
    Root,
    StyleNode,
)
from docartifacts.documents.registry import InMemoryDocumentRegistry
from docartifacts.parsing.parser import MarkdownParser
from docartifacts.pipeline.tree_builder import TreeBuilder, reclassify_code_blocks
from docartifacts.plugins.models import PluginSet
from docartifacts.plugins.pipeline import PluginPipeline


class TestReclassify:
    def test_style_component_and_code(self):
        tree = Root(
            children=[
                CodeNode(value="a {}", lang="style"),
                CodeNode(value="<X />", lang="jsx-component", meta="live"),
                CodeNode(value="1", lang="js"),
                CodeNode(value="2"),
            ]
        )
        reclassify_code_blocks(tree)
        assert [type(n) for n in tree.children] == [StyleNode, ComponentNode, CodeNode, CodeNode]
        assert tree.children[1].meta == "live"
        assert tree.children[1].lang == "jsx-component"

    def test_style_wins_over_component(self):
        tree = Root(children=[CodeNode(value="x", lang="style")])
        reclassify_code_blocks(tree)
        assert isinstance(tree.children[0], StyleNode)

    def test_lang_containing_style_is_not_style(self):
        tree = Root(children=[CodeNode(value="x", lang="stylesheet")])
        reclassify_code_blocks(tree)
        assert isinstance(tree.children[0], CodeNode)

    def test_nested_blocks(self):
        tree = Root(children=[BlockquoteNode(children=[CodeNode(value="x", lang="my-component")])])
        reclassify_code_blocks(tree)
        assert isinstance(tree.children[0].children[0], ComponentNode)


def _builder(store=None, pipeline=None, parser=None):
    pipeline = pipeline or PluginPipeline(PluginSet())
    return TreeBuilder(
        pipeline,
        parser or MarkdownParser(configure=pipeline.configure_parser),
        ArtifactCache(store if store is not None else MemoryCacheStore()),
    )


class TestTreeBuilder:
    @pytest.mark.asyncio
    async def test_miss_builds_and_stores(self, doc_factory):
        store = MemoryCacheStore()
        doc = doc_factory("# Hi\n\n```style\na {}\n```\n")
        tree = await _builder(store).build(doc, InMemoryDocumentRegistry([doc]))
        assert [n.type for n in tree.children] == ["heading", "style"]
        key = artifact_cache_key("ast", doc.content_digest, PluginSet().fingerprint)
        assert key in store

    @pytest.mark.asyncio
    async def test_hit_skips_parse(self, doc_factory):
        store = MemoryCacheStore()
        doc = doc_factory("# Hi\n")
        registry = InMemoryDocumentRegistry([doc])
        first = await _builder(store).build(doc, registry)

        parser = MagicMock(spec=MarkdownParser)
        second = await _builder(store, parser=parser).build(doc, registry)
        parser.parse.assert_not_called()
        assert second == first

    @pytest.mark.asyncio
    async def test_parse_failure_not_cached(self, doc_factory):
        store = MemoryCacheStore()
        doc = doc_factory("# Hi\n")
        parser = MagicMock(spec=MarkdownParser)
        parser.parse.side_effect = ParseFailure(doc.id, "bad")
        with pytest.raises(ParseFailure):
            await _builder(store, parser=parser).build(doc, InMemoryDocumentRegistry([doc]))
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_plugin_failure_not_cached(self, doc_factory):
        store = MemoryCacheStore()
        doc = doc_factory("# Hi\n")
        pipeline = MagicMock(spec=PluginPipeline)
        pipeline.plugin_set = PluginSet()
        pipeline.mutate_source = AsyncMock(
            side_effect=PluginFailure("p", "source_mutation", doc.id, "boom")
        )
        with pytest.raises(PluginFailure):
            await _builder(store, pipeline=pipeline, parser=MarkdownParser()).build(
                doc, InMemoryDocumentRegistry([doc])
            )
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_uses_mutated_content(self, doc_factory):
        doc = doc_factory("original")
        pipeline = MagicMock(spec=PluginPipeline)
        pipeline.plugin_set = PluginSet()
        pipeline.mutate_source = AsyncMock(return_value="# mutated")
        pipeline.transform_tree = AsyncMock(side_effect=lambda tree, d, r: tree)
        tree = await _builder(pipeline=pipeline, parser=MarkdownParser()).build(
            doc, InMemoryDocumentRegistry([doc])
        )
        assert tree.children[0].type == "heading"
        assert doc.content == "original"

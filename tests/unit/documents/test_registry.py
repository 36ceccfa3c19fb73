# tests/unit/documents/test_registry.py - v1
"""Tests for documents/registry.py."""

from __future__ import annotations

from docartifacts.documents.registry import InMemoryDocumentRegistry


class TestInMemoryDocumentRegistry:
    def test_add_and_get(self, doc_factory):
        doc = doc_factory("# A", "a.md")
        registry = InMemoryDocumentRegistry()
        registry.add(doc)
        assert registry.get_by_id("a.md") is doc
        assert "a.md" in registry
        assert len(registry) == 1

    def test_get_missing(self):
        assert InMemoryDocumentRegistry().get_by_id("nope") is None

    def test_list_keeps_insertion_order(self, doc_factory):
        docs = [doc_factory("x", f"{name}.md") for name in ("b", "a", "c")]
        registry = InMemoryDocumentRegistry(docs)
        assert [d.id for d in registry.list_all()] == ["b.md", "a.md", "c.md"]

    def test_replace(self, doc_factory):
        registry = InMemoryDocumentRegistry([doc_factory("old", "a.md")])
        registry.add(doc_factory("new", "a.md"))
        assert len(registry) == 1
        assert registry.get_by_id("a.md").content == "new"

    def test_remove(self, doc_factory):
        registry = InMemoryDocumentRegistry([doc_factory("x", "a.md")])
        registry.remove("a.md")
        registry.remove("unknown.md")
        assert len(registry) == 0

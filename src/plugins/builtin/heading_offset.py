# src/plugins/builtin/heading_offset.py - v1
"""Shift every heading depth by a fixed offset (clamped to 1..6)."""

from __future__ import annotations

from typing import Any

from docartifacts.core.models import Document
from docartifacts.core.tree import HeadingNode, Root, walk
from docartifacts.documents.registry import BaseDocumentRegistry
from docartifacts.plugins.base_plugin import BasePlugin, TreeTransformer


class HeadingOffsetPlugin(BasePlugin, TreeTransformer):
    """Demote (positive ``offset``) or promote (negative) headings in place."""

    @property
    def name(self) -> str:
        return "heading_offset"

    @property
    def description(self) -> str:
        return "Shifts heading depths by options['offset']"

    async def transform_tree(
        self,
        tree: Root,
        document: Document,
        all_documents: list[Document],
        registry: BaseDocumentRegistry,
        options: dict[str, Any],
    ) -> Root | None:
        offset = int(options.get("offset", 1))
        if offset == 0:
            return None
        for node in walk(tree):
            if isinstance(node, HeadingNode):
                node.depth = min(6, max(1, node.depth + offset))
        return None

# src/pipeline/tree_builder.py - v1
"""Canonical tree construction: mutate -> parse -> reclassify -> transform.

The finished tree is cached under the ``ast`` kind. A cached tree is
returned as stored; plugins are not re-run on a hit. Failed builds leave
nothing in the cache.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from docartifacts.cache.keys import artifact_cache_key
from docartifacts.core.tree import (
    CodeNode,
    ComponentNode,
    ParentNode,
    Root,
    StyleNode,
)

if TYPE_CHECKING:
    from docartifacts.cache.artifact_cache import ArtifactCache
    from docartifacts.core.models import Document
    from docartifacts.documents.registry import BaseDocumentRegistry
    from docartifacts.parsing.parser import MarkdownParser
    from docartifacts.plugins.pipeline import PluginPipeline

logger = logging.getLogger(__name__)


def reclassify_code_blocks(tree: Root) -> Root:
    """Turn fenced ``style`` blocks into StyleNode and ``*component*`` blocks
    into ComponentNode, in place. Other code blocks are left alone."""
    _reclassify(tree)
    return tree


def _reclassify(parent: ParentNode) -> None:
    for index, child in enumerate(parent.children):
        if isinstance(child, CodeNode) and child.lang:
            fields = {"value": child.value, "lang": child.lang, "meta": child.meta}
            if child.lang == "style":
                parent.children[index] = StyleNode(**fields)
            elif "component" in child.lang:
                parent.children[index] = ComponentNode(**fields)
        elif isinstance(child, ParentNode):
            _reclassify(child)


class TreeBuilder:
    """Builds (or fetches) the canonical tree of a document.

    Args:
        pipeline: Plugin pipeline bound to the active PluginSet.
        parser: Parser configured with that set's extensions.
        cache: Artifact cache shared with the artifact service.
    """

    def __init__(
        self,
        pipeline: PluginPipeline,
        parser: MarkdownParser,
        cache: ArtifactCache,
    ) -> None:
        self._pipeline = pipeline
        self._parser = parser
        self._cache = cache

    @property
    def plugin_fingerprint(self) -> str:
        return self._pipeline.plugin_set.fingerprint

    def cache_key(self, document: Document) -> str:
        return artifact_cache_key("ast", document.content_digest, self.plugin_fingerprint)

    async def build(self, document: Document, registry: BaseDocumentRegistry) -> Root:
        """Return the canonical tree for ``document``.

        Raises:
            PluginFailure: A source mutation or tree transform failed.
            ParseFailure: The (mutated) content could not be parsed.
        """
        key = self.cache_key(document)
        cached = await self._cache.get(key)
        if cached is not None:
            return Root.model_validate(cached)

        start = time.monotonic()
        content = await self._pipeline.mutate_source(document, registry)
        tree = self._parser.parse(content, document.id)
        reclassify_code_blocks(tree)
        tree = await self._pipeline.transform_tree(tree, document, registry)

        await self._cache.set(key, "ast", tree.model_dump(mode="json"))
        logger.info(
            "Built tree for %s: %d top-level nodes in %.3fs",
            document.id,
            len(tree.children),
            time.monotonic() - start,
        )
        return tree

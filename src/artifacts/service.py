# src/artifacts/service.py - v2
"""Artifact service: cached, independent access to every artifact of a document.

Each request follows the same state machine, per document and artifact kind:

    CACHE_LOOKUP -> CACHE_HIT -> DONE
    CACHE_LOOKUP -> CACHE_MISS -> [TREE_BUILD] -> DERIVE -> CACHE_STORE -> DONE

A failure anywhere (FAILED) propagates to the caller and nothing is stored.
Artifacts derived from the tree share one TreeBuilder, whose own cache entry
means the tree is parsed at most once per content and plugin set. Within one
DocumentArtifacts the built tree is also held in memory, so the accessors
share a single build when the cache is disabled or unavailable.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from docartifacts.api.models import ArtifactBundle
from docartifacts.artifacts.excerpt import (
    DEFAULT_EXCERPT_LENGTH,
    collect_excerpt_text,
    prune,
)
from docartifacts.artifacts.headings import extract_headings, filter_by_depth
from docartifacts.artifacts.stats import (
    DEFAULT_WORDS_PER_MINUTE,
    time_to_read,
    word_count,
)
from docartifacts.artifacts.toc import table_of_contents
from docartifacts.cache.keys import artifact_cache_key
from docartifacts.core.models import ArtifactKind, Document, Heading, WordCount
from docartifacts.logging.context import set_document_context
from docartifacts.rendering.html import render_html

if TYPE_CHECKING:
    from docartifacts.cache.artifact_cache import ArtifactCache
    from docartifacts.core.tree import Root
    from docartifacts.documents.registry import BaseDocumentRegistry
    from docartifacts.pipeline.tree_builder import TreeBuilder

logger = logging.getLogger(__name__)

TreeSource = Callable[[], Awaitable["Root"]]


class ArtifactService:
    """Derives and caches artifacts for documents of one registry.

    Args:
        tree_builder: Canonical tree source (bound to the active plugin set).
        cache: Artifact cache.
        registry: Document registry handed to plugins.
        excerpt_length: Default excerpt length.
        words_per_minute: Reading speed for time_to_read.
    """

    def __init__(
        self,
        tree_builder: TreeBuilder,
        cache: ArtifactCache,
        registry: BaseDocumentRegistry,
        excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
    ) -> None:
        self._tree_builder = tree_builder
        self._cache = cache
        self._registry = registry
        self._excerpt_length = excerpt_length
        self._words_per_minute = words_per_minute

    @property
    def registry(self) -> BaseDocumentRegistry:
        return self._registry

    @property
    def plugin_fingerprint(self) -> str:
        return self._tree_builder.plugin_fingerprint

    @property
    def excerpt_length(self) -> int:
        return self._excerpt_length

    def for_document(self, document: Document) -> DocumentArtifacts:
        return DocumentArtifacts(self, document)

    def cache_key(self, kind: ArtifactKind, document: Document) -> str:
        return artifact_cache_key(kind, document.content_digest, self.plugin_fingerprint)

    async def tree(self, document: Document) -> Root:
        set_document_context(document.id, "ast")
        return await self._tree_builder.build(document, self._registry)

    async def cached(
        self,
        kind: ArtifactKind,
        document: Document,
        derive: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value of ``kind`` for ``document``, deriving and
        storing it on a miss. ``derive`` must return a JSON-compatible value."""
        set_document_context(document.id, kind)
        key = self.cache_key(kind, document)
        value = await self._cache.get(key)
        if value is not None:
            return value

        value = await derive()
        await self._cache.set(key, kind, value)
        logger.debug("Derived %s for %s", kind, document.id)
        return value

    def _tree_source(self, document: Document, tree: TreeSource | None) -> TreeSource:
        if tree is not None:
            return tree

        async def build() -> Root:
            return await self.tree(document)

        return build

    # --- Derivations ---
    # ``tree`` supplies the canonical tree on a miss; defaults to a fresh build.

    async def derive_html(self, document: Document, tree: TreeSource | None = None) -> str:
        source = self._tree_source(document, tree)

        async def derive() -> str:
            return render_html(await source(), allow_dangerous_html=True)

        return await self.cached("html", document, derive)

    async def derive_headings(
        self, document: Document, tree: TreeSource | None = None
    ) -> list[Heading]:
        source = self._tree_source(document, tree)

        async def derive() -> list[dict[str, Any]]:
            return [h.model_dump() for h in extract_headings(await source())]

        raw = await self.cached("headings", document, derive)
        return [Heading.model_validate(item) for item in raw]

    async def derive_toc(self, document: Document, tree: TreeSource | None = None) -> str:
        source = self._tree_source(document, tree)

        async def derive() -> str:
            return table_of_contents(await source())

        return await self.cached("toc", document, derive)

    async def derive_excerpt_source(
        self, document: Document, tree: TreeSource | None = None
    ) -> str:
        source = self._tree_source(document, tree)

        async def derive() -> str:
            return collect_excerpt_text(await source())

        return await self.cached("excerpt_source", document, derive)

    async def derive_word_count(self, document: Document) -> WordCount:
        async def derive() -> dict[str, int]:
            return word_count(document.content).model_dump()

        return WordCount.model_validate(await self.cached("word_count", document, derive))

    async def derive_time_to_read(
        self, document: Document, tree: TreeSource | None = None
    ) -> int:
        async def derive() -> int:
            html = await self.derive_html(document, tree)
            return time_to_read(html, self._words_per_minute)

        return int(await self.cached("time_to_read", document, derive))


class DocumentArtifacts:
    """Accessors for the artifacts of one document.

    Every accessor is independent: each checks its own cache entry and only
    builds the tree when it has to. The tree is built at most once per
    instance, whichever accessors need it.
    """

    def __init__(self, service: ArtifactService, document: Document) -> None:
        self._service = service
        self._document = document
        self._tree: asyncio.Future[Root] | None = None

    @property
    def document(self) -> Document:
        return self._document

    async def tree(self) -> Root:
        """The canonical tree, shared by every accessor of this instance.

        A failed build is not retried by this instance.
        """
        if self._tree is None:
            self._tree = asyncio.ensure_future(self._service.tree(self._document))
        return await self._tree

    async def html(self) -> str:
        """Rendered HTML; raw HTML in the source passes through unescaped."""
        return await self._service.derive_html(self._document, self.tree)

    async def ast(self) -> str:
        """Canonical tree serialized as JSON."""
        tree = await self.tree()
        return tree.model_dump_json()

    async def excerpt(self, max_length: int | None = None) -> str:
        """Leading document text, truncated on a word boundary with ``…``."""
        if max_length is None:
            max_length = self._service.excerpt_length
        source = await self._service.derive_excerpt_source(self._document, self.tree)
        return prune(source, max_length)

    async def headings(self, depth: int | None = None) -> list[Heading]:
        """Headings in document order, optionally only those of ``depth``.

        Raises:
            ValueError: If depth is outside 1..6.
        """
        if depth is not None and not 1 <= depth <= 6:
            raise ValueError(f"Heading depth must be between 1 and 6, got {depth}")
        headings = await self._service.derive_headings(self._document, self.tree)
        return filter_by_depth(headings, depth)

    async def time_to_read(self) -> int:
        """Estimated reading time in whole minutes (at least 1)."""
        return await self._service.derive_time_to_read(self._document, self.tree)

    async def table_of_contents(self) -> str:
        """Nested heading outline as HTML; "" when the document has no headings."""
        return await self._service.derive_toc(self._document, self.tree)

    async def word_count(self) -> WordCount:
        """Whitespace token count of the raw source."""
        return await self._service.derive_word_count(self._document)

    async def collect(self) -> ArtifactBundle:
        """Every artifact at once."""
        return ArtifactBundle(
            document_id=self._document.id,
            html=await self.html(),
            ast=json.loads(await self.ast()),
            headings=await self.headings(),
            table_of_contents=await self.table_of_contents(),
            excerpt=await self.excerpt(),
            word_count=await self.word_count(),
            time_to_read=await self.time_to_read(),
        )

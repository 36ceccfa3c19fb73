# src/plugins/base_plugin.py - v1
"""Standard plugin interface and capability mix-ins.

A plugin subclasses BasePlugin and any subset of the three capabilities:

    class Toc(BasePlugin, TreeTransformer):
        name = "toc"
        async def transform_tree(self, tree, document, all_documents, registry, options):
            ...

The registry inspects capabilities once, at startup, with isinstance checks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from docartifacts.core.models import Document
    from docartifacts.core.tree import Root
    from docartifacts.documents.registry import BaseDocumentRegistry
    from docartifacts.plugins.models import ParserExtension


class BasePlugin(ABC):
    """Identity shared by all plugins."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin identifier; part of the plugin-set fingerprint."""

    @property
    def version(self) -> str:
        """Plugin version (semver)."""
        return "0.1.0"

    @property
    def description(self) -> str:
        """Human-readable description of what this plugin does."""
        return ""


class ParserExtensionProvider(ABC):
    """Contributes grammar extensions to the shared parser."""

    @abstractmethod
    def parser_extensions(self) -> list[ParserExtension]:
        """Ordered markdown-it plugins applied once per plugin set."""


class SourceMutator(ABC):
    """Edits raw content before parsing."""

    @abstractmethod
    async def mutate_source(
        self,
        document: Document,
        all_documents: list[Document],
        options: dict[str, Any],
    ) -> str | None:
        """Rewrite ``document.content`` in place, or return replacement content.

        ``document`` is a draft copy shared by all mutators of this document;
        the stored document is never touched. Mutators run concurrently.
        """


class TreeTransformer(ABC):
    """Edits the parsed tree before it is frozen."""

    @abstractmethod
    async def transform_tree(
        self,
        tree: Root,
        document: Document,
        all_documents: list[Document],
        registry: BaseDocumentRegistry,
        options: dict[str, Any],
    ) -> Root | None:
        """Edit ``tree`` in place, or return a replacement root.

        Transformers run sequentially in registration order, each seeing the
        tree as left by the previous one.
        """

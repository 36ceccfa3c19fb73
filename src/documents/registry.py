# src/documents/registry.py - v1
"""Document registry: read access to every known document.

Plugins receive the registry for cross-document lookups (link resolution,
transclusion). The artifact core only ever reads from it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from docartifacts.core.models import Document

logger = logging.getLogger(__name__)


class BaseDocumentRegistry(ABC):
    """Read interface over the external document store."""

    @abstractmethod
    def list_all(self) -> list[Document]:
        """Return every registered document."""

    @abstractmethod
    def get_by_id(self, document_id: str) -> Document | None:
        """Return the document with ``document_id``, or None."""


class InMemoryDocumentRegistry(BaseDocumentRegistry):
    """Registry holding documents in insertion order."""

    def __init__(self, documents: Iterable[Document] | None = None) -> None:
        self._documents: dict[str, Document] = {}
        for document in documents or ():
            self.add(document)

    def add(self, document: Document) -> None:
        """Register or replace a document."""
        if document.id in self._documents:
            logger.debug("Replacing document: %s", document.id)
        self._documents[document.id] = document

    def remove(self, document_id: str) -> None:
        """Forget a document. Unknown ids are ignored."""
        self._documents.pop(document_id, None)

    def list_all(self) -> list[Document]:
        return list(self._documents.values())

    def get_by_id(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

# src/documents/loader.py - v1
"""Directory loader: discover markdown files and register them as documents.

Document ids are POSIX paths relative to the scan root, and each document's
content digest is computed here since no external store supplies one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from docartifacts.cache.fingerprint import compute_content_digest
from docartifacts.core.models import Document
from docartifacts.documents.registry import InMemoryDocumentRegistry

logger = logging.getLogger(__name__)

DEFAULT_FORMATS: tuple[str, ...] = (".md", ".markdown")


def document_from_file(path: Path, document_id: str | None = None) -> Document:
    """Read one markdown file into a Document."""
    content = path.read_text(encoding="utf-8")
    return Document(
        id=document_id or path.name,
        content=content,
        content_digest=compute_content_digest(content),
        source_path=path,
    )


def scan_directory(
    root: Path,
    recursive: bool = True,
    formats: Iterable[str] | None = None,
) -> list[Path]:
    """List markdown files under ``root``, sorted for a stable order.

    Raises:
        ValueError: If ``root`` is not a directory.
    """
    if not root.is_dir():
        raise ValueError(f"Scan root is not a directory: {root}")

    allowed = {f.lower() for f in (formats or DEFAULT_FORMATS)}
    pattern_fn = root.rglob if recursive else root.glob

    files = [
        path
        for path in pattern_fn("*")
        if path.is_file()
        and path.suffix.lower() in allowed
        and not any(part.startswith(".") for part in path.relative_to(root).parts)
    ]
    return sorted(files)


def load_directory(
    root: Path,
    recursive: bool = True,
    formats: Iterable[str] | None = None,
) -> InMemoryDocumentRegistry:
    """Build a registry from every markdown file under ``root``."""
    registry = InMemoryDocumentRegistry()
    for path in scan_directory(root, recursive=recursive, formats=formats):
        document_id = path.relative_to(root).as_posix()
        try:
            registry.add(document_from_file(path, document_id=document_id))
        except UnicodeDecodeError as exc:
            logger.warning("Skipping non UTF-8 file %s: %s", path, exc)
    logger.info("Loaded %d documents from %s", len(registry), root)
    return registry

# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
The canonical tree node types live in core.tree.
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Literal, get_args

from pydantic import BaseModel, Field

# === ARTIFACT KINDS ===

ArtifactKind = Literal[
    "ast",
    "html",
    "headings",
    "toc",
    "excerpt_source",
    "word_count",
    "time_to_read",
]

ARTIFACT_KINDS: tuple[str, ...] = get_args(ArtifactKind)


# === SOURCE DOCUMENTS ===


class Document(BaseModel):
    """A markdown source document as handed over by the document store.

    ``content_digest`` is supplied by the store and treated as given; it is
    never recomputed from ``content`` here.
    """

    id: str
    content: str
    content_digest: str
    source_path: Path | None = None


# === DERIVED ARTIFACTS ===


class HeadingLevel(IntEnum):
    """Heading depth filter values accepted by headings()."""

    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6


class Heading(BaseModel):
    """A document heading.

    ``value`` is the first plain-text run below the heading node, so a heading
    such as ``## *Hello* world`` yields ``"Hello"``. None when the heading
    holds no text node at all.
    """

    value: str | None = None
    depth: int = Field(ge=1, le=6)


class WordCount(BaseModel):
    """Naive whitespace token count over the raw document content."""

    words: int = Field(ge=0)

# src/artifacts/excerpt.py - v1
"""Excerpt source text and word-boundary truncation."""

from __future__ import annotations

import re

from docartifacts.core.tree import InlineCodeNode, Root, TextNode, walk

DEFAULT_EXCERPT_LENGTH = 140
ELLIPSIS = "…"

_TRAILING_WORD_RE = re.compile(r"\s*\S+$")
_WORD_PAIR_RE = re.compile(r"\w\w")


def collect_excerpt_text(tree: Root) -> str:
    """Text and inline code values in document order, joined by single spaces."""
    return " ".join(
        node.value for node in walk(tree) if isinstance(node, (TextNode, InlineCodeNode))
    )


def prune(text: str, max_length: int = DEFAULT_EXCERPT_LENGTH, marker: str = ELLIPSIS) -> str:
    """Truncate ``text`` to at most ``max_length`` characters on a word boundary.

    Text that already fits is returned unchanged; otherwise ``marker`` is
    appended to the truncated text.

    Raises:
        ValueError: If max_length is negative.
    """
    if max_length < 0:
        raise ValueError(f"max_length must be >= 0, got {max_length}")
    if len(text) <= max_length:
        return text
    cut = text[: max_length + 1]
    if _WORD_PAIR_RE.fullmatch(cut[-2:]):
        # The cut lands inside a word: drop the partial word.
        cut = _TRAILING_WORD_RE.sub("", cut)
    else:
        cut = cut[:-1].rstrip()
    return cut + marker

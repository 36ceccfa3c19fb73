# src/artifacts/headings.py - v1
"""Heading extraction from the canonical tree."""

from __future__ import annotations

from docartifacts.core.models import Heading
from docartifacts.core.tree import HeadingNode, Root, TextNode, walk


def _first_text(node: HeadingNode) -> str | None:
    for descendant in walk(node):
        if isinstance(descendant, TextNode):
            return descendant.value
    return None


def extract_headings(tree: Root) -> list[Heading]:
    """All headings in document order.

    A heading's value is its first text run only: ``## *Hello* world`` gives
    ``"Hello"``. Use the table of contents for full heading text.
    """
    return [
        Heading(value=_first_text(node), depth=node.depth)
        for node in walk(tree)
        if isinstance(node, HeadingNode)
    ]


def filter_by_depth(headings: list[Heading], depth: int | None) -> list[Heading]:
    """Keep headings of exactly ``depth``; None keeps everything.

    Raises:
        ValueError: If depth is outside 1..6.
    """
    if depth is None:
        return list(headings)
    if not 1 <= int(depth) <= 6:
        raise ValueError(f"Heading depth must be between 1 and 6, got {depth}")
    return [heading for heading in headings if heading.depth == int(depth)]

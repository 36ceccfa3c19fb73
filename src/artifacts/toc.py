# src/artifacts/toc.py - v1
"""Table of contents: nested heading outline with GitHub-style anchors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from docartifacts.core.tree import (
    HeadingNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    Root,
    TextNode,
    node_text,
    walk,
)
from docartifacts.rendering.html import render_html

_STRIP_RE = re.compile(r"[^\w\- ]")


class Slugger:
    """Heading anchor generator matching GitHub's slugs.

    Repeated slugs within one document get ``-1``, ``-2``, ... suffixes.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, value: str) -> str:
        base = _STRIP_RE.sub("", value.lower()).replace(" ", "-")
        slug = base
        while slug in self._occurrences:
            self._occurrences[base] += 1
            slug = f"{base}-{self._occurrences[base]}"
        self._occurrences[slug] = 0
        return slug

    def reset(self) -> None:
        self._occurrences.clear()


@dataclass
class TocEntry:
    label: str
    slug: str
    depth: int
    children: list[TocEntry] = field(default_factory=list)


def build_outline(tree: Root) -> list[TocEntry]:
    """Nest headings by depth. A deeper heading belongs to the closest
    shallower heading before it; skipped levels are not filled in."""
    slugger = Slugger()
    roots: list[TocEntry] = []
    stack: list[TocEntry] = []
    for node in walk(tree):
        if not isinstance(node, HeadingNode):
            continue
        label = node_text(node)
        entry = TocEntry(label=label, slug=slugger.slug(label), depth=node.depth)
        while stack and stack[-1].depth >= entry.depth:
            stack.pop()
        (stack[-1].children if stack else roots).append(entry)
        stack.append(entry)
    return roots


def outline_to_tree(entries: list[TocEntry]) -> ListNode:
    items = []
    for entry in entries:
        link = LinkNode(url=f"#{entry.slug}", children=[TextNode(value=entry.label)])
        children: list = [ParagraphNode(children=[link])]
        if entry.children:
            children.append(outline_to_tree(entry.children))
        items.append(ListItemNode(children=children))
    return ListNode(ordered=False, spread=False, children=items)


def table_of_contents(tree: Root) -> str:
    """Rendered HTML outline of the document's headings, or "" without headings."""
    outline = build_outline(tree)
    if not outline:
        return ""
    return render_html(Root(children=[outline_to_tree(outline)]), allow_dangerous_html=False)

# src/rendering/html.py - v1
"""Render tree -> HTML string."""

from __future__ import annotations

from html import escape

from docartifacts.core.tree import BaseNode
from docartifacts.rendering.render_tree import (
    Element,
    RawLeaf,
    RenderNode,
    TextLeaf,
    to_render_tree,
)

VOID_TAGS = frozenset({"br", "hr", "img", "input"})


def _attributes(properties: dict[str, str | bool | None]) -> str:
    parts: list[str] = []
    for name, value in properties.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape(value, quote=True)}"')
    return "".join(parts)


def to_html(nodes: list[RenderNode]) -> str:
    """Serialize render nodes. Text is escaped, raw leaves are not."""
    out: list[str] = []
    for node in nodes:
        if isinstance(node, TextLeaf):
            out.append(escape(node.value, quote=False))
        elif isinstance(node, RawLeaf):
            out.append(node.value)
        elif isinstance(node, Element):
            attrs = _attributes(node.properties)
            if node.tag in VOID_TAGS:
                out.append(f"<{node.tag}{attrs}>")
            else:
                out.append(f"<{node.tag}{attrs}>{to_html(node.children)}</{node.tag}>")
    return "".join(out)


def render_html(tree: BaseNode, allow_dangerous_html: bool = True) -> str:
    """Render a canonical (sub)tree straight to HTML."""
    return to_html(to_render_tree(tree, allow_dangerous_html=allow_dangerous_html))

# src/rendering/render_tree.py - v2
"""Canonical tree -> render tree (HTML element structure).

The render tree is the intermediate form between the markdown tree and the
HTML string: elements with properties, escaped text leaves and raw markup
leaves. Conversion dispatches on node type through ``_HANDLERS``, which
covers every kind in ``core.tree.NODE_TYPES``.

Rendering choices for reclassified code blocks:
  style      -> ``<style>`` element holding the block's CSS verbatim
  component  -> ``<div data-component="<lang>">`` holding the source as text
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

from docartifacts.core.tree import (
    BaseNode,
    BlockquoteNode,
    CodeNode,
    ComponentNode,
    ExtensionNode,
    HeadingNode,
    HtmlNode,
    ImageNode,
    InlineCodeNode,
    InlineHtmlNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    ParentNode,
    Root,
    StyleNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
)


@dataclass
class TextLeaf:
    """Text content; escaped when serialized."""

    value: str


@dataclass
class RawLeaf:
    """Markup passed through to the output unchanged."""

    value: str


@dataclass
class Element:
    tag: str
    properties: dict[str, str | bool | None] = field(default_factory=dict)
    children: list[RenderNode] = field(default_factory=list)


RenderNode = Union[Element, TextLeaf, RawLeaf]


@dataclass(frozen=True)
class RenderOptions:
    """Renderer switches.

    ``allow_dangerous_html`` emits ``html`` and ``inline_html`` nodes verbatim;
    when off they are dropped.
    """

    allow_dangerous_html: bool = True


# Handlers take the concrete node class registered for their type name.
Handler = Callable[[Any, RenderOptions], list[RenderNode]]

_NEWLINE = "\n"


def to_render_tree(node: BaseNode, allow_dangerous_html: bool = True) -> list[RenderNode]:
    """Convert ``node`` (usually a Root) into a list of render nodes."""
    return _render(node, RenderOptions(allow_dangerous_html=allow_dangerous_html))


def _render(node: BaseNode, options: RenderOptions) -> list[RenderNode]:
    handler = _HANDLERS.get(node.type)
    if handler is None:
        raise ValueError(f"No render handler for node type {node.type!r}")
    return handler(node, options)


def _inline(node: BaseNode, options: RenderOptions) -> list[RenderNode]:
    out: list[RenderNode] = []
    if isinstance(node, ParentNode):
        for child in node.children:
            out.extend(_render(child, options))
    return out


def _blocks(
    children: list[BaseNode], options: RenderOptions, padded: bool = False
) -> list[RenderNode]:
    """Render block children separated by newlines.

    ``padded`` adds a newline before the first and after the last block, as
    container elements do in markdown-it output.
    """
    out: list[RenderNode] = []
    for child in children:
        rendered = _render(child, options)
        if not rendered:
            continue
        if out or padded:
            out.append(TextLeaf(_NEWLINE))
        out.extend(rendered)
    if out and padded:
        out.append(TextLeaf(_NEWLINE))
    return out


def _wrap(tag: str, properties: dict[str, str | bool | None] | None = None) -> Handler:
    def handler(node: BaseNode, options: RenderOptions) -> list[RenderNode]:
        return [Element(tag, dict(properties or {}), _inline(node, options))]

    return handler


# --- Block handlers ---


def _root(node: Root, options: RenderOptions) -> list[RenderNode]:
    return _blocks(node.children, options)


def _heading(node: HeadingNode, options: RenderOptions) -> list[RenderNode]:
    return [Element(f"h{node.depth}", {}, _inline(node, options))]


def _thematic_break(node: BaseNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("hr")]


def _blockquote(node: BlockquoteNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("blockquote", {}, _blocks(node.children, options, padded=True))]


def _list(node: ListNode, options: RenderOptions) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {}
    if node.ordered and node.start is not None and node.start != 1:
        properties["start"] = str(node.start)
    items: list[RenderNode] = []
    for item in node.children:
        items.append(TextLeaf(_NEWLINE))
        items.extend(_list_item(item, options, tight=not node.spread))
    items.append(TextLeaf(_NEWLINE))
    return [Element("ol" if node.ordered else "ul", properties, items)]


def _list_item(
    node: ListItemNode, options: RenderOptions, tight: bool = False
) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {}
    content: list[RenderNode] = []
    if node.checked is not None:
        properties["class"] = "task-list-item"
        content.append(
            Element(
                "input",
                {"type": "checkbox", "disabled": True, "checked": node.checked},
            )
        )
        content.append(TextLeaf(" "))

    has_block = False
    for index, child in enumerate(node.children):
        if tight and isinstance(child, ParagraphNode):
            if index > 0:
                content.append(TextLeaf(_NEWLINE))
            content.extend(_inline(child, options))
            continue
        has_block = True
        content.append(TextLeaf(_NEWLINE))
        content.extend(_render(child, options))
    if has_block:
        content.append(TextLeaf(_NEWLINE))
    return [Element("li", properties, content)]


def _code(node: CodeNode, options: RenderOptions) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {}
    if node.lang:
        properties["class"] = f"language-{node.lang}"
    return [Element("pre", {}, [Element("code", properties, [TextLeaf(node.value + "\n")])])]


def _style(node: StyleNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("style", {}, [RawLeaf(node.value)])]


def _component(node: ComponentNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("div", {"data-component": node.lang}, [TextLeaf(node.value)])]


def _html(node: HtmlNode | InlineHtmlNode, options: RenderOptions) -> list[RenderNode]:
    if not options.allow_dangerous_html:
        return []
    return [RawLeaf(node.value)]


def _table(node: TableNode, options: RenderOptions) -> list[RenderNode]:
    head: list[RenderNode] = []
    body: list[RenderNode] = []
    for row in node.children:
        is_header = isinstance(row, TableRowNode) and any(
            isinstance(cell, TableCellNode) and cell.header for cell in row.children
        )
        target = head if is_header else body
        target.append(TextLeaf(_NEWLINE))
        target.extend(_render(row, options))
    sections: list[RenderNode] = []
    if head:
        sections.extend([TextLeaf(_NEWLINE), Element("thead", {}, head + [TextLeaf(_NEWLINE)])])
    if body:
        sections.extend([TextLeaf(_NEWLINE), Element("tbody", {}, body + [TextLeaf(_NEWLINE)])])
    sections.append(TextLeaf(_NEWLINE))
    return [Element("table", {}, sections)]


def _table_row(node: TableRowNode, options: RenderOptions) -> list[RenderNode]:
    cells: list[RenderNode] = []
    for cell in node.children:
        cells.append(TextLeaf(_NEWLINE))
        cells.extend(_render(cell, options))
    cells.append(TextLeaf(_NEWLINE))
    return [Element("tr", {}, cells)]


def _table_cell(node: TableCellNode, options: RenderOptions) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {}
    if node.align:
        properties["style"] = f"text-align:{node.align}"
    return [Element("th" if node.header else "td", properties, _inline(node, options))]


# --- Inline handlers ---


def _text(node: TextNode, options: RenderOptions) -> list[RenderNode]:
    return [TextLeaf(node.value)]


def _inline_code(node: InlineCodeNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("code", {}, [TextLeaf(node.value)])]


def _link(node: LinkNode, options: RenderOptions) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {"href": node.url}
    if node.title is not None:
        properties["title"] = node.title
    return [Element("a", properties, _inline(node, options))]


def _image(node: ImageNode, options: RenderOptions) -> list[RenderNode]:
    properties: dict[str, str | bool | None] = {"src": node.url, "alt": node.alt}
    if node.title is not None:
        properties["title"] = node.title
    return [Element("img", properties)]


def _break(node: BaseNode, options: RenderOptions) -> list[RenderNode]:
    return [Element("br"), TextLeaf(_NEWLINE)]


def _extension(node: ExtensionNode, options: RenderOptions) -> list[RenderNode]:
    if node.children:
        content = (
            _blocks(node.children, options, padded=True)
            if node.block
            else _inline(node, options)
        )
    elif node.tag and node.value:
        content = [TextLeaf(node.value)]
    else:
        content = []
    if not node.tag:
        return content
    return [Element(node.tag, dict(node.attrs), content)]


_HANDLERS: dict[str, Handler] = {
    "root": _root,
    "paragraph": _wrap("p"),
    "heading": _heading,
    "thematic_break": _thematic_break,
    "blockquote": _blockquote,
    "list": _list,
    "list_item": _list_item,
    "code": _code,
    "style": _style,
    "component": _component,
    "html": _html,
    "table": _table,
    "table_row": _table_row,
    "table_cell": _table_cell,
    "text": _text,
    "emphasis": _wrap("em"),
    "strong": _wrap("strong"),
    "delete": _wrap("del"),
    "inline_code": _inline_code,
    "link": _link,
    "image": _image,
    "inline_html": _html,
    "break": _break,
    "extension": _extension,
}

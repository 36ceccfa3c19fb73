# src/parsing/converter.py - v1
"""Convert a markdown-it token stream into the canonical tree.

markdown-it produces a flat token list; SyntaxTreeNode nests it, and the
handlers below map each markdown-it node type onto a core.tree node. Node
types contributed by parser extensions that have no handler become
ExtensionNode so that no content is lost.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from docartifacts.core.tree import (
    BlockquoteNode,
    BreakNode,
    CodeNode,
    DeleteNode,
    EmphasisNode,
    ExtensionNode,
    HeadingNode,
    HtmlNode,
    ImageNode,
    InlineCodeNode,
    InlineHtmlNode,
    LinkNode,
    ListItemNode,
    ListNode,
    Node,
    ParagraphNode,
    Root,
    StrongNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    ThematicBreakNode,
)

_ALIGN_RE = re.compile(r"text-align\s*:\s*(left|right|center)")

Handler = Callable[[SyntaxTreeNode], list[Node]]


def tokens_to_tree(tokens: Sequence[Token]) -> Root:
    """Build the canonical Root from markdown-it tokens."""
    syntax_root = SyntaxTreeNode(list(tokens))
    return Root(children=_convert_children(syntax_root))


def _convert_children(node: SyntaxTreeNode) -> list[Node]:
    converted: list[Node] = []
    for child in node.children:
        converted.extend(_convert(child))
    return _merge_text(converted)


def _convert(node: SyntaxTreeNode) -> list[Node]:
    handler = _HANDLERS.get(node.type, _extension)
    return handler(node)


def _merge_text(nodes: list[Node]) -> list[Node]:
    """Join adjacent text nodes (soft line breaks arrive as separate tokens)."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, TextNode) and merged and isinstance(merged[-1], TextNode):
            merged[-1] = TextNode(value=merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged


def _plain_text(node: SyntaxTreeNode) -> str:
    if node.type in ("text", "code_inline"):
        return node.content
    if node.type == "softbreak":
        return "\n"
    return "".join(_plain_text(child) for child in node.children)


def _attr(node: SyntaxTreeNode, name: str) -> str | None:
    value = node.attrs.get(name)
    return None if value is None else str(value)


# --- Block handlers ---


def _splice(node: SyntaxTreeNode) -> list[Node]:
    return _convert_children(node)


def _paragraph(node: SyntaxTreeNode) -> list[Node]:
    return [ParagraphNode(children=_convert_children(node))]


def _heading(node: SyntaxTreeNode) -> list[Node]:
    return [HeadingNode(depth=int(node.tag[1]), children=_convert_children(node))]


def _thematic_break(node: SyntaxTreeNode) -> list[Node]:
    return [ThematicBreakNode()]


def _blockquote(node: SyntaxTreeNode) -> list[Node]:
    return [BlockquoteNode(children=_convert_children(node))]


def _is_loose(item: SyntaxTreeNode) -> bool:
    return any(child.type == "paragraph" and not child.hidden for child in item.children)


def _list(node: SyntaxTreeNode) -> list[Node]:
    ordered = node.type == "ordered_list"
    start: int | None = None
    if ordered:
        raw_start = _attr(node, "start")
        start = int(raw_start) if raw_start is not None else 1
    items = _convert_children(node)
    spread = any(_is_loose(item) for item in node.children)
    return [ListNode(ordered=ordered, start=start, spread=spread, children=items)]


def _list_item(node: SyntaxTreeNode) -> list[Node]:
    checked = (node.meta or {}).get("checked")
    return [
        ListItemNode(
            spread=_is_loose(node),
            checked=checked if isinstance(checked, bool) else None,
            children=_convert_children(node),
        )
    ]


def _split_info(info: str) -> tuple[str | None, str | None]:
    parts = info.strip().split(maxsplit=1)
    if not parts:
        return None, None
    return parts[0], parts[1] if len(parts) > 1 else None


def _fence(node: SyntaxTreeNode) -> list[Node]:
    lang, meta = _split_info(node.info)
    return [CodeNode(value=node.content.removesuffix("\n"), lang=lang, meta=meta)]


def _code_block(node: SyntaxTreeNode) -> list[Node]:
    return [CodeNode(value=node.content.removesuffix("\n"))]


def _html_block(node: SyntaxTreeNode) -> list[Node]:
    return [HtmlNode(value=node.content.removesuffix("\n"))]


def _table(node: SyntaxTreeNode) -> list[Node]:
    return [TableNode(children=_convert_children(node))]


def _table_row(node: SyntaxTreeNode) -> list[Node]:
    return [TableRowNode(children=_convert_children(node))]


def _table_cell(node: SyntaxTreeNode) -> list[Node]:
    match = _ALIGN_RE.search(_attr(node, "style") or "")
    return [
        TableCellNode(
            header=node.type == "th",
            align=match.group(1) if match else None,  # type: ignore[arg-type]
            children=_convert_children(node),
        )
    ]


# --- Inline handlers ---


def _text(node: SyntaxTreeNode) -> list[Node]:
    return [TextNode(value=node.content)]


def _softbreak(node: SyntaxTreeNode) -> list[Node]:
    return [TextNode(value="\n")]


def _hardbreak(node: SyntaxTreeNode) -> list[Node]:
    return [BreakNode()]


def _emphasis(node: SyntaxTreeNode) -> list[Node]:
    return [EmphasisNode(children=_convert_children(node))]


def _strong(node: SyntaxTreeNode) -> list[Node]:
    return [StrongNode(children=_convert_children(node))]


def _delete(node: SyntaxTreeNode) -> list[Node]:
    return [DeleteNode(children=_convert_children(node))]


def _inline_code(node: SyntaxTreeNode) -> list[Node]:
    return [InlineCodeNode(value=node.content)]


def _link(node: SyntaxTreeNode) -> list[Node]:
    return [
        LinkNode(
            url=_attr(node, "href") or "",
            title=_attr(node, "title"),
            children=_convert_children(node),
        )
    ]


def _image(node: SyntaxTreeNode) -> list[Node]:
    return [
        ImageNode(
            url=_attr(node, "src") or "",
            alt=_plain_text(node),
            title=_attr(node, "title"),
        )
    ]


def _inline_html(node: SyntaxTreeNode) -> list[Node]:
    return [InlineHtmlNode(value=node.content)]


def _extension(node: SyntaxTreeNode) -> list[Node]:
    return [
        ExtensionNode(
            name=node.type,
            tag=node.tag or "",
            block=bool(node.block),
            value=node.content or None,
            attrs={str(k): str(v) for k, v in node.attrs.items()},
            children=_convert_children(node),
        )
    ]


_HANDLERS: dict[str, Handler] = {
    "inline": _splice,
    "paragraph": _paragraph,
    "heading": _heading,
    "hr": _thematic_break,
    "blockquote": _blockquote,
    "bullet_list": _list,
    "ordered_list": _list,
    "list_item": _list_item,
    "fence": _fence,
    "code_block": _code_block,
    "html_block": _html_block,
    "table": _table,
    "thead": _splice,
    "tbody": _splice,
    "tr": _table_row,
    "th": _table_cell,
    "td": _table_cell,
    "text": _text,
    "softbreak": _softbreak,
    "hardbreak": _hardbreak,
    "em": _emphasis,
    "strong": _strong,
    "s": _delete,
    "code_inline": _inline_code,
    "link": _link,
    "image": _image,
    "html_inline": _inline_html,
}

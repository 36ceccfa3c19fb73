# src/core/tree.py - v2
"""Canonical document tree as a tagged union of Pydantic node models.

Every node carries a literal ``type`` discriminator, so a serialized tree
round-trips through ``Root.model_validate`` without losing node kinds.
Code that dispatches on node kind keys its handler tables by ``NODE_TYPES``;
adding a node class here without a handler is caught by the test suite.
"""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BaseNode(BaseModel):
    """Common base for all tree nodes."""

    model_config = ConfigDict(extra="forbid")

    type: str


class ParentNode(BaseNode):
    """Node holding ordered child nodes."""

    children: list[Node] = Field(default_factory=list)


class LiteralNode(BaseNode):
    """Leaf node holding a string value."""

    value: str


# === BLOCK NODES ===


class Root(ParentNode):
    type: Literal["root"] = "root"


class ParagraphNode(ParentNode):
    type: Literal["paragraph"] = "paragraph"


class HeadingNode(ParentNode):
    type: Literal["heading"] = "heading"
    depth: int = Field(ge=1, le=6)


class ThematicBreakNode(BaseNode):
    type: Literal["thematic_break"] = "thematic_break"


class BlockquoteNode(ParentNode):
    type: Literal["blockquote"] = "blockquote"


class ListNode(ParentNode):
    type: Literal["list"] = "list"
    ordered: bool = False
    start: int | None = None
    spread: bool = False


class ListItemNode(ParentNode):
    type: Literal["list_item"] = "list_item"
    spread: bool = False
    checked: bool | None = None


class CodeLikeNode(LiteralNode):
    """Fenced or indented code; also the shape of reclassified blocks."""

    lang: str | None = None
    meta: str | None = None


class CodeNode(CodeLikeNode):
    type: Literal["code"] = "code"


class StyleNode(CodeLikeNode):
    type: Literal["style"] = "style"


class ComponentNode(CodeLikeNode):
    type: Literal["component"] = "component"


class HtmlNode(LiteralNode):
    type: Literal["html"] = "html"


class TableNode(ParentNode):
    type: Literal["table"] = "table"


class TableRowNode(ParentNode):
    type: Literal["table_row"] = "table_row"


class TableCellNode(ParentNode):
    type: Literal["table_cell"] = "table_cell"
    header: bool = False
    align: Literal["left", "right", "center"] | None = None


# === INLINE NODES ===


class TextNode(LiteralNode):
    type: Literal["text"] = "text"


class EmphasisNode(ParentNode):
    type: Literal["emphasis"] = "emphasis"


class StrongNode(ParentNode):
    type: Literal["strong"] = "strong"


class DeleteNode(ParentNode):
    type: Literal["delete"] = "delete"


class InlineCodeNode(LiteralNode):
    type: Literal["inline_code"] = "inline_code"


class LinkNode(ParentNode):
    type: Literal["link"] = "link"
    url: str
    title: str | None = None


class ImageNode(BaseNode):
    type: Literal["image"] = "image"
    url: str
    alt: str = ""
    title: str | None = None


class InlineHtmlNode(LiteralNode):
    type: Literal["inline_html"] = "inline_html"


class BreakNode(BaseNode):
    type: Literal["break"] = "break"


# === PARSER EXTENSIONS ===


class ExtensionNode(ParentNode):
    """Token kind contributed by a parser extension and unknown to the core."""

    type: Literal["extension"] = "extension"
    name: str
    tag: str = ""
    block: bool = False
    value: str | None = None
    attrs: dict[str, str] = Field(default_factory=dict)


Node = Annotated[
    Union[
        ParagraphNode,
        HeadingNode,
        ThematicBreakNode,
        BlockquoteNode,
        ListNode,
        ListItemNode,
        CodeNode,
        StyleNode,
        ComponentNode,
        HtmlNode,
        TableNode,
        TableRowNode,
        TableCellNode,
        TextNode,
        EmphasisNode,
        StrongNode,
        DeleteNode,
        InlineCodeNode,
        LinkNode,
        ImageNode,
        InlineHtmlNode,
        BreakNode,
        ExtensionNode,
    ],
    Field(discriminator="type"),
]

NODE_CLASSES: tuple[type[BaseNode], ...] = (
    Root,
    ParagraphNode,
    HeadingNode,
    ThematicBreakNode,
    BlockquoteNode,
    ListNode,
    ListItemNode,
    CodeNode,
    StyleNode,
    ComponentNode,
    HtmlNode,
    TableNode,
    TableRowNode,
    TableCellNode,
    TextNode,
    EmphasisNode,
    StrongNode,
    DeleteNode,
    InlineCodeNode,
    LinkNode,
    ImageNode,
    InlineHtmlNode,
    BreakNode,
    ExtensionNode,
)

NODE_TYPES: frozenset[str] = frozenset(
    cls.model_fields["type"].default for cls in NODE_CLASSES
)

for _cls in NODE_CLASSES:
    if issubclass(_cls, ParentNode):
        _cls.model_rebuild()
ParentNode.model_rebuild()


# --- Helpers ---


def walk(node: BaseNode) -> Iterator[BaseNode]:
    """Yield ``node`` and all its descendants depth-first, in document order."""
    yield node
    if isinstance(node, ParentNode):
        for child in node.children:
            yield from walk(child)


def node_text(node: BaseNode) -> str:
    """Concatenated textual content of a node (values, image alts).

    Raw HTML contributes nothing.
    """
    if isinstance(node, (HtmlNode, InlineHtmlNode)):
        return ""
    if isinstance(node, LiteralNode):
        return node.value
    if isinstance(node, ImageNode):
        return node.alt
    if isinstance(node, ExtensionNode) and node.value and not node.children:
        return node.value
    if isinstance(node, ParentNode):
        return "".join(node_text(child) for child in node.children)
    return ""

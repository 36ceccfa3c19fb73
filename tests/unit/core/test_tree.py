# tests/unit/core/test_tree.py - v2
"""Tests for core/tree.py - node union, walk and node_text."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from docartifacts.core.tree import (
    NODE_CLASSES,
    NODE_TYPES,
    CodeNode,
    EmphasisNode,
    ExtensionNode,
    HeadingNode,
    ImageNode,
    InlineHtmlNode,
    ParagraphNode,
    Root,
    StyleNode,
    TextNode,
    node_text,
    walk,
)


def _heading_tree() -> Root:
    return Root(
        children=[
            HeadingNode(
                depth=2,
                children=[EmphasisNode(children=[TextNode(value="Hello")]), TextNode(value=" world")],
            ),
            ParagraphNode(children=[ImageNode(url="a.png", alt="logo")]),
        ]
    )


class TestNodeModels:
    def test_node_types_unique(self):
        assert len(NODE_TYPES) == len(NODE_CLASSES)

    def test_heading_depth_bounds(self):
        with pytest.raises(ValidationError):
            HeadingNode(depth=7)
        with pytest.raises(ValidationError):
            HeadingNode(depth=0)

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            TextNode(value="x", colour="red")  # type: ignore[call-arg]

    def test_roundtrip_preserves_kinds(self):
        tree = Root(
            children=[
                StyleNode(value=".a {}", lang="style"),
                CodeNode(value="x = 1", lang="py"),
                ExtensionNode(name="math_block", value="e=mc^2", block=True),
            ]
        )
        restored = Root.model_validate(tree.model_dump(mode="json"))
        assert restored == tree
        assert [type(c) for c in restored.children] == [StyleNode, CodeNode, ExtensionNode]

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Root.model_validate({"type": "root", "children": [{"type": "nope"}]})


class TestWalk:
    def test_preorder(self):
        types = [node.type for node in walk(_heading_tree())]
        assert types == ["root", "heading", "emphasis", "text", "text", "paragraph", "image"]


class TestNodeText:
    def test_concatenates_descendants(self):
        assert node_text(_heading_tree().children[0]) == "Hello world"

    def test_image_alt(self):
        assert node_text(_heading_tree().children[1]) == "logo"

    def test_extension_value(self):
        assert node_text(ExtensionNode(name="math_inline", value="x^2")) == "x^2"

    def test_raw_html_skipped(self):
        heading = HeadingNode(
            depth=1,
            children=[
                TextNode(value="Hello "),
                InlineHtmlNode(value="<em>"),
                TextNode(value="world"),
                InlineHtmlNode(value="</em>"),
            ],
        )
        assert node_text(heading) == "Hello world"

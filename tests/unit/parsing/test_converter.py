# tests/unit/parsing/test_converter.py - v1
"""Tests for parsing/converter.py - markdown-it tokens to canonical tree."""

from __future__ import annotations

import pytest
from markdown_it import MarkdownIt
from markdown_it.token import Token

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
    ParagraphNode,
    StrongNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    ThematicBreakNode,
)
from docartifacts.parsing.converter import tokens_to_tree


@pytest.fixture
def md():
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


def _convert(md, text):
    return tokens_to_tree(md.parse(text))


class TestBlocks:
    def test_heading_and_paragraph(self, md):
        tree = _convert(md, "# Title\n\nHello *world*\n")
        heading, paragraph = tree.children
        assert heading == HeadingNode(depth=1, children=[TextNode(value="Title")])
        assert paragraph == ParagraphNode(
            children=[TextNode(value="Hello "), EmphasisNode(children=[TextNode(value="world")])]
        )

    def test_heading_depths(self, md):
        tree = _convert(md, "### three\n\n###### six\n")
        assert [h.depth for h in tree.children] == [3, 6]

    def test_fence_with_info(self, md):
        (code,) = _convert(md, "```js title=app.js\nconsole.log(1)\n```\n").children
        assert code == CodeNode(value="console.log(1)", lang="js", meta="title=app.js")

    def test_fence_without_info(self, md):
        (code,) = _convert(md, "```\nplain\n```\n").children
        assert code.lang is None
        assert code.meta is None

    def test_indented_code(self, md):
        (code,) = _convert(md, "    indented\n").children
        assert code == CodeNode(value="indented")

    def test_html_block(self, md):
        (node,) = _convert(md, "<div>raw</div>\n").children
        assert node == HtmlNode(value="<div>raw</div>")

    def test_thematic_break(self, md):
        (node,) = _convert(md, "***\n").children
        assert isinstance(node, ThematicBreakNode)

    def test_blockquote(self, md):
        (node,) = _convert(md, "> quoted\n").children
        assert node == BlockquoteNode(children=[ParagraphNode(children=[TextNode(value="quoted")])])

    def test_tight_bullet_list(self, md):
        (node,) = _convert(md, "- a\n- b\n").children
        assert isinstance(node, ListNode)
        assert node.ordered is False
        assert node.start is None
        assert node.spread is False
        assert node.children[0] == ListItemNode(
            children=[ParagraphNode(children=[TextNode(value="a")])]
        )

    def test_loose_ordered_list(self, md):
        (node,) = _convert(md, "3. a\n\n4. b\n").children
        assert node.ordered is True
        assert node.start == 3
        assert node.spread is True

    def test_ordered_list_default_start(self, md):
        (node,) = _convert(md, "1. a\n2. b\n").children
        assert node.start == 1

    def test_table(self, md):
        (table,) = _convert(md, "| a | b |\n|:--|--:|\n| 1 | 2 |\n").children
        assert isinstance(table, TableNode)
        header, row = table.children
        assert isinstance(header, TableRowNode)
        assert header.children[0] == TableCellNode(
            header=True, align="left", children=[TextNode(value="a")]
        )
        assert header.children[1].align == "right"
        assert row.children[0].header is False
        assert row.children[1].children == [TextNode(value="2")]


class TestInlines:
    def _inlines(self, md, text):
        (paragraph,) = _convert(md, text).children
        return paragraph.children

    def test_soft_break_merges_into_text(self, md):
        assert self._inlines(md, "one\ntwo\n") == [TextNode(value="one\ntwo")]

    def test_hard_break(self, md):
        assert self._inlines(md, "one  \ntwo\n") == [
            TextNode(value="one"),
            BreakNode(),
            TextNode(value="two"),
        ]

    def test_strong_delete_code(self, md):
        nodes = self._inlines(md, "**b** ~~d~~ `c`\n")
        assert nodes == [
            StrongNode(children=[TextNode(value="b")]),
            TextNode(value=" "),
            DeleteNode(children=[TextNode(value="d")]),
            TextNode(value=" "),
            InlineCodeNode(value="c"),
        ]

    def test_link(self, md):
        (link,) = self._inlines(md, '[docs](https://example.com "Docs")\n')
        assert link == LinkNode(
            url="https://example.com", title="Docs", children=[TextNode(value="docs")]
        )

    def test_image_alt_is_plain_text(self, md):
        (image,) = self._inlines(md, "![an *emphasized* alt](img.png)\n")
        assert image == ImageNode(url="img.png", alt="an emphasized alt")

    def test_inline_html(self, md):
        nodes = self._inlines(md, "a <kbd>K</kbd>\n")
        assert nodes == [
            TextNode(value="a "),
            InlineHtmlNode(value="<kbd>"),
            TextNode(value="K"),
            InlineHtmlNode(value="</kbd>"),
        ]


class TestExtensions:
    def test_unknown_container_token(self):
        tokens = [
            Token("callout_open", "aside", 1, attrs={"class": "note"}, block=True),
            Token("paragraph_open", "p", 1, block=True),
            Token("inline", "", 0, children=[Token("text", "", 0, content="hi")], content="hi"),
            Token("paragraph_close", "p", -1, block=True),
            Token("callout_close", "aside", -1, block=True),
        ]
        (node,) = tokens_to_tree(tokens).children
        assert node == ExtensionNode(
            name="callout",
            tag="aside",
            block=True,
            attrs={"class": "note"},
            children=[ParagraphNode(children=[TextNode(value="hi")])],
        )

    def test_unknown_leaf_token(self):
        tokens = [
            Token("paragraph_open", "p", 1, block=True),
            Token(
                "inline", "", 0,
                children=[Token("math_inline", "", 0, content="x^2")],
                content="$x^2$",
            ),
            Token("paragraph_close", "p", -1, block=True),
        ]
        (paragraph,) = tokens_to_tree(tokens).children
        assert paragraph.children == [ExtensionNode(name="math_inline", value="x^2")]

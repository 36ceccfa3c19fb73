# src/plugins/builtin/task_list.py - v1
"""GitHub-style task list items: ``- [ ] todo`` and ``- [x] done``.

Adds a markdown-it core rule that runs before inline parsing. When the first
paragraph of a list item starts with a checkbox marker, the marker is removed
from the text and ``meta["checked"]`` is set on the ``list_item_open`` token;
the converter surfaces it as ``ListItemNode.checked``.
"""

from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from docartifacts.plugins.base_plugin import BasePlugin, ParserExtensionProvider
from docartifacts.plugins.models import ParserExtension

_MARKER_RE = re.compile(r"^\[([ xX])\][ \t]+")


def _task_list_rule(state: StateCore) -> None:
    tokens = state.tokens
    for i in range(2, len(tokens)):
        token = tokens[i]
        if token.type != "inline":
            continue
        if tokens[i - 1].type != "paragraph_open" or tokens[i - 2].type != "list_item_open":
            continue
        match = _MARKER_RE.match(token.content)
        if match is None:
            continue
        tokens[i - 2].meta["checked"] = match.group(1) in "xX"
        token.content = token.content[match.end():]


def task_list_plugin(md: MarkdownIt) -> None:
    """markdown-it plugin entry point."""
    md.core.ruler.before("inline", "task_list", _task_list_rule)


class TaskListPlugin(BasePlugin, ParserExtensionProvider):
    """Registers the task list grammar extension."""

    @property
    def name(self) -> str:
        return "task_list"

    @property
    def description(self) -> str:
        return "Parses [ ] / [x] list item markers into checked flags"

    def parser_extensions(self) -> list[ParserExtension]:
        return [ParserExtension(name="task_list", plugin=task_list_plugin)]

# src/parsing/parser.py - v1
"""Markdown parser producing the canonical tree.

Wraps a markdown-it-py ``MarkdownIt`` instance. The instance is built once,
with the parser extensions of the active plugin set applied, and reused for
every document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from markdown_it import MarkdownIt

from docartifacts.core.errors import ParseFailure
from docartifacts.core.tree import Root
from docartifacts.parsing.converter import tokens_to_tree

logger = logging.getLogger(__name__)

DEFAULT_ENABLE: tuple[str, ...] = ("table", "strikethrough")


class MarkdownParser:
    """Parse markdown text into a Root.

    Args:
        preset: markdown-it preset ("commonmark", "default" or "zero").
        enable: Extra core/block/inline rules to switch on.
        html: Whether raw HTML in the source is recognized.
        configure: Hook applied to the MarkdownIt instance after presets,
            typically ``PluginPipeline.configure_parser``.
    """

    def __init__(
        self,
        preset: str = "commonmark",
        enable: Iterable[str] = DEFAULT_ENABLE,
        html: bool = True,
        configure: Callable[[MarkdownIt], MarkdownIt] | None = None,
    ) -> None:
        md = MarkdownIt(preset, {"html": html})
        rules = [rule for rule in enable if rule]
        if rules:
            md.enable(rules)
        if configure is not None:
            md = configure(md)
        self._md = md
        logger.debug("Parser ready: preset=%s, enabled=%s", preset, rules)

    @property
    def md(self) -> MarkdownIt:
        return self._md

    def parse(self, content: str, document_id: str | None = None) -> Root:
        """Parse ``content``.

        Raises:
            ParseFailure: If tokenizing or tree conversion fails.
        """
        try:
            tokens = self._md.parse(content)
            return tokens_to_tree(tokens)
        except Exception as exc:
            logger.error("Parse failed for %s: %s", document_id, exc)
            raise ParseFailure(document_id, reason=str(exc)) from exc

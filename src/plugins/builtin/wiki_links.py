# src/plugins/builtin/wiki_links.py - v1
"""Wiki-style cross-document links.

Rewrites ``[[target]]`` and ``[[target|label]]`` into regular markdown links
before parsing. A target matches a document id either exactly or with one of
the markdown suffixes dropped (``[[guide/intro]]`` finds ``guide/intro.md``).
Targets that match no document are left as written.

Options:
    url_template: Format string for the link URL; receives ``id`` (the full
        document id) and ``slug`` (id without its markdown suffix).
        Default ``"/{slug}"``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from docartifacts.core.models import Document
from docartifacts.plugins.base_plugin import BasePlugin, SourceMutator

logger = logging.getLogger(__name__)

_WIKI_LINK_RE = re.compile(r"\[\[([^\[\]|]+)(?:\|([^\[\]]+))?\]\]")
_SUFFIXES = (".md", ".markdown")
DEFAULT_URL_TEMPLATE = "/{slug}"


def _slug(document_id: str) -> str:
    for suffix in _SUFFIXES:
        if document_id.endswith(suffix):
            return document_id[: -len(suffix)]
    return document_id


def _index(documents: list[Document]) -> dict[str, str]:
    """Lookup table: accepted target spelling -> document id."""
    index: dict[str, str] = {}
    for document in documents:
        index.setdefault(_slug(document.id), document.id)
    for document in documents:
        index[document.id] = document.id
    return index


class WikiLinkPlugin(BasePlugin, SourceMutator):
    """Resolve ``[[...]]`` links against the document registry."""

    @property
    def name(self) -> str:
        return "wiki_links"

    @property
    def description(self) -> str:
        return "Rewrites [[document]] references into markdown links"

    async def mutate_source(
        self,
        document: Document,
        all_documents: list[Document],
        options: dict[str, Any],
    ) -> str | None:
        template = options.get("url_template", DEFAULT_URL_TEMPLATE)
        index = _index(all_documents)
        unresolved: list[str] = []

        def replace(match: re.Match[str]) -> str:
            target = match.group(1).strip()
            label = (match.group(2) or target).strip()
            document_id = index.get(target)
            if document_id is None:
                unresolved.append(target)
                return match.group(0)
            url = template.format(id=document_id, slug=_slug(document_id))
            return f"[{label}]({url})"

        content = _WIKI_LINK_RE.sub(replace, document.content)
        if unresolved:
            logger.debug(
                "Unresolved wiki links in %s: %s", document.id, sorted(set(unresolved))
            )
        if content == document.content:
            return None
        return content

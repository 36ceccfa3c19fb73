# src/plugins/pipeline.py - v1
"""Plugin pipeline: run every plugin hook for one document, in phase order.

Phases:
  parser_extension  once per plugin set, when the parser is built
  source_mutation   per document, all mutators concurrently, barrier before parsing
  tree_transform    per document, strictly sequential in registration order

A failing hook aborts the document with PluginFailure; nothing partial is
returned. Each hook call is bounded by ``timeout_s``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable
from typing import TYPE_CHECKING, TypeVar

from docartifacts.core.errors import PluginFailure, PluginPhase
from docartifacts.core.tree import Root
from docartifacts.logging.context import plugin_context

if TYPE_CHECKING:
    from markdown_it import MarkdownIt

    from docartifacts.core.models import Document
    from docartifacts.documents.registry import BaseDocumentRegistry
    from docartifacts.plugins.models import PluginSet

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_TIMEOUT_S = 30.0

T = TypeVar("T")


class PluginPipeline:
    """Runs the hooks of a frozen PluginSet.

    Args:
        plugin_set: Active plugins, in execution order.
        timeout_s: Upper bound for a single hook call.
    """

    def __init__(
        self,
        plugin_set: PluginSet,
        timeout_s: float = DEFAULT_PLUGIN_TIMEOUT_S,
    ) -> None:
        self._plugin_set = plugin_set
        self._timeout_s = timeout_s

    @property
    def plugin_set(self) -> PluginSet:
        return self._plugin_set

    # --- Parser extension phase ---

    def configure_parser(self, md: MarkdownIt) -> MarkdownIt:
        """Apply every plugin's grammar extensions to ``md``, in order.

        Later extensions see the syntax registered by earlier ones.

        Raises:
            PluginFailure: If a provider or one of its extensions fails.
        """
        for plugin, _options in self._plugin_set.extension_providers:
            with plugin_context(plugin.name, "parser_extension"):
                try:
                    extensions = plugin.parser_extensions()
                    for extension in extensions:
                        md.use(extension.plugin, **extension.options)
                        logger.debug(
                            "Parser extension '%s' applied by plugin '%s'",
                            extension.name,
                            plugin.name,
                        )
                except Exception as exc:
                    logger.error("Plugin '%s' parser extension failed: %s", plugin.name, exc)
                    raise PluginFailure(
                        plugin.name, "parser_extension", reason=str(exc)
                    ) from exc
        return md

    # --- Source mutation phase ---

    async def mutate_source(
        self, document: Document, registry: BaseDocumentRegistry
    ) -> str:
        """Run all source mutators concurrently and return the mutated content.

        Mutators share one draft copy of ``document``. Replacement strings
        returned by mutators are applied after every mutator has finished, in
        registration order.

        Raises:
            PluginFailure: If any mutator fails; the first failure in
                registration order is raised once all mutators have settled.
        """
        mutators = self._plugin_set.source_mutators
        if not mutators:
            return document.content

        draft = document.model_copy()
        all_documents = registry.list_all()

        results = await asyncio.gather(
            *(
                self._call_hook(
                    plugin.name,
                    "source_mutation",
                    document.id,
                    plugin.mutate_source(draft, all_documents, options),
                )
                for plugin, options in mutators
            ),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        for (plugin, _options), result in zip(mutators, results):
            if isinstance(result, str):
                logger.debug("Plugin '%s' replaced content of %s", plugin.name, document.id)
                draft.content = result

        return draft.content

    # --- Tree transform phase ---

    async def transform_tree(
        self, tree: Root, document: Document, registry: BaseDocumentRegistry
    ) -> Root:
        """Fold ``tree`` through every tree transformer, one after another.

        Raises:
            PluginFailure: If a transformer fails or returns something other
                than a Root or None.
        """
        all_documents = registry.list_all()
        for plugin, options in self._plugin_set.tree_transformers:
            result = await self._call_hook(
                plugin.name,
                "tree_transform",
                document.id,
                plugin.transform_tree(tree, document, all_documents, registry, options),
            )
            if result is None:
                continue
            if not isinstance(result, Root):
                raise PluginFailure(
                    plugin.name,
                    "tree_transform",
                    document.id,
                    reason=f"returned {type(result).__name__}, expected Root or None",
                )
            tree = result
        return tree

    # --- Internals ---

    async def _call_hook(
        self,
        plugin_name: str,
        phase: PluginPhase,
        document_id: str,
        hook: Awaitable[T],
    ) -> T:
        """Await one hook under the timeout, converting failures to PluginFailure."""
        start_ns = time.monotonic_ns()
        with plugin_context(plugin_name, phase):
            try:
                result = await asyncio.wait_for(hook, timeout=self._timeout_s)
            except asyncio.TimeoutError as exc:
                logger.error(
                    "Plugin '%s' timed out after %.1fs on %s",
                    plugin_name,
                    self._timeout_s,
                    document_id,
                )
                raise PluginFailure(
                    plugin_name,
                    phase,
                    document_id,
                    reason=f"timed out after {self._timeout_s}s",
                ) from exc
            except PluginFailure:
                raise
            except Exception as exc:
                logger.error("Plugin '%s' failed on %s: %s", plugin_name, document_id, exc)
                raise PluginFailure(plugin_name, phase, document_id, reason=str(exc)) from exc

            logger.debug(
                "Plugin '%s' %s on %s took %dms",
                plugin_name,
                phase,
                document_id,
                (time.monotonic_ns() - start_ns) // 1_000_000,
            )
            return result

# src/api/facade.py - v2
"""Public API facade: wire settings, plugins, parser and cache into a service.

Usage:
    from docartifacts.api.facade import create_service
    service = create_service(registry=registry)
    html = await service.for_document(document).html()

The plugin set is resolved once here; every service built by this function
owns an immutable PluginSet whose fingerprint goes into all its cache keys.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from docartifacts.artifacts.service import ArtifactService
from docartifacts.batch.runner import BatchRunner
from docartifacts.cache.artifact_cache import ArtifactCache
from docartifacts.cache.cache_factory import create_cache_store
from docartifacts.config.settings import Settings
from docartifacts.documents.loader import load_directory
from docartifacts.documents.registry import InMemoryDocumentRegistry
from docartifacts.parsing.parser import MarkdownParser
from docartifacts.pipeline.tree_builder import TreeBuilder
from docartifacts.plugins.pipeline import PluginPipeline
from docartifacts.plugins.registry import PluginRegistry

if TYPE_CHECKING:
    from docartifacts.api.models import ArtifactBundle
    from docartifacts.batch.models import BatchResult
    from docartifacts.cache.base_cache_store import BaseCacheStore
    from docartifacts.core.models import Document
    from docartifacts.documents.registry import BaseDocumentRegistry
    from docartifacts.plugins.base_plugin import BasePlugin

logger = logging.getLogger(__name__)


def create_service(
    settings: Settings | None = None,
    registry: BaseDocumentRegistry | None = None,
    plugins: Iterable[BasePlugin] | None = None,
    cache_store: BaseCacheStore | None = None,
) -> ArtifactService:
    """Build an ArtifactService.

    Args:
        settings: Global settings. Loaded from .env if None.
        registry: Document registry. Defaults to an empty in-memory registry.
        plugins: Plugin instances in execution order. When None, the
            PLUGINS setting (dotted class paths) is loaded instead.
        cache_store: Cache backend. Defaults to the configured backend;
            ignored when CACHE_ENABLED is false.

    Raises:
        RegistryError: If a configured plugin cannot be loaded.
        PluginFailure: If a parser extension fails to install.
    """
    settings = settings or Settings()

    plugin_registry = PluginRegistry()
    if plugins is None:
        plugin_registry.load_all(settings.plugins, settings.plugin_options)
    else:
        for plugin in plugins:
            plugin_registry.register(plugin, settings.plugin_options.get(plugin.name))
    plugin_set = plugin_registry.freeze()

    pipeline = PluginPipeline(plugin_set, timeout_s=settings.plugin_timeout_s)
    parser = MarkdownParser(
        preset=settings.parser_preset,
        enable=settings.parser_enable_list,
        html=settings.parser_html,
        configure=pipeline.configure_parser,
    )

    if settings.cache_enabled:
        store = cache_store if cache_store is not None else create_cache_store(settings)
    else:
        store = None
    cache = ArtifactCache(store, strict=settings.cache_strict)

    logger.info(
        "Artifact service ready: plugins=%s, cache=%s",
        plugin_set.names,
        type(store).__name__ if store is not None else "disabled",
    )
    return ArtifactService(
        tree_builder=TreeBuilder(pipeline, parser, cache),
        cache=cache,
        registry=registry if registry is not None else InMemoryDocumentRegistry(),
        excerpt_length=settings.excerpt_length,
        words_per_minute=settings.reading_speed_wpm,
    )


async def collect_artifacts(
    document: Document,
    settings: Settings | None = None,
    registry: BaseDocumentRegistry | None = None,
    plugins: Iterable[BasePlugin] | None = None,
    cache_store: BaseCacheStore | None = None,
) -> ArtifactBundle:
    """Collect every artifact of a single document.

    Without a registry, the document is looked up in a registry of its own.
    """
    if registry is None:
        registry = InMemoryDocumentRegistry([document])
    service = create_service(settings, registry, plugins, cache_store)
    return await service.for_document(document).collect()


async def collect_directory(
    root: str | Path,
    settings: Settings | None = None,
    plugins: Iterable[BasePlugin] | None = None,
    cache_store: BaseCacheStore | None = None,
) -> BatchResult:
    """Load every markdown file under ``root`` and collect its artifacts."""
    settings = settings or Settings()
    registry = load_directory(
        Path(root),
        recursive=settings.batch_recursive,
        formats=settings.batch_formats_list,
    )
    service = create_service(settings, registry, plugins, cache_store)
    runner = BatchRunner(service, max_concurrency=settings.max_concurrency)
    return await runner.run(scan_root=str(root))

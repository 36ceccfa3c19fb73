# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides sample documents, in-memory registries and cache stores, and a
factory for fully wired artifact services. No external services are used.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from docartifacts.api.facade import create_service
from docartifacts.artifacts.service import ArtifactService
from docartifacts.cache.fingerprint import compute_content_digest
from docartifacts.cache.memory_store import MemoryCacheStore
from docartifacts.config.settings import Settings
from docartifacts.core.models import Document
from docartifacts.documents.registry import InMemoryDocumentRegistry
from docartifacts.plugins.base_plugin import BasePlugin

SAMPLE_MARKDOWN = """\
# Getting started

Install the package and run the `init` command.

## Configuration

Settings live in a *.env* file next to the project.

```style
.note { color: red; }
```

```jsx-component
<Callout kind="info" />
```

```js
console.log("hello");
```

## Usage

- first step
- second step

### Advanced usage

<div class="raw">Raw HTML block</div>
"""


def make_document(content: str, document_id: str = "doc.md") -> Document:
    """Build a Document whose digest matches its content."""
    return Document(
        id=document_id,
        content=content,
        content_digest=compute_content_digest(content),
    )


def make_settings(**overrides: Any) -> Settings:
    """Settings that ignore any .env file in the working directory."""
    return Settings(_env_file=None, **overrides)  # type: ignore[call-arg]


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_document() -> Document:
    return make_document(SAMPLE_MARKDOWN, "guide/getting-started.md")


@pytest.fixture
def registry(sample_document: Document) -> InMemoryDocumentRegistry:
    return InMemoryDocumentRegistry([sample_document])


# === FIXTURES: Wiring ===


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def service_factory(
    memory_store: MemoryCacheStore,
    registry: InMemoryDocumentRegistry,
) -> Callable[..., ArtifactService]:
    """Build a service sharing the fixture store and registry by default."""

    def factory(
        plugins: Iterable[BasePlugin] = (),
        store: Any = None,
        registry_override: InMemoryDocumentRegistry | None = None,
        **settings_overrides: Any,
    ) -> ArtifactService:
        return create_service(
            settings=make_settings(**settings_overrides),
            registry=registry_override if registry_override is not None else registry,
            plugins=list(plugins),
            cache_store=store if store is not None else memory_store,
        )

    return factory


@pytest.fixture
def doc_factory() -> Callable[..., Document]:
    """``doc_factory(content, document_id="doc.md")`` -> Document."""
    return make_document


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """``settings_factory(**overrides)`` -> Settings without .env."""
    return make_settings

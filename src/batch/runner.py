# src/batch/runner.py - v1
"""Batch runner: collect artifacts for many documents concurrently.

Documents are independent. At most ``max_concurrency`` are processed at once,
and a failure in one document is recorded in its outcome without affecting
the others.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from docartifacts.batch.models import BatchResult, DocumentOutcome
from docartifacts.core.errors import ArtifactError

if TYPE_CHECKING:
    from docartifacts.artifacts.service import ArtifactService
    from docartifacts.core.models import Document

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8


class BatchRunner:
    """Run ``DocumentArtifacts.collect()`` over a set of documents."""

    def __init__(
        self,
        service: ArtifactService,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self._service = service
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._max_concurrency = max_concurrency

    async def run(
        self,
        documents: Iterable[Document] | None = None,
        scan_root: str | None = None,
    ) -> BatchResult:
        """Process ``documents`` (default: every document in the registry).

        Outcomes are returned in input order.
        """
        docs = list(documents) if documents is not None else self._service.registry.list_all()
        start = time.monotonic()
        logger.info(
            "Batch started: %d documents, max_concurrency=%d", len(docs), self._max_concurrency
        )

        outcomes = await asyncio.gather(*(self._process(doc) for doc in docs))

        succeeded = sum(1 for o in outcomes if o.status == "ok")
        result = BatchResult(
            scan_root=scan_root,
            total=len(outcomes),
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
            outcomes=list(outcomes),
            duration_seconds=round(time.monotonic() - start, 3),
        )
        logger.info(
            "Batch complete: %d ok, %d failed in %.1fs",
            result.succeeded,
            result.failed,
            result.duration_seconds,
        )
        return result

    async def _process(self, document: Document) -> DocumentOutcome:
        async with self._semaphore:
            start = time.monotonic()
            try:
                bundle = await self._service.for_document(document).collect()
            except ArtifactError as exc:
                logger.warning("Document %s failed: %s", document.id, exc)
                return self._failed(document, exc, start)
            except Exception as exc:
                logger.exception("Unexpected error processing %s", document.id)
                return self._failed(document, exc, start)
            return DocumentOutcome(
                document_id=document.id,
                status="ok",
                bundle=bundle,
                duration_seconds=round(time.monotonic() - start, 3),
            )

    @staticmethod
    def _failed(document: Document, exc: Exception, start: float) -> DocumentOutcome:
        return DocumentOutcome(
            document_id=document.id,
            status="failed",
            error_type=type(exc).__name__,
            error=str(exc),
            duration_seconds=round(time.monotonic() - start, 3),
        )

# src/batch/models.py - v2
"""Batch processing models: DocumentOutcome, BatchResult."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from docartifacts.api.models import ArtifactBundle


class DocumentOutcome(BaseModel):
    """Result of collecting one document's artifacts."""

    document_id: str
    status: Literal["ok", "failed"]
    bundle: ArtifactBundle | None = None
    error_type: str | None = None
    error: str | None = None
    duration_seconds: float = 0.0


class BatchResult(BaseModel):
    """Summary of a batch run."""

    scan_root: str | None = None
    total: int
    succeeded: int
    failed: int
    outcomes: list[DocumentOutcome] = Field(default_factory=list)
    duration_seconds: float

    @property
    def failures(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if o.status == "failed"]

# src/api/models.py - v2
"""API-level models: ArtifactBundle."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from docartifacts.core.models import Heading, WordCount


class ArtifactBundle(BaseModel):
    """Every artifact of one document, as returned by collect()."""

    document_id: str
    html: str
    ast: dict[str, Any]
    headings: list[Heading] = Field(default_factory=list)
    table_of_contents: str = ""
    excerpt: str = ""
    word_count: WordCount
    time_to_read: int = Field(ge=1)

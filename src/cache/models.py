# src/cache/models.py - v1
"""Cache domain models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from docartifacts.version import __version__


class CacheEntry(BaseModel):
    """Single cache entry wrapping a JSON-compatible artifact value."""

    key: str
    kind: str
    value: Any
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = __version__

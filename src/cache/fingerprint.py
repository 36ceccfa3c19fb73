# src/cache/fingerprint.py - v2
"""Content and plugin-set fingerprints used in cache keys."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from typing import Any


def compute_content_digest(content: str) -> str:
    """SHA-256 of the document content.

    Document stores normally supply the digest; this is used by the directory
    loader and the CLI, which create documents themselves.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def compute_plugin_fingerprint(
    plugin_names: Sequence[str],
    plugin_options: Sequence[Mapping[str, Any]] | None = None,
) -> str:
    """SHA-256 over the ordered plugin names and their options.

    Order is significant: ``["a", "b"]`` and ``["b", "a"]`` differ. Names are
    JSON-encoded so ``["ab"]`` and ``["a", "b"]`` cannot collide. A plugin
    registered without options contributes its name only, so a set with no
    options at all hashes the plain name list.

    Raises:
        ValueError: If plugin_options is given with a different length.
    """
    names = list(plugin_names)
    if plugin_options is None:
        options: list[Mapping[str, Any]] = [{}] * len(names)
    else:
        options = list(plugin_options)
        if len(options) != len(names):
            raise ValueError(
                f"Got {len(options)} option sets for {len(names)} plugins"
            )
    entries = [name if not opts else [name, dict(opts)] for name, opts in zip(names, options)]
    payload = json.dumps(entries, ensure_ascii=False, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()

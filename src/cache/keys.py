# src/cache/keys.py - v1
"""Cache key derivation for document artifacts.

A key is fully determined by (artifact kind, content digest, plugin-set
fingerprint). Each kind gets its own namespace segment, so two kinds never
share a key even for identical content and plugins.
"""

from __future__ import annotations

from docartifacts.core.models import ARTIFACT_KINDS

KEY_PREFIX = "docartifacts"


def artifact_cache_key(
    kind: str,
    content_digest: str,
    plugin_fingerprint: str,
) -> str:
    """Build the cache key for one artifact of one document.

    Args:
        kind: Artifact kind (one of ARTIFACT_KINDS).
        content_digest: Content fingerprint supplied by the document store.
        plugin_fingerprint: Fingerprint of the active PluginSet.

    Returns:
        Key of the form ``docartifacts:<kind>:<content_digest>:<plugin_fingerprint>``.
    """
    if kind not in ARTIFACT_KINDS:
        raise ValueError(f"Unknown artifact kind: {kind!r}")
    return f"{KEY_PREFIX}:{kind}:{content_digest}:{plugin_fingerprint}"

# src/artifacts/stats.py - v1
"""Word count and reading time.

The two numbers intentionally come from different inputs: word count reads
the raw source, reading time reads the text of the rendered HTML.
"""

from __future__ import annotations

import math

from bs4 import BeautifulSoup

from docartifacts.core.models import WordCount

DEFAULT_WORDS_PER_MINUTE = 265


def count_words(text: str) -> int:
    """Whitespace-delimited token count."""
    return len(text.split())


def word_count(content: str) -> WordCount:
    return WordCount(words=count_words(content))


def strip_markup(html: str) -> str:
    """Visible text of an HTML fragment (style and script bodies removed)."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["style", "script"]):
        tag.decompose()
    return soup.get_text()


def time_to_read(html: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Minutes needed to read the rendered document, rounded half up, at least 1."""
    if words_per_minute < 1:
        raise ValueError(f"words_per_minute must be >= 1, got {words_per_minute}")
    words = count_words(strip_markup(html))
    return max(1, math.floor(words / words_per_minute + 0.5))

"""
Long-input compression.

Reduces long journal entries to a short representative excerpt before signal
extraction and phrase selection. Sentences are scored with a crude content
density heuristic: sqrt(word count) + 0.2 * (alphabetic words of 4+ chars).
"""

from __future__ import annotations

import re
from typing import List

import numpy as np

COMPRESS_THRESHOLD = 500
WORKING_WINDOW = 800
MAX_SENTENCES = 5
KEEP_SENTENCES = 2
MAX_EXCERPT = 250
ELLIPSIS = "…"

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")
_CONTENT_WORD_RE = re.compile(r"^[a-z]{4,}$", re.IGNORECASE)


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s and s.strip()]


def score_sentences(sentences: List[str]) -> np.ndarray:
    """Content score per sentence."""
    words = [s.split() for s in sentences]
    counts = np.array([len(w) for w in words], dtype=np.float64)
    content = np.array(
        [sum(1 for t in w if _CONTENT_WORD_RE.match(t)) for w in words],
        dtype=np.float64,
    )
    return np.sqrt(counts) + 0.2 * content


def truncate_at_whitespace(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` chars, backing off to whitespace."""
    if len(text) <= limit:
        return text
    cut = text[:limit]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    return cut.rstrip()


def compress_text(text: str) -> str:
    """
    Return a short excerpt of ``text`` if it is longer than the threshold.

    Text at or under COMPRESS_THRESHOLD characters is returned unchanged.
    Otherwise the top-scoring sentences (by descending score, ties keep
    original order) of the first WORKING_WINDOW characters are joined and
    capped at MAX_EXCERPT characters plus an ellipsis.
    """
    if len(text) <= COMPRESS_THRESHOLD:
        return text

    window = text[:WORKING_WINDOW]
    sentences = split_sentences(window)[:MAX_SENTENCES]
    if not sentences:
        return truncate_at_whitespace(window, MAX_EXCERPT) + ELLIPSIS

    scores = score_sentences(sentences)
    order = np.argsort(-scores, kind="stable")[:KEEP_SENTENCES]
    excerpt = " ".join(sentences[int(i)] for i in order)

    if len(excerpt) > MAX_EXCERPT:
        excerpt = truncate_at_whitespace(excerpt, MAX_EXCERPT) + ELLIPSIS
    return excerpt

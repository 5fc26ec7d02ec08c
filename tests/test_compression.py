"""Tests for core/compression.py — long-input excerpting."""

import pytest

from soulseed.core.compression import (
    COMPRESS_THRESHOLD,
    ELLIPSIS,
    MAX_EXCERPT,
    compress_text,
    score_sentences,
    split_sentences,
    truncate_at_whitespace,
)


class TestPassThrough:
    def test_short_text_unchanged(self):
        text = "i had a long day at school."
        assert compress_text(text) == text

    def test_threshold_is_inclusive(self):
        text = "a" * COMPRESS_THRESHOLD
        assert compress_text(text) == text


class TestCompression:
    def test_long_text_is_bounded(self):
        text = " ".join(["today was honestly exhausting because everything happened at once."] * 20)
        out = compress_text(text)
        assert len(out) <= MAX_EXCERPT + len(ELLIPSIS)

    def test_keeps_highest_scoring_sentences_first(self):
        filler = "ok. " * 60
        text = (
            "Short one. "
            "My chemistry revision schedule keeps slipping because practice sessions overlap. "
            "Fine. "
            "Also tired. "
            + filler + "x" * 200
        )
        assert len(text) > COMPRESS_THRESHOLD
        out = compress_text(text)
        assert out.startswith("My chemistry revision schedule")

    def test_unpunctuated_text(self):
        text = "word " * 200
        out = compress_text(text)
        assert out.endswith(ELLIPSIS)
        assert len(out) <= MAX_EXCERPT + len(ELLIPSIS)


class TestHelpers:
    def test_score_formula(self):
        """sqrt(4 words) + 0.2 * 2 words of 4+ letters."""
        scores = score_sentences(["one two three four"])
        assert scores[0] == pytest.approx(2.4)

    def test_split_sentences(self):
        assert split_sentences("Hi. How are you? Fine!\nOk") == ["Hi.", "How are you?", "Fine!", "Ok"]

    def test_truncate_at_whitespace(self):
        assert truncate_at_whitespace("hello brave new world", 12) == "hello brave"
        assert truncate_at_whitespace("short", 12) == "short"

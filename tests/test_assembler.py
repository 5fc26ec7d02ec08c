"""Tests for core/assembler.py and core/history.py — ordering, length envelope, anti-repetition."""

import pytest

from soulseed.content.styles import STYLE_PROFILES
from soulseed.content.templates import CLOSING_NUDGE, CRISIS_LINE
from soulseed.core.assembler import (
    LONG_ENVELOPE,
    SIMILARITY_THRESHOLD,
    LengthEnvelope,
    ResponseAssembler,
    enforce_length,
    envelope_for,
    is_too_similar,
    render,
    truncate_sentence,
)
from soulseed.core.history import RecentOutputHistory
from soulseed.core.planner import ContentPlan
from soulseed.core.signals import SignalSet
from soulseed.core.utils import jaccard, token_set


@pytest.fixture
def assembler():
    return ResponseAssembler(RecentOutputHistory())


@pytest.fixture
def signals():
    return SignalSet(mood="tired", stressors=["exams", "sleep"])


class TestEnvelope:
    def test_tiers(self):
        assert envelope_for(0) == envelope_for(79)
        assert envelope_for(80) == envelope_for(299)
        assert envelope_for(300) == LONG_ENVELOPE
        short, medium, long_ = envelope_for(10), envelope_for(100), envelope_for(1000)
        assert short.min_len < medium.min_len < long_.min_len
        assert short.max_len < medium.max_len < long_.max_len

    def test_truncate_backs_off_to_whitespace(self):
        assert truncate_sentence("alpha beta gamma delta", 13) == "alpha beta."

    def test_truncate_keeps_sentence_punctuation(self):
        assert truncate_sentence("Is it ok? yes it is", 10) == "Is it ok?"

    def test_short_text_gets_nudge(self):
        out = enforce_length(["Hi there."], LengthEnvelope(120, 360))
        assert out == f"Hi there. {CLOSING_NUDGE}"

    def test_fillers_pad_until_minimum(self):
        fillers = ["First extra sentence for padding.", "Second extra sentence for padding.", "Unused."]
        out = enforce_length(["Take care."], LengthEnvelope(120, 360), fillers=fillers)
        assert out == f"Take care. {CLOSING_NUDGE} {fillers[0]} {fillers[1]}"
        assert len(out) >= 120

    def test_fillers_ignored_when_long_enough(self):
        text = "This sentence alone is comfortably longer than the small minimum."
        assert enforce_length([text], LengthEnvelope(20, 360), fillers=["Extra."]) == text

    def test_long_text_is_cut(self):
        out = enforce_length(["word " * 200], LengthEnvelope(120, 360))
        assert len(out) <= 360
        assert out.endswith(".")

    def test_crisis_line_never_cut(self):
        env = LengthEnvelope(120, 360)
        for leads in (True, False):
            out = enforce_length(["word " * 200], env, protected=CRISIS_LINE, protected_leads=leads)
            assert CRISIS_LINE in out
            assert len(out) <= env.max_len
            assert out.startswith(CRISIS_LINE) == leads


class TestOrdering:
    def _plan(self):
        return ContentPlan(opener="O.", body="B.", action="A.", ask="Q.", crisis="C.")

    def test_profile_order(self):
        wide = LengthEnvelope(0, 1000)
        assert render(self._plan(), STYLE_PROFILES[0], wide) == "O. B. A. Q. C."
        assert render(self._plan(), STYLE_PROFILES[1], wide) == "C. O. A. B. Q."

    def test_empty_fragments_skipped(self):
        plan = ContentPlan(opener="O.", body="", action="A.", ask="", crisis="")
        assert render(plan, STYLE_PROFILES[0], LengthEnvelope(0, 1000)) == "O. A."

    def test_adjacent_profiles_use_different_variants(self):
        for i, profile in enumerate(STYLE_PROFILES):
            nxt = STYLE_PROFILES[(i + 1) % len(STYLE_PROFILES)]
            assert profile.opener_variant != nxt.opener_variant
            assert profile.question_variant != nxt.question_variant


class TestAntiRepetition:
    def test_similarity_check(self):
        assert is_too_similar("the same guidance text here", ["the same guidance text here"])
        assert not is_too_similar("completely different words", ["the same guidance text here"])
        assert not is_too_similar("anything", [])

    def test_repeat_triggers_regeneration(self, assembler, signals):
        first = assembler.assemble(signals, 12345, 0, raw_length=40)
        second = assembler.assemble(signals, 12345, 0, raw_length=40)

        assert not first.regenerated
        assert second.regenerated
        assert second.profile is STYLE_PROFILES[1]
        assert jaccard(token_set(first.text), token_set(second.text)) < SIMILARITY_THRESHOLD

    def test_history_updated_most_recent_first(self, assembler, signals):
        first = assembler.assemble(signals, 1, 0, raw_length=40)
        second = assembler.assemble(SignalSet(mood="neutral"), 2, 2, raw_length=40)
        assert assembler.recent() == [second.text, first.text]

    def test_unrelated_history_does_not_regenerate(self, signals):
        history = RecentOutputHistory()
        history.remember("completely unrelated words about the weather and football")
        result = ResponseAssembler(history).assemble(signals, 5, 0, raw_length=40)
        assert not result.regenerated

    def test_regenerated_text_respects_envelope(self, assembler, signals):
        env = envelope_for(40)
        assembler.assemble(signals, 9, 3, raw_length=40)
        second = assembler.assemble(signals, 9, 3, raw_length=40)
        assert second.regenerated
        assert env.min_len <= len(second.text) <= env.max_len + 1


class TestHistory:
    def test_bounded_with_oldest_eviction(self):
        history = RecentOutputHistory(capacity=3)
        for i in range(5):
            history.remember(f"text {i}")
        assert len(history) == 3
        assert history.snapshot() == ["text 4", "text 3", "text 2"]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            RecentOutputHistory(capacity=0)

    def test_clear(self):
        history = RecentOutputHistory()
        history.remember("x")
        history.clear()
        assert history.snapshot() == []

    def test_lock_is_reentrant(self):
        history = RecentOutputHistory()
        with history.lock:
            history.remember("inside")
            assert history.snapshot() == ["inside"]

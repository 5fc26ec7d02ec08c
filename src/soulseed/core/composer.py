"""
GuidanceComposer: deterministic, rules-based guidance for free text.

Pipeline:
    raw text → normalized text → (compressed excerpt if long) → SignalSet
    → content fragments → ordered, length-enforced paragraph
    → anti-repetition check (one regeneration) → GuidanceResult

Phrase choices are driven by an FNV-1a seed of the normalized text, so the
same text gives the same signals and the same first-attempt fragments. The
style profile additionally drifts with the calendar day (``day_index``); that
drift is cosmetic and does not touch signal extraction.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..content.lexicon import MOOD_NEUTRAL
from ..content.styles import STYLE_PROFILES, profile_index
from ..content.templates import CRISIS_LINE, MOOD_SUMMARIES, QUESTION_BANK, RISK_SUMMARY
from .assembler import ResponseAssembler, envelope_for, render
from .compression import ELLIPSIS, compress_text, truncate_at_whitespace
from .history import RecentOutputHistory
from .planner import ContentPlan, build_suggestions, plan_content
from .signals import SignalSet, detect_risk, extract_signals, normalize_text
from .utils import seed_for, unique

MAX_QUESTIONS = 5
SUMMARY_EXCERPT = 80

SOURCE_RULES = "rules"
SOURCE_LLM = "llm"

_WHITESPACE_RE = re.compile(r"\s+")


def current_day_index() -> int:
    """Whole days since the Unix epoch (UTC)."""
    return int(time.time() // 86400)


@dataclass
class GuidanceResult:
    """Response payload for one request. Built fresh, never persisted."""
    guidance: str
    summary: str
    signals: SignalSet
    suggestions: List[str] = field(default_factory=list)
    questions: List[str] = field(default_factory=list)
    source: str = SOURCE_RULES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guidance": self.guidance,
            "summary": self.summary,
            "signals": self.signals.to_dict(),
            "suggestions": list(self.suggestions),
            "questions": list(self.questions),
            "source": self.source,
        }


@dataclass
class TextAnalysis:
    """Everything derived from the input before guidance text is written."""
    raw_length: int
    display_text: str
    working_text: str
    signals: SignalSet
    seed: int
    profile_idx: int
    suggestions: List[str]
    questions: List[str]
    summary: str
    compressed: bool = False


def build_questions(signals: SignalSet) -> List[str]:
    """Safety first, then stressor-specific, mood and general prompts."""
    questions: List[str] = []
    if signals.risk_flags:
        questions.extend(QUESTION_BANK["safety"])
    for tag in signals.stressors:
        questions.extend(QUESTION_BANK.get(tag, []))
    questions.extend(QUESTION_BANK["neutral" if signals.mood == MOOD_NEUTRAL else "low"])
    questions.extend(QUESTION_BANK["general"])
    return unique(questions)[:MAX_QUESTIONS]


def build_summary(signals: SignalSet, display_text: str) -> str:
    """One-line digest: mood or risk annotation, stressors, short excerpt."""
    head = RISK_SUMMARY if signals.risk_flags else MOOD_SUMMARIES.get(
        signals.mood, MOOD_SUMMARIES[MOOD_NEUTRAL]
    )
    if signals.stressors:
        head += f" (mentions {', '.join(signals.stressors)})"
    if not display_text:
        return head + "."
    excerpt = truncate_at_whitespace(display_text, SUMMARY_EXCERPT)
    if len(excerpt) < len(display_text):
        excerpt += ELLIPSIS
    return f'{head}: "{excerpt}"'


class GuidanceComposer:
    """
    Rules-based guidance engine.

    Owns its RecentOutputHistory; one composer is shared by all requests of
    a process. ``day_index`` may be injected to pin the style profile.
    """

    def __init__(
        self,
        history: Optional[RecentOutputHistory] = None,
        day_index: Optional[Callable[[], int]] = None,
    ):
        self.assembler = ResponseAssembler(history)
        self.day_index = day_index or current_day_index

    @property
    def history(self) -> RecentOutputHistory:
        return self.assembler.history

    def analyze(self, text: str) -> TextAnalysis:
        """Signals, suggestions, questions and summary; no side effects."""
        display_text = _WHITESPACE_RE.sub(" ", text).strip()
        normalized = normalize_text(text)
        working = compress_text(normalized)

        signals = extract_signals(working)
        # Crisis phrases are checked against the full text so compression
        # can never hide them.
        signals.risk_flags = detect_risk(normalized)

        seed = seed_for(working)
        return TextAnalysis(
            raw_length=len(text),
            display_text=display_text,
            working_text=working,
            signals=signals,
            seed=seed,
            profile_idx=profile_index(seed, self.day_index()),
            suggestions=build_suggestions(signals, seed),
            questions=build_questions(signals),
            summary=build_summary(signals, display_text),
            compressed=working != normalized,
        )

    def write_guidance(self, analysis: TextAnalysis) -> str:
        """Assemble guidance text and record it in the history."""
        assembled = self.assembler.assemble(
            analysis.signals,
            analysis.seed,
            analysis.profile_idx,
            analysis.raw_length,
        )
        return assembled.text

    def compose(self, text: str) -> GuidanceResult:
        analysis = self.analyze(text)
        return self.result_for(analysis, self.write_guidance(analysis))

    def result_for(
        self, analysis: TextAnalysis, guidance: str, source: str = SOURCE_RULES,
    ) -> GuidanceResult:
        return GuidanceResult(
            guidance=guidance,
            summary=analysis.summary,
            signals=analysis.signals,
            suggestions=list(analysis.suggestions),
            questions=list(analysis.questions),
            source=source,
        )

    def fit_external(self, analysis: TextAnalysis, text: str) -> str:
        """
        Fit externally generated guidance into the same envelope and make
        sure the crisis line survives. A reply that is too short is padded
        with the rules plan's action, ask, opener and body. Not recorded in
        the history.
        """
        crisis = CRISIS_LINE if analysis.signals.risk_flags else ""
        if crisis and crisis in text:
            text = _WHITESPACE_RE.sub(" ", text.replace(crisis, " ")).strip()
        profile = STYLE_PROFILES[0]
        rules_plan = plan_content(analysis.signals, analysis.seed, profile)
        fillers = [rules_plan.action, rules_plan.ask, rules_plan.opener, rules_plan.body]
        plan = ContentPlan(body=text, crisis=crisis)
        return render(plan, profile, envelope_for(analysis.raw_length), fillers=fillers)

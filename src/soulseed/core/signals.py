"""
Signal extraction: mood, stressors and risk flags from normalized text.

Pure keyword lookups; absence of matches is a normal outcome (neutral mood,
no stressors, no risk flags).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..content.lexicon import (
    CRISIS_PHRASES,
    MOOD_NEUTRAL,
    MOOD_RULES,
    RISK_FLAG_SELF_HARM,
    STRESSOR_LEXICON,
)

_WHITESPACE_RE = re.compile(r"\s+")
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'"})


@dataclass
class SignalSet:
    """Signals derived from a single piece of text."""
    mood: str = MOOD_NEUTRAL
    stressors: List[str] = field(default_factory=list)
    risk_flags: List[str] = field(default_factory=list)

    def has_any(self, tags) -> bool:
        return any(s in tags for s in self.stressors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mood": self.mood,
            "stressors": list(self.stressors),
            "risk_flags": list(self.risk_flags),
        }


def normalize_text(text: str) -> str:
    """Collapse whitespace, trim and lower-case."""
    return _WHITESPACE_RE.sub(" ", text.translate(_APOSTROPHES)).strip().lower()


def detect_stressors(text: str) -> List[str]:
    """Canonical stressor tags, each at most once, in lexicon order."""
    tags: List[str] = []
    for term, tag in STRESSOR_LEXICON.items():
        if term in text and tag not in tags:
            tags.append(tag)
    return tags


def detect_mood(text: str) -> str:
    for keywords, label in MOOD_RULES:
        if any(k in text for k in keywords):
            return label
    return MOOD_NEUTRAL


def detect_risk(text: str) -> List[str]:
    if any(p in text for p in CRISIS_PHRASES):
        return [RISK_FLAG_SELF_HARM]
    return []


def extract_signals(text: str) -> SignalSet:
    """
    Derive a SignalSet from normalized text.

    The three detectors are independent; in particular the risk check
    always runs regardless of what mood or stressors were found.
    """
    return SignalSet(
        mood=detect_mood(text),
        stressors=detect_stressors(text),
        risk_flags=detect_risk(text),
    )

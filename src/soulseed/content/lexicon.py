"""
Keyword lexicons for signal extraction.

All terms are matched as lower-case substrings of the normalized text, so
entries are chosen to avoid common accidental hits (e.g. "mom" in "moment").
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple

# =============================================================================
# STRESSORS — raw lexicon term → canonical tag
# =============================================================================

STRESSOR_LEXICON: Dict[str, str] = {
    # exams
    "exam": "exams",
    "exams": "exams",
    "test": "exams",
    "tests": "exams",
    "quiz": "exams",
    "study": "exams",
    "studying": "exams",
    "revision": "exams",
    "o level": "exams",
    "a level": "exams",
    "psle": "exams",
    # deadlines
    "deadline": "deadlines",
    "deadlines": "deadlines",
    "due date": "deadlines",
    "submission": "deadlines",
    "last minute": "deadlines",
    # sleep
    "sleep": "sleep",
    "insomnia": "sleep",
    "all-nighter": "sleep",
    "all nighter": "sleep",
    "stayed up": "sleep",
    # family
    "family": "family",
    "parent": "family",
    "parents": "family",
    "my mum": "family",
    "my mom": "family",
    "my dad": "family",
    "sibling": "family",
    # friends
    "friend": "friends",
    "friends": "friends",
    "cca": "friends",
    "classmate": "friends",
    # school
    "school": "school",
    "teacher": "school",
    "homework": "school",
    "assignment": "school",
    "lesson": "school",
    # team / collaboration
    "team": "team",
    "teammate": "team",
    "group project": "team",
    "groupmate": "team",
    "project": "team",
    # bullying
    "bully": "bullying",
    "bullied": "bullying",
    "bullying": "bullying",
}

STRESSOR_TAGS: FrozenSet[str] = frozenset(STRESSOR_LEXICON.values())

EXAM_FAMILY: FrozenSet[str] = frozenset({"exams", "deadlines"})
COLLABORATION_FAMILY: FrozenSet[str] = frozenset({"team"})

# =============================================================================
# MOOD — checked top to bottom, first rule with any hit wins
# =============================================================================

MOOD_NEUTRAL = "neutral"

MOOD_RULES: List[Tuple[FrozenSet[str], str]] = [
    (frozenset({
        "overwhelm", "too much", "anxious", "anxiety", "panic", "stressed",
        "can't cope", "cannot cope", "drowning", "so much pressure",
        "freaking out",
    }), "overwhelmed"),
    (frozenset({
        "tired", "exhausted", "drained", "can't sleep", "cannot sleep",
        "no energy", "burnt out", "burned out", "sleepy", "fatigue",
    }), "tired"),
    (frozenset({
        "sad", "down", "lonely", "depressed", "empty", "hopeless",
        "unmotivated", "crying", "worthless",
    }), "low"),
    (frozenset({
        "angry", "annoyed", "frustrat", "irritat", "fed up", "unfair",
        "pissed",
    }), "frustrated"),
]

MOODS: Tuple[str, ...] = tuple(label for _, label in MOOD_RULES) + (MOOD_NEUTRAL,)

# =============================================================================
# RISK — crisis language
# =============================================================================

RISK_FLAG_SELF_HARM = "self-harm"

CRISIS_PHRASES: Tuple[str, ...] = (
    "kill myself",
    "suicide",
    "suicidal",
    "self-harm",
    "self harm",
    "cut myself",
    "end my life",
    "want to die",
    "hurt myself",
    "no reason to live",
    "better off dead",
)

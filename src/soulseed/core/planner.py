"""
Content planner: picks guidance fragments from the phrase pools.

Every choice is ``pool[(seed + salt) mod len(pool)]`` with a distinct salt
per decision point, so sibling choices drawn from one seed stay decorrelated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..content.lexicon import COLLABORATION_FAMILY, EXAM_FAMILY, MOOD_NEUTRAL
from ..content.styles import (
    SLOT_ACTION,
    SLOT_ASK,
    SLOT_BODY,
    SLOT_CRISIS,
    SLOT_OPENER,
    StyleProfile,
)
from ..content.templates import (
    ACTION_LEADS,
    ASK_POOLS,
    BODY_GENERIC,
    BODY_TOPICS,
    CRISIS_LINE,
    EXAM_TIP,
    GENERAL_TIPS,
    OPENERS,
    SLEEP_TIP,
    TEAM_TIP,
)
from .signals import SignalSet
from .utils import pick_salted, rotate, unique

MAX_SUGGESTIONS = 3

SALT_GENERAL_TIP = 3
SALT_ROTATED_TIP = 5
SALT_OPENER = 11
SALT_BODY = 17
SALT_ACTION = 23
SALT_ASK = 29

# Topic families that select a body sentence, keyed like BODY_TOPICS
_BODY_TOPIC_TAGS = {
    "exam": EXAM_FAMILY,
    "sleep": frozenset({"sleep"}),
    "team": COLLABORATION_FAMILY,
}


@dataclass
class ContentPlan:
    """Fragments chosen for one guidance paragraph."""
    suggestions: List[str] = field(default_factory=list)
    opener: str = ""
    body: str = ""
    action: str = ""
    ask: str = ""
    crisis: str = ""

    def fragments(self) -> Dict[str, str]:
        return {
            SLOT_OPENER: self.opener,
            SLOT_BODY: self.body,
            SLOT_ACTION: self.action,
            SLOT_ASK: self.ask,
            SLOT_CRISIS: self.crisis,
        }


def build_suggestions(signals: SignalSet, seed: int) -> List[str]:
    """Topic tips first, then two general tips; distinct, at most three."""
    tips: List[str] = []
    if "sleep" in signals.stressors:
        tips.append(SLEEP_TIP)
    if signals.has_any(EXAM_FAMILY):
        tips.append(EXAM_TIP)
    if signals.has_any(COLLABORATION_FAMILY):
        tips.append(TEAM_TIP)

    tips.append(pick_salted(GENERAL_TIPS, seed, SALT_GENERAL_TIP))
    rotated = rotate(GENERAL_TIPS, seed >> 8)
    tips.append(pick_salted(rotated, seed, SALT_ROTATED_TIP))
    return unique(tips)[:MAX_SUGGESTIONS]


def choose_opener(mood: str, seed: int, variant: int) -> str:
    variants = OPENERS.get(mood, OPENERS[MOOD_NEUTRAL])
    return pick_salted(variants[variant % len(variants)], seed, SALT_OPENER)


def choose_body(signals: SignalSet, seed: int) -> str:
    for topic, sentences in BODY_TOPICS:
        if signals.has_any(_BODY_TOPIC_TAGS[topic]):
            return pick_salted(sentences, seed, SALT_BODY)
    return pick_salted(BODY_GENERIC, seed, SALT_BODY)


def choose_action(suggestions: List[str], seed: int) -> str:
    if not suggestions:
        return ""
    tip = suggestions[0]
    tip = tip[:1].lower() + tip[1:]
    return pick_salted(ACTION_LEADS, seed, SALT_ACTION).format(tip=tip)


def choose_ask(seed: int, variant: int) -> str:
    return pick_salted(ASK_POOLS[variant % len(ASK_POOLS)], seed, SALT_ASK)


def plan_content(
    signals: SignalSet,
    seed: int,
    profile: StyleProfile,
    opener_seed: Optional[int] = None,
    ask_seed: Optional[int] = None,
) -> ContentPlan:
    """
    Choose every fragment for one guidance paragraph.

    ``opener_seed`` and ``ask_seed`` default to ``seed``; the assembler
    perturbs them when regenerating a too-similar response.
    """
    suggestions = build_suggestions(signals, seed)
    return ContentPlan(
        suggestions=suggestions,
        opener=choose_opener(
            signals.mood,
            seed if opener_seed is None else opener_seed,
            profile.opener_variant,
        ),
        body=choose_body(signals, seed),
        action=choose_action(suggestions, seed),
        ask=choose_ask(seed if ask_seed is None else ask_seed, profile.question_variant),
        crisis=CRISIS_LINE if signals.risk_flags else "",
    )

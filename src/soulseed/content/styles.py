"""
Style profiles: fixed fragment orderings plus phrase-variant indices.

Cyclically adjacent profiles use different opener and question variants, so a
regeneration with the next profile always draws from different pools.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

SLOT_OPENER = "opener"
SLOT_BODY = "body"
SLOT_ACTION = "action"
SLOT_ASK = "ask"
SLOT_CRISIS = "crisis"


@dataclass(frozen=True)
class StyleProfile:
    """A fragment ordering and the variant pools it draws from."""
    name: str
    order: Tuple[str, ...]
    opener_variant: int
    question_variant: int

    @property
    def crisis_leads(self) -> bool:
        return self.order[0] == SLOT_CRISIS


STYLE_PROFILES: Tuple[StyleProfile, ...] = (
    StyleProfile(
        name="reflect_then_act",
        order=(SLOT_OPENER, SLOT_BODY, SLOT_ACTION, SLOT_ASK, SLOT_CRISIS),
        opener_variant=0,
        question_variant=0,
    ),
    StyleProfile(
        name="safety_first",
        order=(SLOT_CRISIS, SLOT_OPENER, SLOT_ACTION, SLOT_BODY, SLOT_ASK),
        opener_variant=1,
        question_variant=1,
    ),
    StyleProfile(
        name="ask_early",
        order=(SLOT_OPENER, SLOT_ASK, SLOT_BODY, SLOT_ACTION, SLOT_CRISIS),
        opener_variant=0,
        question_variant=0,
    ),
    StyleProfile(
        name="action_led",
        order=(SLOT_CRISIS, SLOT_ACTION, SLOT_OPENER, SLOT_BODY, SLOT_ASK),
        opener_variant=1,
        question_variant=1,
    ),
)


def profile_index(seed: int, day_index: int) -> int:
    """Profile for a seed on a given day; stable within a day."""
    return (seed + day_index) % len(STYLE_PROFILES)


def next_profile_index(index: int) -> int:
    return (index + 1) % len(STYLE_PROFILES)

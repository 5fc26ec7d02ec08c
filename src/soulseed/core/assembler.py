"""
Response assembler: orders fragments, enforces the length envelope and
guards against repeating recent output.

The crisis line is never cut: when the text is over budget only the other
fragments are truncated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..content.styles import SLOT_CRISIS, STYLE_PROFILES, StyleProfile, next_profile_index
from ..content.templates import CLOSING_NUDGE
from .history import RecentOutputHistory
from .planner import ContentPlan, plan_content
from .signals import SignalSet
from .utils import jaccard, offset_seed, token_set

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.85
OPENER_SEED_OFFSET = 7
ASK_SEED_OFFSET = 13

_TRAILING_JUNK = " ,;:-"


@dataclass(frozen=True)
class LengthEnvelope:
    min_len: int
    max_len: int


# (exclusive upper bound on raw input length, envelope)
LENGTH_TIERS = (
    (80, LengthEnvelope(120, 360)),
    (300, LengthEnvelope(180, 480)),
)
LONG_ENVELOPE = LengthEnvelope(240, 600)


def envelope_for(raw_length: int) -> LengthEnvelope:
    """Short, medium and long inputs get increasingly generous bounds."""
    for upper, envelope in LENGTH_TIERS:
        if raw_length < upper:
            return envelope
    return LONG_ENVELOPE


def _join(parts: Sequence[str]) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def truncate_sentence(text: str, limit: int) -> str:
    """Cut at ``limit``, back off to whitespace and end with a period."""
    if len(text) <= limit:
        return text
    cut = text[:limit]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    cut = cut.rstrip(_TRAILING_JUNK)
    if not cut.endswith((".", "!", "?")):
        cut += "."
    return cut


def enforce_length(
    parts: Sequence[str],
    envelope: LengthEnvelope,
    protected: str = "",
    protected_leads: bool = False,
    fillers: Sequence[str] = (),
) -> str:
    """
    Join ``parts`` and fit the result into ``envelope``.

    Text under ``min_len`` gets the closing nudge, then ``fillers`` one at a
    time until it reaches ``min_len`` or the fillers run out.

    ``protected`` (the crisis line) is placed first or last and is excluded
    from truncation. The result may exceed ``max_len`` by one terminating
    period only when no whitespace is available to back off to.
    """
    def combine(rest: str) -> str:
        if not protected:
            return rest
        return _join([protected, rest] if protected_leads else [rest, protected])

    rest = _join(parts)
    for padding in (CLOSING_NUDGE, *fillers):
        if len(combine(rest)) >= envelope.min_len:
            break
        if padding not in rest:
            rest = _join([rest, padding])

    if len(combine(rest)) > envelope.max_len:
        budget = envelope.max_len - (len(protected) + 1 if protected else 0)
        rest = truncate_sentence(rest, max(budget, 0))
    return combine(rest)


def render(
    plan: ContentPlan,
    profile: StyleProfile,
    envelope: LengthEnvelope,
    fillers: Sequence[str] = (),
) -> str:
    """Order fragments by ``profile`` and apply the envelope."""
    fragments = plan.fragments()
    parts = [fragments[slot] for slot in profile.order if slot != SLOT_CRISIS]
    return enforce_length(
        parts,
        envelope,
        protected=plan.crisis,
        protected_leads=profile.crisis_leads,
        fillers=fillers,
    )


def is_too_similar(
    text: str,
    recent: Sequence[str],
    threshold: float = SIMILARITY_THRESHOLD,
) -> bool:
    tokens = token_set(text)
    return any(jaccard(tokens, token_set(prior)) >= threshold for prior in recent)


@dataclass
class AssembledGuidance:
    text: str
    plan: ContentPlan
    profile: StyleProfile
    regenerated: bool = False


class ResponseAssembler:
    """
    Builds the final guidance string and records it in the history.

    One regeneration is attempted when the first candidate is too similar to
    something recently emitted; the second candidate is returned either way.
    """

    def __init__(
        self,
        history: Optional[RecentOutputHistory] = None,
        threshold: float = SIMILARITY_THRESHOLD,
    ):
        self.history = history if history is not None else RecentOutputHistory()
        self.threshold = threshold

    def assemble(
        self,
        signals: SignalSet,
        seed: int,
        profile_idx: int,
        raw_length: int,
    ) -> AssembledGuidance:
        envelope = envelope_for(raw_length)
        profile = STYLE_PROFILES[profile_idx % len(STYLE_PROFILES)]
        plan = plan_content(signals, seed, profile)
        result = AssembledGuidance(render(plan, profile, envelope), plan, profile)

        with self.history.lock:
            if is_too_similar(result.text, self.history.snapshot(), self.threshold):
                profile = STYLE_PROFILES[next_profile_index(profile_idx)]
                plan = plan_content(
                    signals,
                    seed,
                    profile,
                    opener_seed=offset_seed(seed, OPENER_SEED_OFFSET),
                    ask_seed=offset_seed(seed, ASK_SEED_OFFSET),
                )
                result = AssembledGuidance(
                    render(plan, profile, envelope), plan, profile, regenerated=True,
                )
                logger.debug(f"[ResponseAssembler] Regenerated with profile {profile.name}")
            self.history.remember(result.text)
        return result

    def recent(self) -> List[str]:
        return self.history.snapshot()

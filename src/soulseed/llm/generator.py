"""
GuidanceGenerator: one supportive guidance paragraph from an LLM provider.

The rules engine still supplies signals, suggestions and questions; the
provider only writes the paragraph. Replies are normalized into a single
plain-text paragraph (no markdown bullets, no role/label prefixes, no
reasoning blocks).
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from ..core.composer import TextAnalysis
from .client import LLMAPIError, LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a warm, calm companion for a Singapore teenager who has written a short note about how they feel.

Write ONE short paragraph (3-5 sentences) of supportive guidance:
- Acknowledge how they feel in plain, kind words
- Focus on one thing within their control
- Offer one small, concrete next step
- End with one gentle open-ended question

Rules:
- No diagnoses, no clinical language, no lists, no markdown, no headings.
- Do not lecture. Keep it judgment-free.
- If the note mentions self-harm or wanting to die, gently encourage them to reach out to a trusted adult or a crisis line right away.
- Output the paragraph only."""

USER_PROMPT = """\
Mode: {mode}
Detected mood: {mood}
Detected stressors: {stressors}

Note:
\"\"\"{text}\"\"\"

Write the paragraph now."""

GUIDANCE_TEMPERATURE = 0.6
GUIDANCE_MAX_TOKENS = 260

_THINK_RE = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
_BULLET_RE = re.compile(r"^[ \t]*(?:[-*•+]|\d+[.)]|#{1,6})[ \t]+", re.MULTILINE)
_SENTINEL_RE = re.compile(
    r"^\s*(?:<\|?(?:assistant|im_start|im_end|eot_id)\|?>|assistant\s*:|guidance\s*:|response\s*:|answer\s*:)\s*",
    re.IGNORECASE,
)
_EMPHASIS_RE = re.compile(r"(\*\*|__|`)")
_WHITESPACE_RE = re.compile(r"\s+")


def build_messages(analysis: TextAnalysis, mode: str = "journal") -> List[Dict[str, str]]:
    signals = analysis.signals
    prompt = USER_PROMPT.format(
        mode=mode,
        mood=signals.mood,
        stressors=", ".join(signals.stressors) or "none",
        text=analysis.working_text if analysis.compressed else analysis.display_text,
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def normalize_reply(reply: str) -> str:
    """Flatten an LLM reply into one plain paragraph."""
    text = _THINK_RE.sub(" ", reply)
    previous = None
    while previous != text:
        previous = text
        text = _SENTINEL_RE.sub("", text)
        text = _BULLET_RE.sub("", text)
    text = _EMPHASIS_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text.strip('"').strip()


class GuidanceGenerator:
    """
    LLM-backed guidance writer.

    ``generate`` returns an empty string on any provider failure so the
    caller can fall back to the rules-based composer.
    """

    def __init__(self, client: Optional[LLMClient] = None):
        self.client = client

    @property
    def is_available(self) -> bool:
        return self.client is not None and self.client.is_available

    def generate(self, analysis: TextAnalysis, mode: str = "journal") -> str:
        if not self.is_available:
            logger.warning("[GuidanceGenerator] Not available — no client configured")
            return ""

        messages = build_messages(analysis, mode)
        try:
            reply = self.client.chat_completion(
                messages=messages,
                temperature=GUIDANCE_TEMPERATURE,
                max_tokens=GUIDANCE_MAX_TOKENS,
            )
        except LLMAPIError as e:
            logger.warning(f"[GuidanceGenerator] Provider failed ({type(e).__name__}): {e}")
            return ""

        guidance = normalize_reply(reply or "")
        if not guidance:
            logger.warning("[GuidanceGenerator] Empty response from provider")
            return ""
        logger.info(f"[GuidanceGenerator] Provider responded ({len(guidance)} chars)")
        return guidance

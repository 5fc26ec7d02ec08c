"""
Pydantic request/response models for the SoulSeed ai-service API.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..content.lexicon import MOODS, RISK_FLAG_SELF_HARM, STRESSOR_TAGS


# =============================================================================
# REQUEST MODELS
# =============================================================================

class UnpackContext(BaseModel):
    """Optional hints about where the text came from."""
    mode: Optional[Literal["journal", "prompt"]] = Field(None, description="journal entry or answer to a prompt")


class UnpackRequest(BaseModel):
    """Free text to unpack."""
    text: str = Field(..., min_length=1, max_length=4000, description="User's free text")
    context: Optional[UnpackContext] = None


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class SignalData(BaseModel):
    mood: str
    stressors: List[str]
    risk_flags: List[str]

    @field_validator("mood")
    @classmethod
    def known_mood(cls, v: str) -> str:
        if v not in MOODS:
            raise ValueError(f"unknown mood {v!r}")
        return v

    @field_validator("stressors")
    @classmethod
    def known_stressors(cls, v: List[str]) -> List[str]:
        unknown = sorted(set(v) - STRESSOR_TAGS)
        if unknown:
            raise ValueError(f"unknown stressor tags {unknown}")
        return v

    @field_validator("risk_flags")
    @classmethod
    def known_risk_flags(cls, v: List[str]) -> List[str]:
        if any(flag != RISK_FLAG_SELF_HARM for flag in v):
            raise ValueError("unknown risk flag")
        return v


class GuidanceData(BaseModel):
    """Supportive, structured response for one piece of text."""
    guidance: str
    summary: str
    signals: SignalData
    suggestions: List[str] = Field(default_factory=list, max_length=3)
    questions: List[str] = Field(default_factory=list, max_length=5)
    source: str = "rules"


class UnpackResponse(BaseModel):
    result: GuidanceData


class StatusResponse(BaseModel):
    provider: str
    model: Optional[str] = None
    llm_available: bool

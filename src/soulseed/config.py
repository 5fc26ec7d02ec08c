"""
Process configuration for the SoulSeed ai-service.

Read once at startup from environment variables (a ``.env`` file fills in
unset keys) and resolved into a guidance strategy:

    RulesOnly               deterministic composer only
    ExternalProvider(...)   LLM guidance with fallback to the composer

Environment variables:
    LLM_PROVIDER        RULES (default) | HUGGINGFACE | OPENAI
    LLM_API_KEY / HF_TOKEN / OPENAI_API_KEY — provider API key
    LLM_BASE_URL        OpenAI-compatible base URL
    LLM_MODEL / HF_MODEL — model name
    LLM_TIMEOUT         request timeout in seconds (default 20)
    LLM_MAX_RETRIES     retries for transient failures (default 2)
    PORT                HTTP port (default 3002)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)

PROVIDER_RULES = "RULES"
PROVIDER_HUGGINGFACE = "HUGGINGFACE"
PROVIDER_OPENAI = "OPENAI"

PROVIDER_DEFAULTS = {
    PROVIDER_HUGGINGFACE: ("https://router.huggingface.co/v1", "HuggingFaceTB/SmolLM3-3B"),
    PROVIDER_OPENAI: ("https://api.openai.com/v1", "gpt-4o-mini"),
}

_API_KEY_VARS = {
    PROVIDER_HUGGINGFACE: ("LLM_API_KEY", "HF_TOKEN"),
    PROVIDER_OPENAI: ("LLM_API_KEY", "OPENAI_API_KEY"),
}


def load_dotenv(start: Optional[Path] = None) -> None:
    """Load the first .env found upwards into os.environ (only unset vars)."""
    origin = start or Path.cwd()
    for parent in [origin] + list(origin.resolve().parents):
        env_path = parent / ".env"
        if env_path.exists():
            for line in env_path.read_text().splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    key, value = line.split("=", 1)
                    key, value = key.strip(), value.strip().strip('"').strip("'")
                    if key and key not in os.environ:
                        os.environ[key] = value
            break


@dataclass(frozen=True)
class Settings:
    """Read-only configuration values."""
    provider: str = PROVIDER_RULES
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    timeout: float = 20.0
    max_retries: int = 2
    port: int = 3002

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        provider = env.get("LLM_PROVIDER", PROVIDER_RULES).strip().upper() or PROVIDER_RULES
        default_url, default_model = PROVIDER_DEFAULTS.get(provider, ("", ""))

        api_key = ""
        for var in _API_KEY_VARS.get(provider, ()):
            api_key = env.get(var, "").strip()
            if api_key:
                break

        model = (env.get("LLM_MODEL") or env.get("HF_MODEL") or default_model).strip()
        return cls(
            provider=provider,
            api_key=api_key,
            base_url=env.get("LLM_BASE_URL", default_url).strip().rstrip("/"),
            model=model,
            timeout=_as_float(env.get("LLM_TIMEOUT"), cls.timeout),
            max_retries=max(0, _as_int(env.get("LLM_MAX_RETRIES"), cls.max_retries)),
            port=_as_int(env.get("PORT"), cls.port),
        )


def _as_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value not in (None, "") else default
    except ValueError:
        logger.warning(f"[Settings] Ignoring non-numeric value {value!r}")
        return default


def _as_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        logger.warning(f"[Settings] Ignoring non-integer value {value!r}")
        return default


# =============================================================================
# STRATEGY
# =============================================================================

@dataclass(frozen=True)
class RulesOnly:
    """Deterministic composer only."""
    name: str = "rules"


@dataclass(frozen=True)
class ExternalProvider:
    """An OpenAI-compatible chat completions provider."""
    provider: str
    base_url: str
    model: str
    api_key: str
    timeout: float = 20.0
    max_retries: int = 2
    name: str = "external"


Strategy = Union[RulesOnly, ExternalProvider]


def resolve_strategy(settings: Settings) -> Strategy:
    """
    Pick the guidance strategy once at startup.

    Unknown providers and external providers without a key or URL degrade
    to RulesOnly.
    """
    if settings.provider == PROVIDER_RULES:
        return RulesOnly()
    if settings.provider not in PROVIDER_DEFAULTS:
        logger.warning(f"[Settings] Unknown LLM_PROVIDER {settings.provider!r}, using rules")
        return RulesOnly()
    if not settings.api_key or not settings.base_url:
        logger.warning(f"[Settings] {settings.provider} selected but no API key/URL, using rules")
        return RulesOnly()
    return ExternalProvider(
        provider=settings.provider,
        base_url=settings.base_url,
        model=settings.model,
        api_key=settings.api_key,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
    )

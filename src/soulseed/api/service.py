"""
GuidanceService: the strategy-aware entry point used by the HTTP routes.

Holds the process-wide GuidanceComposer (and its output history) plus an
optional GuidanceGenerator for external providers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import ExternalProvider, RulesOnly, Settings, Strategy, resolve_strategy
from ..core.composer import SOURCE_LLM, GuidanceComposer, GuidanceResult
from ..llm.client import LLMClient
from ..llm.generator import GuidanceGenerator

logger = logging.getLogger(__name__)


class GuidanceService:
    """
    Produces a GuidanceResult for a piece of text.

    RulesOnly: the composer writes everything.
    ExternalProvider: the composer supplies signals, suggestions, questions
    and summary; the provider writes the paragraph. Any provider failure
    falls back to the composer's paragraph.
    """

    def __init__(
        self,
        strategy: Optional[Strategy] = None,
        composer: Optional[GuidanceComposer] = None,
        generator: Optional[GuidanceGenerator] = None,
    ):
        self.strategy = strategy or RulesOnly()
        self.composer = composer or GuidanceComposer()
        if generator is None and isinstance(self.strategy, ExternalProvider):
            generator = GuidanceGenerator(
                LLMClient(
                    api_key=self.strategy.api_key,
                    base_url=self.strategy.base_url,
                    model=self.strategy.model,
                    timeout=self.strategy.timeout,
                    max_retries=self.strategy.max_retries,
                )
            )
        self.generator = generator

    @classmethod
    def from_settings(cls, settings: Settings) -> "GuidanceService":
        strategy = resolve_strategy(settings)
        logger.info(f"[GuidanceService] provider={settings.provider} strategy={strategy.name}")
        return cls(strategy=strategy)

    def unpack(self, text: str, mode: str = "journal") -> GuidanceResult:
        if self.generator is None:
            return self.composer.compose(text)

        analysis = self.composer.analyze(text)
        guidance = self.generator.generate(analysis, mode=mode)
        if guidance:
            return self.composer.result_for(
                analysis, self.composer.fit_external(analysis, guidance), source=SOURCE_LLM,
            )

        logger.info("[GuidanceService] Falling back to rules-based guidance")
        return self.composer.result_for(analysis, self.composer.write_guidance(analysis))

    def status(self) -> Dict[str, Any]:
        model = getattr(self.strategy, "model", None)
        return {
            "provider": self.strategy.name,
            "model": model,
            "llm_available": bool(self.generator and self.generator.is_available),
        }

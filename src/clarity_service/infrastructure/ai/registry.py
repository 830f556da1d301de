from __future__ import annotations

import logging

from clarity_service.application.ports.ai import InsightEngine
from clarity_service.config import Settings
from clarity_service.domain.value_objects.enums import AiModel
from clarity_service.infrastructure.ai.openai_engine import OpenAIInsightEngine, build_client

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Picks the insight engine for a user's preferred AI model.

    Unknown or unconfigured models fall back to the default engine.
    """

    def __init__(self, default: InsightEngine, engines: dict[str, InsightEngine] | None = None) -> None:
        self._default = default
        self._engines = dict(engines or {})

    def for_model(self, model: str | None) -> InsightEngine:
        if model is None:
            return self._default
        return self._engines.get(model, self._default)

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineRegistry:
        openai_engine = OpenAIInsightEngine(build_client(settings.OPENAI_API_KEY), settings.OPENAI_MODEL)
        engines: dict[str, InsightEngine] = {AiModel.OPENAI: openai_engine}
        if settings.ANTHROPIC_API_KEY:
            client = build_client(
                settings.ANTHROPIC_API_KEY,
                base_url=settings.ANTHROPIC_BASE_URL,
                default_headers={"X-Title": "CoupleClarity"},
            )
            engines[AiModel.ANTHROPIC] = OpenAIInsightEngine(client, settings.ANTHROPIC_MODEL)
        else:
            logger.info("ANTHROPIC_API_KEY not set; anthropic preference uses the OpenAI engine")
        return cls(openai_engine, engines)

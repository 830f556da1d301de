from __future__ import annotations

from typing import Protocol

from clarity_service.application.dto.insights import (
    ConflictDescription,
    LoveLanguageAnalysis,
    TherapyDraft,
    TherapyInput,
    Transformation,
)


class InsightEngine(Protocol):
    """Language-model backed rewriting and analysis.

    Implementations never raise for upstream failures; they return fallback
    results instead.
    """

    async def transform_message(
        self, emotion: str, raw_message: str, context: str | None,
    ) -> Transformation: ...

    async def transform_conflict(self, description: ConflictDescription) -> Transformation: ...

    async def summarize_response(self, original: str, response: str) -> str | None: ...

    async def analyze_love_language(self, love_language: str) -> LoveLanguageAnalysis: ...

    async def generate_therapy_session(self, history: TherapyInput) -> TherapyDraft: ...


class EngineSelector(Protocol):
    def for_model(self, model: str | None) -> InsightEngine: ...

"""InsightEngine backed by an OpenAI-compatible chat completions API."""
from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from clarity_service.application.dto.insights import (
    ConflictDescription,
    LoveLanguageAnalysis,
    TherapyDraft,
    TherapyInput,
    Transformation,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a relationship communication coach. You help partners express "
    "feelings with empathy, without blame, and always answer with a single JSON object."
)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class _TransformationOut(BaseModel):
    transformed_message: str
    communication_elements: list[str] = Field(default_factory=list)
    delivery_tips: list[str] = Field(default_factory=list)


class _SummaryOut(BaseModel):
    summary: str


class _LoveLanguageOut(BaseModel):
    description: str
    partner_suggestions: list[str] = Field(default_factory=list)
    self_care_tips: list[str] = Field(default_factory=list)


class _TherapyOut(BaseModel):
    transcript: str
    emotional_patterns: str
    core_issues: str
    recommendations: str


class OpenAIInsightEngine:
    """Implements application.ports.ai.InsightEngine."""

    def __init__(self, client: AsyncOpenAI, model: str, temperature: float = 0.7) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature

    async def _complete(self, prompt: str, schema: type[_ModelT]) -> _ModelT | None:
        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError:
            logger.exception("AI request to %s failed", self._model)
            return None

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            logger.warning("AI model %s returned an empty completion", self._model)
            return None
        try:
            return schema.model_validate(json.loads(content))
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning("AI model %s returned malformed JSON: %.200s", self._model, content)
            return None

    async def transform_message(
        self, emotion: str, raw_message: str, context: str | None,
    ) -> Transformation:
        prompt = (
            f"I'm feeling {emotion}. Here is what I want to say to my partner:\n"
            f"{raw_message}\n"
        )
        if context:
            prompt += f"Context: {context}\n"
        prompt += (
            "Rewrite it as a compassionate, non-blaming message. Respond with JSON keys "
            "transformed_message (string), communication_elements (list of strings) and "
            "delivery_tips (list of strings)."
        )
        out = await self._complete(prompt, _TransformationOut)
        if out is None:
            return Transformation.fallback()
        return Transformation(
            transformed_message=out.transformed_message,
            communication_elements=out.communication_elements,
            delivery_tips=out.delivery_tips,
        )

    async def transform_conflict(self, description: ConflictDescription) -> Transformation:
        prompt = (
            f"Topic: {description.topic}\n"
            f"Situation: {description.situation}\n"
            f"My feelings: {description.feelings}\n"
            f"Impact on me: {description.impact}\n"
            f"What I'm asking for: {description.request}\n"
            "Turn this into one caring message that opens a constructive conversation. "
            "Respond with JSON keys transformed_message, communication_elements and delivery_tips."
        )
        out = await self._complete(prompt, _TransformationOut)
        if out is None:
            return Transformation.fallback()
        return Transformation(
            transformed_message=out.transformed_message,
            communication_elements=out.communication_elements,
            delivery_tips=out.delivery_tips,
        )

    async def summarize_response(self, original: str, response: str) -> str | None:
        prompt = (
            f"Original message: {original}\nPartner's response: {response}\n"
            "Summarize the emotional core of the response in one sentence. "
            "Respond with JSON key summary."
        )
        out = await self._complete(prompt, _SummaryOut)
        return out.summary if out else None

    async def analyze_love_language(self, love_language: str) -> LoveLanguageAnalysis:
        readable = love_language.replace("_", " ")
        prompt = (
            f"My primary love language is {readable}. Explain what it means for me, how my "
            "partner can show love in this language and how I can care for myself. Respond "
            "with JSON keys description, partner_suggestions (list) and self_care_tips (list)."
        )
        out = await self._complete(prompt, _LoveLanguageOut)
        if out is None:
            return LoveLanguageAnalysis(
                love_language=love_language,
                description=f"People whose love language is {readable} feel most cared for "
                "when their partner expresses love in that way.",
            )
        return LoveLanguageAnalysis(
            love_language=love_language,
            description=out.description,
            partner_suggestions=out.partner_suggestions,
            self_care_tips=out.self_care_tips,
        )

    async def generate_therapy_session(self, history: TherapyInput) -> TherapyDraft:
        first, second = history.partner_names
        lines: list[str] = [f"Partners: {first} and {second}."]
        if history.conflict_topics:
            lines.append("Recent conflict topics: " + "; ".join(history.conflict_topics))
        lines.extend(history.conflict_messages)
        if history.shared_messages:
            lines.append("Messages they shared with each other:")
            lines.extend(history.shared_messages)
        lines.append(
            "Write a short simulated couples-therapy session for them and analyse it. "
            "Respond with JSON keys transcript, emotional_patterns, core_issues and "
            "recommendations (all strings)."
        )
        out = await self._complete("\n".join(lines), _TherapyOut)
        if out is None:
            return _fallback_therapy(history)
        return TherapyDraft(
            transcript=out.transcript,
            emotional_patterns=out.emotional_patterns,
            core_issues=out.core_issues,
            recommendations=out.recommendations,
        )


def _fallback_therapy(history: TherapyInput) -> TherapyDraft:
    topics = ", ".join(history.conflict_topics) or "everyday communication"
    return TherapyDraft(
        transcript="The session could not be generated right now. Please try again later.",
        emotional_patterns="Not enough information to identify patterns.",
        core_issues=f"Recent topics: {topics}.",
        recommendations="Set aside calm, uninterrupted time to talk about how you both feel.",
    )


def build_client(api_key: str, base_url: str | None = None, **kwargs: Any) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key or "not-configured", base_url=base_url, **kwargs)

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from clarity_service.application.dto.insights import (
    FALLBACK_TRANSFORMED_MESSAGE,
    TherapyInput,
)
from clarity_service.infrastructure.ai.openai_engine import OpenAIInsightEngine


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self._content = content
        self._error = error
        self.kwargs: dict | None = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self._error is not None:
            raise self._error
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _engine(completions: FakeCompletions) -> OpenAIInsightEngine:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIInsightEngine(client, "gpt-test")


@pytest.mark.asyncio
async def test_transform_message_parses_json():
    completions = FakeCompletions(json.dumps({
        "transformed_message": "I feel lonely when we don't talk.",
        "communication_elements": ["I-statement"],
        "delivery_tips": ["Speak softly"],
    }))

    result = await _engine(completions).transform_message("lonely", "You never call", "long week")

    assert result.transformed_message == "I feel lonely when we don't talk."
    assert result.delivery_tips == ["Speak softly"]
    assert completions.kwargs["model"] == "gpt-test"
    assert completions.kwargs["response_format"] == {"type": "json_object"}
    assert "long week" in completions.kwargs["messages"][1]["content"]


@pytest.mark.asyncio
async def test_malformed_json_falls_back():
    result = await _engine(FakeCompletions("not json")).transform_message("sad", "...", None)

    assert result.transformed_message == FALLBACK_TRANSFORMED_MESSAGE
    assert len(result.delivery_tips) == 3


@pytest.mark.asyncio
async def test_api_error_falls_back():
    error = APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))

    engine = _engine(FakeCompletions(error=error))

    assert await engine.summarize_response("a", "b") is None
    analysis = await engine.analyze_love_language("acts_of_service")
    assert analysis.love_language == "acts_of_service"
    assert "acts of service" in analysis.description


@pytest.mark.asyncio
async def test_therapy_fallback_mentions_topics():
    history = TherapyInput(
        partner_names=("Alex", "Sam"),
        conflict_topics=["Money", "Chores"],
        conflict_messages=[],
        shared_messages=[],
    )

    draft = await _engine(FakeCompletions('{"transcript": "missing fields"}')).generate_therapy_session(history)

    assert draft.core_issues == "Recent topics: Money, Chores."

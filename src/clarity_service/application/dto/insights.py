"""Results produced by the AI insight engine."""
from __future__ import annotations

from dataclasses import dataclass, field

FALLBACK_TRANSFORMED_MESSAGE = (
    "I'm feeling some emotions about our situation and would like to talk about it "
    "in a constructive way. Can we find some time to discuss this together?"
)
FALLBACK_COMMUNICATION_ELEMENTS = ["Expressing feelings", "Requesting conversation"]
FALLBACK_DELIVERY_TIPS = [
    "Choose a calm moment for this conversation",
    "Use a gentle tone of voice",
    "Be open to hearing their perspective",
]


@dataclass(frozen=True, slots=True)
class Transformation:
    transformed_message: str
    communication_elements: list[str] = field(default_factory=list)
    delivery_tips: list[str] = field(default_factory=list)

    @classmethod
    def fallback(cls) -> Transformation:
        return cls(
            transformed_message=FALLBACK_TRANSFORMED_MESSAGE,
            communication_elements=list(FALLBACK_COMMUNICATION_ELEMENTS),
            delivery_tips=list(FALLBACK_DELIVERY_TIPS),
        )


@dataclass(frozen=True, slots=True)
class ConflictDescription:
    topic: str
    situation: str
    feelings: str
    impact: str
    request: str


@dataclass(frozen=True, slots=True)
class LoveLanguageAnalysis:
    love_language: str
    description: str
    partner_suggestions: list[str] = field(default_factory=list)
    self_care_tips: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TherapyInput:
    """Couple history fed to the therapy-session generator."""

    partner_names: tuple[str, str]
    conflict_topics: list[str]
    conflict_messages: list[str]
    shared_messages: list[str]


@dataclass(frozen=True, slots=True)
class TherapyDraft:
    transcript: str
    emotional_patterns: str
    core_issues: str
    recommendations: str

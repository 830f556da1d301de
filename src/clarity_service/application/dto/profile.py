from __future__ import annotations

from dataclasses import dataclass

from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.user import User


@dataclass(frozen=True, slots=True)
class Questionnaire:
    love_language: str
    conflict_style: str
    communication_style: str
    repair_style: str
    preferred_ai_model: str | None = None


@dataclass(frozen=True, slots=True)
class PartnershipProfile:
    partnership: Partnership
    partner: User | None


from __future__ import annotations

from datetime import datetime
from uuid import UUID

from clarity_service.api.schemas.common import CamelModel
from clarity_service.domain.value_objects.enums import (
    AiModel,
    CommunicationStyle,
    ConflictStyle,
    LoveLanguage,
    PrivacyLevel,
    RelationshipType,
    RepairStyle,
)


class QuestionnaireRequest(CamelModel):
    love_language: LoveLanguage
    conflict_style: ConflictStyle
    communication_style: CommunicationStyle
    repair_style: RepairStyle
    preferred_ai_model: AiModel | None = None


class UserPreferencesOut(CamelModel):
    user_id: int
    love_language: str
    conflict_style: str
    communication_style: str
    repair_style: str
    preferred_ai_model: str
    created_at: datetime
    updated_at: datetime


class DiscoverRequest(CamelModel):
    answers: list[str]


class DiscoverResponse(CamelModel):
    love_language: LoveLanguage


class LoveLanguageAnalysisOut(CamelModel):
    love_language: str
    description: str
    partner_suggestions: list[str]
    self_care_tips: list[str]


class PartnerOut(CamelModel):
    id: int
    username: str
    display_name: str
    first_name: str
    avatar_url: str | None


class PartnershipOut(CamelModel):
    id: UUID
    user1_id: int
    user2_id: int
    status: str
    created_at: datetime
    start_date: datetime | None
    relationship_type: str | None
    anniversary_date: datetime | None
    meeting_story: str | None
    couple_nickname: str | None
    shared_picture: str | None
    relationship_goals: str | None
    privacy_level: str


class PartnershipProfileOut(CamelModel):
    partnership: PartnershipOut
    partner: PartnerOut | None


class PartnershipProfileUpdate(CamelModel):
    relationship_type: RelationshipType | None = None
    anniversary_date: datetime | None = None
    meeting_story: str | None = None
    couple_nickname: str | None = None
    shared_picture: str | None = None
    relationship_goals: str | None = None
    privacy_level: PrivacyLevel | None = None

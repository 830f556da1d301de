from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from clarity_service.application.dto.insights import LoveLanguageAnalysis
from clarity_service.application.dto.principal import Principal
from clarity_service.application.dto.profile import PartnershipProfile, Questionnaire
from clarity_service.application.exceptions import NotFoundError, ValidationError
from clarity_service.application.ports.ai import EngineSelector
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.preferences import UserPreferences
from clarity_service.domain.love_language import (
    DISCOVERY_QUESTION_COUNT,
    determine_love_language,
)
from clarity_service.domain.value_objects.enums import AiModel, LoveLanguage

PROFILE_FIELDS = frozenset(
    {
        "relationship_type",
        "anniversary_date",
        "meeting_story",
        "couple_nickname",
        "shared_picture",
        "relationship_goals",
        "privacy_level",
    }
)


async def get_user_preferences(principal: Principal, uow: UnitOfWork) -> UserPreferences:
    prefs = await uow.user_prefs.get(principal.user_id)
    if prefs is None:
        raise NotFoundError("Preferences not found")
    return prefs


async def save_user_preferences(
    principal: Principal, answers: Questionnaire, uow: UnitOfWork,
) -> UserPreferences:
    now = datetime.now(timezone.utc)
    existing = await uow.user_prefs.get(principal.user_id)
    model = answers.preferred_ai_model or (
        existing.preferred_ai_model if existing else AiModel.OPENAI
    )
    prefs = await uow.user_prefs.upsert(
        UserPreferences(
            user_id=principal.user_id,
            love_language=answers.love_language,
            conflict_style=answers.conflict_style,
            communication_style=answers.communication_style,
            repair_style=answers.repair_style,
            preferred_ai_model=model,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
    )
    await uow.commit()
    return prefs


def discover_love_language(answers: Sequence[str]) -> LoveLanguage:
    if len(answers) != DISCOVERY_QUESTION_COUNT:
        raise ValidationError(f"Exactly {DISCOVERY_QUESTION_COUNT} answers are required")
    return determine_love_language(answers)


async def analyze_love_language(
    principal: Principal, engines: EngineSelector, uow: UnitOfWork,
) -> LoveLanguageAnalysis:
    prefs = await get_user_preferences(principal, uow)
    engine = engines.for_model(prefs.preferred_ai_model)
    return await engine.analyze_love_language(prefs.love_language)


async def get_partnership_profile(principal: Principal, uow: UnitOfWork) -> PartnershipProfile:
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    if partnership is None:
        raise NotFoundError("No active partnership found")
    partner = await uow.users.get_by_id(partnership.partner_of(principal.user_id))
    return PartnershipProfile(partnership=partnership, partner=partner)


async def update_partnership_profile(
    principal: Principal, changes: dict[str, Any], uow: UnitOfWork,
) -> Partnership:
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    if partnership is None:
        raise NotFoundError("No active partnership found")
    fields = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
    if not fields:
        return partnership
    updated = await uow.partnerships_w.update(partnership.id, fields)
    await uow.commit()
    return updated

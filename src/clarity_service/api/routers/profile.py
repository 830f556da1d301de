from __future__ import annotations

from fastapi import APIRouter

from clarity_service.api.deps import CurrentPrincipal, EnginesDep, UoWDep
from clarity_service.api.schemas.profile import (
    DiscoverRequest,
    DiscoverResponse,
    LoveLanguageAnalysisOut,
    PartnershipOut,
    PartnershipProfileOut,
    PartnershipProfileUpdate,
    QuestionnaireRequest,
    UserPreferencesOut,
)
from clarity_service.application.dto.profile import Questionnaire
from clarity_service.services import profile_service

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/user/preferences", response_model=UserPreferencesOut)
async def get_preferences(principal: CurrentPrincipal, uow: UoWDep) -> UserPreferencesOut:
    prefs = await profile_service.get_user_preferences(principal, uow)
    return UserPreferencesOut.model_validate(prefs)


@router.post("/user/preferences", response_model=UserPreferencesOut)
async def save_preferences(
    body: QuestionnaireRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> UserPreferencesOut:
    prefs = await profile_service.save_user_preferences(
        principal,
        Questionnaire(
            love_language=body.love_language,
            conflict_style=body.conflict_style,
            communication_style=body.communication_style,
            repair_style=body.repair_style,
            preferred_ai_model=body.preferred_ai_model,
        ),
        uow,
    )
    return UserPreferencesOut.model_validate(prefs)


@router.post("/user/love-language/discover", response_model=DiscoverResponse)
async def discover_love_language(
    body: DiscoverRequest, principal: CurrentPrincipal,
) -> DiscoverResponse:
    return DiscoverResponse(love_language=profile_service.discover_love_language(body.answers))


@router.get("/user/love-language-analysis", response_model=LoveLanguageAnalysisOut)
async def love_language_analysis(
    principal: CurrentPrincipal, engines: EnginesDep, uow: UoWDep,
) -> LoveLanguageAnalysisOut:
    analysis = await profile_service.analyze_love_language(principal, engines, uow)
    return LoveLanguageAnalysisOut.model_validate(analysis)


@router.get("/partnership/profile", response_model=PartnershipProfileOut)
async def get_partnership_profile(
    principal: CurrentPrincipal, uow: UoWDep,
) -> PartnershipProfileOut:
    profile = await profile_service.get_partnership_profile(principal, uow)
    return PartnershipProfileOut.model_validate(profile)


@router.put("/partnership/profile", response_model=PartnershipOut)
async def update_partnership_profile(
    body: PartnershipProfileUpdate, principal: CurrentPrincipal, uow: UoWDep,
) -> PartnershipOut:
    partnership = await profile_service.update_partnership_profile(
        principal, body.model_dump(exclude_unset=True), uow,
    )
    return PartnershipOut.model_validate(partnership)

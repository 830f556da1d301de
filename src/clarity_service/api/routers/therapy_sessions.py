from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from clarity_service.api.deps import CurrentPrincipal, EnginesDep, UoWDep
from clarity_service.api.schemas.therapy import TherapySessionOut, TherapySessionUpdate
from clarity_service.config import settings
from clarity_service.services import therapy_service

router = APIRouter(prefix="/api/therapy-sessions", tags=["therapy-sessions"])


@router.post("", response_model=TherapySessionOut, status_code=201)
async def create_session(
    principal: CurrentPrincipal, engines: EnginesDep, uow: UoWDep,
) -> TherapySessionOut:
    session = await therapy_service.create_session(
        principal, engines, uow, lookback_days=settings.THERAPY_LOOKBACK_DAYS,
    )
    return TherapySessionOut.model_validate(session)


@router.get("", response_model=list[TherapySessionOut])
async def list_sessions(principal: CurrentPrincipal, uow: UoWDep) -> list[TherapySessionOut]:
    sessions = await therapy_service.list_sessions(principal, uow)
    return [TherapySessionOut.model_validate(s) for s in sessions]


@router.get("/{session_id}", response_model=TherapySessionOut)
async def get_session(
    session_id: UUID, principal: CurrentPrincipal, uow: UoWDep,
) -> TherapySessionOut:
    session = await therapy_service.get_session(session_id, principal, uow)
    return TherapySessionOut.model_validate(session)


@router.put("/{session_id}", response_model=TherapySessionOut)
async def update_session(
    session_id: UUID,
    body: TherapySessionUpdate,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> TherapySessionOut:
    session = await therapy_service.update_session(
        session_id, principal, body.user_notes, body.is_reviewed, uow,
    )
    return TherapySessionOut.model_validate(session)

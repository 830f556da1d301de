from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from clarity_service.api.deps import CurrentPrincipal, EnginesDep, UoWDep
from clarity_service.api.schemas.conflict import (
    CreateThreadRequest,
    ThreadMessageOut,
    ThreadMessageRequest,
    ThreadOut,
    ThreadStatusRequest,
    TransformConflictRequest,
    TransformConflictResponse,
)
from clarity_service.application.dto.conflict import ThreadStatusChange
from clarity_service.application.dto.insights import ConflictDescription
from clarity_service.services import conflict_service

router = APIRouter(prefix="/api", tags=["conflict-threads"])


@router.get("/conflict-threads", response_model=list[ThreadOut])
async def list_threads(principal: CurrentPrincipal, uow: UoWDep) -> list[ThreadOut]:
    threads = await conflict_service.list_threads(principal, uow)
    return [ThreadOut.model_validate(t) for t in threads]


@router.post("/conflict-threads", response_model=ThreadOut, status_code=201)
async def create_thread(
    body: CreateThreadRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> ThreadOut:
    thread = await conflict_service.create_thread(
        principal, body.topic, body.partner_id, body.initial_message, uow,
    )
    return ThreadOut.model_validate(thread)


@router.get("/conflict-threads/{thread_id}", response_model=ThreadOut)
async def get_thread(thread_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> ThreadOut:
    thread = await conflict_service.get_thread(thread_id, principal, uow)
    return ThreadOut.model_validate(thread)


@router.get("/conflict-threads/{thread_id}/messages", response_model=list[ThreadMessageOut])
async def list_thread_messages(
    thread_id: UUID, principal: CurrentPrincipal, uow: UoWDep,
) -> list[ThreadMessageOut]:
    messages = await conflict_service.list_thread_messages(thread_id, principal, uow)
    return [ThreadMessageOut.model_validate(m) for m in messages]


@router.post(
    "/conflict-threads/{thread_id}/messages",
    response_model=ThreadMessageOut,
    status_code=201,
)
async def add_thread_message(
    thread_id: UUID,
    body: ThreadMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadMessageOut:
    message = await conflict_service.add_thread_message(
        thread_id, principal, body.content, body.emotional_tone, uow,
    )
    return ThreadMessageOut.model_validate(message)


@router.patch("/conflict-threads/{thread_id}/status", response_model=ThreadOut)
async def update_status(
    thread_id: UUID,
    body: ThreadStatusRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ThreadOut:
    thread = await conflict_service.update_status(
        thread_id,
        principal,
        ThreadStatusChange(
            status=body.status,
            summary=body.summary,
            insights=body.insights,
            needs_extra_help=body.needs_extra_help,
            stuck_reason=body.stuck_reason,
        ),
        uow,
    )
    return ThreadOut.model_validate(thread)


@router.post("/transform-conflict", response_model=TransformConflictResponse)
async def transform_conflict(
    body: TransformConflictRequest,
    principal: CurrentPrincipal,
    engines: EnginesDep,
    uow: UoWDep,
) -> TransformConflictResponse:
    result = await conflict_service.transform_conflict(
        principal,
        ConflictDescription(
            topic=body.topic,
            situation=body.situation,
            feelings=body.feelings,
            impact=body.impact,
            request=body.request,
        ),
        body.partner_id,
        engines,
        uow,
    )
    return TransformConflictResponse.model_validate(result)

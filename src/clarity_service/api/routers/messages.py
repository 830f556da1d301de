from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from clarity_service.api.deps import CurrentPrincipal, EnginesDep, UoWDep
from clarity_service.api.schemas.message import (
    CreateResponseRequest,
    MessageOut,
    ResponseOut,
    TransformRequest,
    TransformResponse,
)
from clarity_service.application.dto import message as dto
from clarity_service.services import message_service

router = APIRouter(prefix="/api", tags=["messages"])


@router.post("/transform", response_model=TransformResponse)
async def transform(
    body: TransformRequest,
    principal: CurrentPrincipal,
    engines: EnginesDep,
    uow: UoWDep,
) -> TransformResponse:
    result, message = await message_service.transform_message(
        principal,
        dto.TransformRequest(
            emotion=body.emotion,
            raw_message=body.raw_message,
            context=body.context,
            save_to_history=body.save_to_history,
            share_with_partner=body.share_with_partner,
            partner_id=body.partner_id,
        ),
        engines,
        uow,
    )
    return TransformResponse(
        transformed_message=result.transformed_message,
        communication_elements=result.communication_elements,
        delivery_tips=result.delivery_tips,
        message_id=message.id if message else None,
    )


@router.get("/messages", response_model=list[MessageOut])
async def list_messages(principal: CurrentPrincipal, uow: UoWDep) -> list[MessageOut]:
    messages = await message_service.list_messages(principal, uow)
    return [MessageOut.model_validate(m) for m in messages]


@router.get("/messages/{message_id}", response_model=MessageOut)
async def get_message(message_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> MessageOut:
    message = await message_service.get_message(message_id, principal, uow)
    return MessageOut.model_validate(message)


@router.get("/messages/{message_id}/responses", response_model=list[ResponseOut])
async def list_responses(
    message_id: UUID, principal: CurrentPrincipal, uow: UoWDep,
) -> list[ResponseOut]:
    responses = await message_service.list_responses(message_id, principal, uow)
    return [ResponseOut.model_validate(r) for r in responses]


@router.post("/messages/{message_id}/responses", response_model=ResponseOut, status_code=201)
async def create_response(
    message_id: UUID,
    body: CreateResponseRequest,
    principal: CurrentPrincipal,
    engines: EnginesDep,
    uow: UoWDep,
) -> ResponseOut:
    response = await message_service.add_response(message_id, principal, body.content, engines, uow)
    return ResponseOut.model_validate(response)


@router.get("/partners/{partner_id}/shared-messages", response_model=list[MessageOut])
async def shared_messages(
    partner_id: int, principal: CurrentPrincipal, uow: UoWDep,
) -> list[MessageOut]:
    messages = await message_service.list_shared_messages(partner_id, principal, uow)
    return [MessageOut.model_validate(m) for m in messages]

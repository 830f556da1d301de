from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from clarity_service.api.deps import CurrentPrincipal, UoWDep
from clarity_service.api.schemas.common import StatusMessage
from clarity_service.api.schemas.partnership import (
    ConnectByTokenRequest,
    ConnectOut,
    ConnectRequest,
    InviteOut,
    InviteRequest,
)
from clarity_service.api.schemas.profile import PartnershipOut
from clarity_service.application.dto.partnership import ConnectResult
from clarity_service.services import partnership_service

router = APIRouter(prefix="/api/partnerships", tags=["partnerships"])


def _connect_response(result: ConnectResult) -> JSONResponse:
    out = ConnectOut(
        message=result.message,
        partner_name=result.partner_name,
        partnership=PartnershipOut.model_validate(result.partnership),
    )
    return JSONResponse(
        status_code=201 if result.created else 200,
        content=out.model_dump(mode="json", by_alias=True),
    )


@router.post("/invites", response_model=InviteOut, status_code=201)
async def create_invite(body: InviteRequest, principal: CurrentPrincipal, uow: UoWDep) -> InviteOut:
    invite = await partnership_service.create_invite(
        principal,
        body.partner_email,
        uow,
        partner_first_name=body.partner_first_name,
        partner_last_name=body.partner_last_name,
    )
    return InviteOut.model_validate(invite)


@router.post("/connect", response_model=ConnectOut)
async def connect(body: ConnectRequest, principal: CurrentPrincipal, uow: UoWDep) -> JSONResponse:
    return _connect_response(
        await partnership_service.connect_by_email(principal, body.partner_email, uow)
    )


@router.post("/connect-by-token", response_model=ConnectOut)
async def connect_by_token(
    body: ConnectByTokenRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> JSONResponse:
    return _connect_response(
        await partnership_service.connect_by_token(principal, body.invite_token, uow)
    )


@router.delete("/{partnership_id}", response_model=StatusMessage)
async def remove_partnership(
    partnership_id: UUID, principal: CurrentPrincipal, uow: UoWDep,
) -> StatusMessage:
    await partnership_service.remove_partnership(partnership_id, principal, uow)
    return StatusMessage(message="Partnership successfully removed")

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from clarity_service.api.deps import CurrentPrincipal, UoWDep
from clarity_service.api.schemas.common import StatusMessage
from clarity_service.api.schemas.notification import (
    NotificationPreferencesOut,
    NotificationPreferencesUpdate,
    SubscribeRequest,
    UnsubscribeRequest,
    VapidKeyOut,
)
from clarity_service.config import settings
from clarity_service.services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/vapid-public-key", response_model=VapidKeyOut)
async def vapid_public_key() -> VapidKeyOut:
    return VapidKeyOut(public_key=settings.VAPID_PUBLIC_KEY)


@router.post("/subscribe")
async def subscribe(
    body: SubscribeRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> JSONResponse:
    keys = body.keys
    _, created = await notification_service.subscribe(
        principal,
        body.endpoint,
        keys.p256dh if keys else None,
        keys.auth if keys else None,
        uow,
    )
    if not created:
        result = StatusMessage(message="Subscription already exists")
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))
    result = StatusMessage(message="Subscription added successfully")
    return JSONResponse(status_code=201, content=result.model_dump(by_alias=True))


@router.delete("/unsubscribe", response_model=StatusMessage)
async def unsubscribe(
    body: UnsubscribeRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> StatusMessage:
    removed = await notification_service.unsubscribe(principal, body.endpoint, uow)
    return StatusMessage(
        message="Subscription removed successfully" if removed else "Subscription not found",
    )


@router.get("/preferences", response_model=NotificationPreferencesOut)
async def get_preferences(principal: CurrentPrincipal, uow: UoWDep) -> NotificationPreferencesOut:
    prefs = await notification_service.get_preferences(principal, uow)
    return NotificationPreferencesOut.model_validate(prefs)


@router.post("/preferences", response_model=NotificationPreferencesOut)
async def update_preferences(
    body: NotificationPreferencesUpdate, principal: CurrentPrincipal, uow: UoWDep,
) -> NotificationPreferencesOut:
    prefs = await notification_service.update_preferences(
        principal, body.model_dump(exclude_none=True), uow,
    )
    return NotificationPreferencesOut.model_validate(prefs)

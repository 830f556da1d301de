from __future__ import annotations

from pydantic import BaseModel

from clarity_service.api.schemas.common import CamelModel


class VapidKeyOut(CamelModel):
    public_key: str


class SubscriptionKeys(BaseModel):
    p256dh: str | None = None
    auth: str | None = None


class SubscribeRequest(BaseModel):
    """Shape of the browser's ``PushSubscription.toJSON()``."""

    endpoint: str | None = None
    keys: SubscriptionKeys | None = None


class UnsubscribeRequest(BaseModel):
    endpoint: str | None = None


class NotificationPreferencesOut(CamelModel):
    user_id: int
    new_conflicts: bool
    partner_emotions: bool
    direct_messages: bool
    conflict_updates: bool
    weekly_check_ins: bool
    appreciations: bool
    exercise_notifications: bool


class NotificationPreferencesUpdate(CamelModel):
    new_conflicts: bool | None = None
    partner_emotions: bool | None = None
    direct_messages: bool | None = None
    conflict_updates: bool | None = None
    weekly_check_ins: bool | None = None
    appreciations: bool | None = None
    exercise_notifications: bool | None = None

from __future__ import annotations

from typing import Protocol

from clarity_service.application.dto.notification import PushNotification
from clarity_service.domain.entities.push_subscription import PushSubscription


class SubscriptionGoneError(Exception):
    """Push service reported the subscription as expired (404/410)."""


class PushSender(Protocol):
    async def send(self, subscription: PushSubscription, notification: PushNotification) -> None: ...


class PushDeliveryError(Exception):
    """Push service rejected the message for a reason other than expiry."""

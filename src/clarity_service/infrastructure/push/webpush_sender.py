"""Web Push delivery through pywebpush (VAPID)."""
from __future__ import annotations

import asyncio
import logging

from pywebpush import WebPushException, webpush

from clarity_service.application.dto.notification import PushNotification
from clarity_service.application.ports.push import PushDeliveryError, SubscriptionGoneError
from clarity_service.domain.entities.push_subscription import PushSubscription
from clarity_service.infrastructure.push.payload import PushPayload

logger = logging.getLogger(__name__)

GONE_STATUSES = frozenset({404, 410})


class WebPushSender:
    """Implements application.ports.push.PushSender."""

    def __init__(self, vapid_private_key: str, vapid_subject: str, ttl: int = 24 * 60 * 60) -> None:
        self._private_key = vapid_private_key
        self._claims = {"sub": vapid_subject}
        self._ttl = ttl

    async def send(self, subscription: PushSubscription, notification: PushNotification) -> None:
        body = PushPayload.from_notification(notification).to_json()
        subscription_info = {
            "endpoint": subscription.endpoint,
            "keys": {"p256dh": subscription.p256dh, "auth": subscription.auth},
        }
        try:
            # pywebpush is blocking (requests).
            await asyncio.to_thread(
                webpush,
                subscription_info=subscription_info,
                data=body,
                vapid_private_key=self._private_key,
                vapid_claims=dict(self._claims),
                ttl=self._ttl,
            )
        except WebPushException as exc:
            status = exc.response.status_code if exc.response is not None else None
            if status in GONE_STATUSES:
                raise SubscriptionGoneError(subscription.endpoint) from exc
            raise PushDeliveryError(f"push service answered {status}: {exc}") from exc
        logger.debug("Push delivered to subscription %s", subscription.id)

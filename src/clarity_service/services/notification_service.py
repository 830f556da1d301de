"""Push subscriptions, notification preferences and partner-bound event fan-out."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from clarity_service.application.dto.notification import (
    PUSH_SEND,
    REALTIME_EVENT,
    PushNotification,
    PushResult,
)
from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import BadRequestError
from clarity_service.application.ports.push import (
    PushDeliveryError,
    PushSender,
    SubscriptionGoneError,
)
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.preferences import NotificationPreferences
from clarity_service.domain.entities.push_subscription import PushSubscription
from clarity_service.domain.value_objects.enums import NotificationTopic

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = frozenset(topic.value for topic in NotificationTopic)


async def notify_user(
    recipient_id: int,
    event_type: str,
    data: dict[str, Any],
    uow: UnitOfWork,
    *,
    topic: NotificationTopic | None = None,
    push: PushNotification | None = None,
) -> None:
    """Queue a realtime event and, if the recipient allows ``topic``, a push.

    Nothing is committed here; the caller commits together with its own
    state change.
    """
    await uow.outbox.add(
        REALTIME_EVENT,
        {"recipient_id": recipient_id, "type": event_type, "data": data},
    )
    if push is None or topic is None:
        return

    prefs = await uow.notification_prefs.get(recipient_id)
    if prefs is not None and not prefs.allows(topic):
        logger.debug("User %d muted %s notifications", recipient_id, topic)
        return
    await uow.outbox.add(
        PUSH_SEND,
        {"recipient_id": recipient_id, "notification": push.to_dict()},
    )


async def subscribe(
    principal: Principal,
    endpoint: str | None,
    p256dh: str | None,
    auth: str | None,
    uow: UnitOfWork,
) -> tuple[PushSubscription, bool]:
    """Register a browser push endpoint. Returns (subscription, created)."""
    if not endpoint or not p256dh or not auth:
        raise BadRequestError("Invalid subscription data")

    existing = await uow.subscriptions.get_by_endpoint(endpoint)
    if existing is not None:
        if existing.user_id == principal.user_id:
            return existing, False
        # Endpoint moved to another account on the same browser.
        await uow.subscriptions_w.delete(existing.id)

    subscription = await uow.subscriptions_w.add(
        PushSubscription(
            id=uuid.uuid4(),
            user_id=principal.user_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            created_at=datetime.now(timezone.utc),
        )
    )
    await uow.commit()
    logger.info("User %d subscribed to push notifications", principal.user_id)
    return subscription, True


async def unsubscribe(principal: Principal, endpoint: str | None, uow: UnitOfWork) -> bool:
    if not endpoint:
        raise BadRequestError("Endpoint is required")
    removed = await uow.subscriptions_w.delete_by_endpoint(principal.user_id, endpoint)
    await uow.commit()
    return removed


async def get_preferences(principal: Principal, uow: UnitOfWork) -> NotificationPreferences:
    prefs = await uow.notification_prefs.get(principal.user_id)
    if prefs is None:
        prefs = await uow.notification_prefs.create(
            NotificationPreferences(
                user_id=principal.user_id,
                updated_at=datetime.now(timezone.utc),
            )
        )
        await uow.commit()
    return prefs


async def update_preferences(
    principal: Principal,
    changes: dict[str, bool],
    uow: UnitOfWork,
) -> NotificationPreferences:
    await get_preferences(principal, uow)
    fields: dict[str, Any] = {k: v for k, v in changes.items() if k in PREFERENCE_FIELDS}
    fields["updated_at"] = datetime.now(timezone.utc)
    prefs = await uow.notification_prefs.update(principal.user_id, fields)
    await uow.commit()
    return prefs


async def deliver_push(
    recipient_id: int,
    notification: PushNotification,
    uow: UnitOfWork,
    sender: PushSender,
) -> PushResult:
    """Send ``notification`` to every subscription of the recipient.

    Subscriptions the push service reports as gone are deleted. Nothing is
    committed here; the outbox worker commits once per batch.
    """
    subscriptions = await uow.subscriptions.list_for_user(recipient_id)
    if not subscriptions:
        return PushResult(success=False, reason="No subscriptions found")

    sent = 0
    removed = 0
    for subscription in subscriptions:
        try:
            await sender.send(subscription, notification)
            sent += 1
        except SubscriptionGoneError:
            logger.info("Removing expired push subscription %s", subscription.id)
            await uow.subscriptions_w.delete(subscription.id)
            removed += 1
        except PushDeliveryError as exc:
            logger.warning("Push to subscription %s failed: %s", subscription.id, exc)

    return PushResult(success=sent > 0, sent=sent, removed=removed)

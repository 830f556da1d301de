"""Outbox worker: publishes realtime events on Redis Pub/Sub and sends Web Push."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import redis.asyncio as aioredis

from clarity_service.application.dto.notification import (
    PUSH_SEND,
    REALTIME_EVENT,
    PushNotification,
)
from clarity_service.application.ports.bus import EventPublisher
from clarity_service.application.ports.push import PushSender
from clarity_service.application.repositories.outbox import OutboxRecord
from clarity_service.application.uow import UnitOfWork
from clarity_service.config import settings
from clarity_service.infrastructure.bus.redis_pubsub import RedisPubSubPublisher
from clarity_service.infrastructure.db.uow import uow_scope
from clarity_service.infrastructure.push.webpush_sender import WebPushSender
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)

BASE_DELAY_SECONDS = 5
MAX_DELAY_SECONDS = 300


def calc_backoff(attempts: int, now: datetime | None = None) -> datetime:
    delay = min(BASE_DELAY_SECONDS * (2 ** attempts), MAX_DELAY_SECONDS)
    return (now or datetime.now(timezone.utc)) + timedelta(seconds=delay)


async def run_outbox_worker() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    publisher = RedisPubSubPublisher(redis, settings.REDIS_PUBSUB_CHANNEL)
    push_sender: PushSender | None = None
    if settings.push_enabled:
        push_sender = WebPushSender(settings.VAPID_PRIVATE_KEY, settings.VAPID_SUBJECT)
    else:
        logger.warning("VAPID keys not configured, push notifications are disabled")

    logger.info(
        "Outbox worker started (poll=%.1fs, batch=%d, max_attempts=%d)",
        settings.OUTBOX_POLL_INTERVAL,
        settings.OUTBOX_BATCH_SIZE,
        settings.OUTBOX_MAX_ATTEMPTS,
    )

    try:
        while True:
            try:
                async with uow_scope() as uow:
                    await process_batch(uow, publisher, push_sender)
            except Exception:
                logger.exception("Outbox worker loop error")
            await asyncio.sleep(settings.OUTBOX_POLL_INTERVAL)
    finally:
        await redis.aclose()


async def _handle(
    record: OutboxRecord,
    uow: UnitOfWork,
    publisher: EventPublisher,
    push_sender: PushSender | None,
) -> None:
    if record.event_type == REALTIME_EVENT:
        await publisher.publish(record.event_type, record.payload)
    elif record.event_type == PUSH_SEND:
        if push_sender is None:
            return
        result = await notification_service.deliver_push(
            int(record.payload["recipient_id"]),
            PushNotification.from_dict(record.payload["notification"]),
            uow,
            push_sender,
        )
        if not result.success:
            logger.info(
                "Push for user %s not delivered: %s",
                record.payload["recipient_id"],
                result.reason or "all subscriptions failed",
            )
    else:
        logger.warning("Unknown outbox event type %s (record %d)", record.event_type, record.id)


async def process_batch(
    uow: UnitOfWork,
    publisher: EventPublisher,
    push_sender: PushSender | None,
    *,
    batch_size: int | None = None,
    max_attempts: int | None = None,
) -> int:
    """Handle one batch of due outbox records; return how many were sent."""
    batch_size = batch_size or settings.OUTBOX_BATCH_SIZE
    max_attempts = max_attempts or settings.OUTBOX_MAX_ATTEMPTS

    batch = await uow.outbox.fetch_pending(batch_size)
    if not batch:
        return 0

    sent_ids: list[int] = []
    dead_ids: list[int] = []
    for record in batch:
        if record.attempts >= max_attempts:
            logger.warning("Outbox record %d exceeded max attempts, marking dead", record.id)
            dead_ids.append(record.id)
            continue
        try:
            await _handle(record, uow, publisher, push_sender)
            sent_ids.append(record.id)
        except Exception as exc:
            logger.exception("Failed to process outbox record %d", record.id)
            await uow.outbox.mark_failed(record.id, calc_backoff(record.attempts), str(exc))

    await uow.outbox.mark_sent(sent_ids)
    await uow.outbox.mark_dead(dead_ids)
    await uow.commit()
    if sent_ids:
        logger.info("Processed %d outbox records", len(sent_ids))
    return len(sent_ids)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_outbox_worker())


if __name__ == "__main__":
    main()

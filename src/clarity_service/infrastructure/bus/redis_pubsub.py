"""Redis Pub/Sub: publisher used by the outbox worker, subscriber run by every API process."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError

from clarity_service.infrastructure.bus.serializer import deserialize_event, serialize_event

logger = logging.getLogger(__name__)

RESUBSCRIBE_DELAY_SECONDS = 2.0


class RedisPubSubPublisher:
    """Implements application.ports.bus.EventPublisher on a single channel."""

    def __init__(self, redis: aioredis.Redis, channel: str) -> None:
        self._redis = redis
        self._channel = channel

    async def publish(self, event_type: str, payload: dict[str, Any]) -> None:
        receivers = await self._redis.publish(self._channel, serialize_event(event_type, payload))
        logger.debug("Published %s to %s (%d receivers)", event_type, self._channel, receivers)


OnEventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


class RedisPubSubSubscriber:
    """Background task that listens to a Redis channel and dispatches events.

    A lost Redis connection is re-established after ``RESUBSCRIBE_DELAY_SECONDS``.
    Events published while disconnected are not replayed.
    """

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str,
        callback: OnEventCallback,
    ) -> None:
        self._redis = redis
        self._channel = channel
        self._callback = callback
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._run(), name="redis-pubsub-subscriber")
        logger.info("Redis Pub/Sub subscriber started on channel=%s", self._channel)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Redis Pub/Sub subscriber stopped")

    async def _run(self) -> None:
        while True:
            try:
                await self._listen()
            except RedisConnectionError:
                logger.warning(
                    "Redis Pub/Sub connection lost, resubscribing in %.0fs",
                    RESUBSCRIBE_DELAY_SECONDS,
                )
                await asyncio.sleep(RESUBSCRIBE_DELAY_SECONDS)

    async def _listen(self) -> None:
        pubsub = self._redis.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(self._channel)
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                await self._dispatch(message["data"])
        finally:
            await pubsub.unsubscribe(self._channel)
            await pubsub.aclose()

    async def _dispatch(self, raw: str | bytes) -> None:
        try:
            event_type, data = deserialize_event(raw)
        except ValueError:
            logger.warning("Dropping malformed pubsub message: %.200r", raw)
            return
        try:
            await self._callback(event_type, data)
        except Exception:
            logger.exception("Error handling pubsub event %s", event_type)

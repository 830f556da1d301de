from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from clarity_service.application.dto.conflict import ThreadStatusChange
from clarity_service.application.dto.insights import ConflictDescription, Transformation
from clarity_service.application.dto.notification import PushNotification
from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import BadRequestError, ValidationError
from clarity_service.application.policies.permissions import (
    assert_partner,
    assert_thread_participant,
)
from clarity_service.application.ports.ai import EngineSelector
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread
from clarity_service.domain.value_objects.enums import (
    ConflictMessageType,
    ConflictStatus,
    NotificationTopic,
    RealtimeEvent,
)
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)


def _thread_event(thread: ConflictThread, **extra: Any) -> dict[str, Any]:
    return {
        "threadId": str(thread.id),
        "topic": thread.topic,
        "status": thread.status,
        **extra,
    }


async def list_threads(principal: Principal, uow: UnitOfWork) -> list[ConflictThread]:
    return await uow.threads.list_for_user(principal.user_id)


async def get_thread(thread_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> ConflictThread:
    thread = await uow.threads.get_by_id(thread_id)
    return assert_thread_participant(principal, thread)


async def create_thread(
    principal: Principal,
    topic: str,
    partner_id: int,
    initial_message: str | None,
    uow: UnitOfWork,
) -> ConflictThread:
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    assert_partner(principal, partnership, partner_id)

    now = datetime.now(timezone.utc)
    thread = await uow.threads_w.create(
        ConflictThread(
            id=uuid.uuid4(),
            user_id=principal.user_id,
            partner_id=partner_id,
            topic=topic,
            status=ConflictStatus.ACTIVE,
            created_at=now,
            last_activity_at=now,
        )
    )
    if initial_message:
        await uow.threads_w.add_message(
            ConflictMessage(
                id=uuid.uuid4(),
                thread_id=thread.id,
                user_id=principal.user_id,
                content=initial_message,
                message_type=ConflictMessageType.USER,
                created_at=now,
            )
        )

    await notification_service.notify_user(
        partner_id,
        RealtimeEvent.CONFLICT_CREATED,
        _thread_event(thread, createdBy=principal.user_id),
        uow,
        topic=NotificationTopic.NEW_CONFLICTS,
        push=PushNotification(
            title="New conflict thread",
            body=f"Your partner wants to talk about: {topic}",
            url=f"/conflict/{thread.id}",
            tag=f"conflict-{thread.id}",
            require_interaction=True,
        ),
    )
    await uow.commit()
    logger.info("Conflict thread %s created by user %d", thread.id, principal.user_id)
    return thread


async def list_thread_messages(
    thread_id: uuid.UUID, principal: Principal, uow: UnitOfWork,
) -> list[ConflictMessage]:
    await get_thread(thread_id, principal, uow)
    return await uow.threads.list_messages(thread_id)


async def add_thread_message(
    thread_id: uuid.UUID,
    principal: Principal,
    content: str,
    emotional_tone: str | None,
    uow: UnitOfWork,
) -> ConflictMessage:
    thread = await get_thread(thread_id, principal, uow)
    if thread.status != ConflictStatus.ACTIVE:
        raise BadRequestError("Conflict thread is no longer active")

    message = await uow.threads_w.add_message(
        ConflictMessage(
            id=uuid.uuid4(),
            thread_id=thread.id,
            user_id=principal.user_id,
            content=content,
            message_type=ConflictMessageType.USER,
            created_at=datetime.now(timezone.utc),
            emotional_tone=emotional_tone,
        )
    )
    await notification_service.notify_user(
        thread.other_participant(principal.user_id),
        RealtimeEvent.CONFLICT_UPDATE,
        _thread_event(thread, messageId=str(message.id), content=content),
        uow,
        topic=NotificationTopic.CONFLICT_UPDATES,
        push=PushNotification(
            title="New message in conflict thread",
            body=content[:120],
            url=f"/conflict/{thread.id}",
            tag=f"conflict-{thread.id}",
        ),
    )
    await uow.commit()
    return message


async def update_status(
    thread_id: uuid.UUID,
    principal: Principal,
    change: ThreadStatusChange,
    uow: UnitOfWork,
) -> ConflictThread:
    """Move a thread to resolved or abandoned, or reopen it."""
    thread = await get_thread(thread_id, principal, uow)
    try:
        status = ConflictStatus(change.status)
    except ValueError as exc:
        raise ValidationError(f"Unknown status: {change.status}") from exc

    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = {"status": status.value, "last_activity_at": now}
    if status == ConflictStatus.RESOLVED:
        if not change.summary:
            raise ValidationError("A resolution summary is required to resolve a thread")
        fields["resolved_at"] = now
        fields["resolution_summary"] = change.summary
        fields["resolution_insights"] = change.insights
    else:
        fields["resolved_at"] = None
        fields["resolution_summary"] = None
        fields["resolution_insights"] = None
    if change.needs_extra_help is not None:
        fields["needs_extra_help"] = change.needs_extra_help
    if change.stuck_reason is not None:
        fields["stuck_reason"] = change.stuck_reason

    updated = await uow.threads_w.update(thread.id, fields)
    await notification_service.notify_user(
        thread.other_participant(principal.user_id),
        RealtimeEvent.CONFLICT_UPDATE,
        _thread_event(updated),
        uow,
        topic=NotificationTopic.CONFLICT_UPDATES,
        push=PushNotification(
            title="Conflict thread updated",
            body=f"\"{thread.topic}\" is now {status.value}",
            url=f"/conflict/{thread.id}",
            tag=f"conflict-{thread.id}",
        ),
    )
    await uow.commit()
    return updated


async def transform_conflict(
    principal: Principal,
    description: ConflictDescription,
    partner_id: int,
    engines: EngineSelector,
    uow: UnitOfWork,
) -> Transformation:
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    assert_partner(principal, partnership, partner_id)
    prefs = await uow.user_prefs.get(principal.user_id)
    engine = engines.for_model(prefs.preferred_ai_model if prefs else None)
    return await engine.transform_conflict(description)

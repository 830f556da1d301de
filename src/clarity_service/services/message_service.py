from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from clarity_service.application.dto.insights import Transformation
from clarity_service.application.dto.message import TransformRequest
from clarity_service.application.dto.notification import PushNotification
from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import ForbiddenError
from clarity_service.application.policies.permissions import (
    assert_message_access,
    assert_partner,
    require_partnership,
)
from clarity_service.application.ports.ai import EngineSelector
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.message import Message, Response
from clarity_service.domain.value_objects.enums import NotificationTopic, RealtimeEvent
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)


def _message_event(message: Message) -> dict[str, Any]:
    return {
        "messageId": str(message.id),
        "senderId": message.user_id,
        "emotion": message.emotion,
        "transformedMessage": message.transformed_message,
        "createdAt": message.created_at.isoformat(),
    }


def _response_event(response: Response) -> dict[str, Any]:
    return {
        "id": str(response.id),
        "messageId": str(response.message_id),
        "userId": response.user_id,
        "content": response.content,
        "aiSummary": response.ai_summary,
        "createdAt": response.created_at.isoformat(),
    }


async def transform_message(
    principal: Principal,
    request: TransformRequest,
    engines: EngineSelector,
    uow: UnitOfWork,
) -> tuple[Transformation, Message | None]:
    """Rewrite a raw message with the caller's preferred AI model.

    The message is stored when ``save_to_history`` or ``share_with_partner``
    is set; a shared message also notifies the partner.
    """
    partner_id: int | None = None
    if request.share_with_partner:
        partnership = require_partnership(
            await uow.partnerships.get_active_for_user(principal.user_id)
        )
        partner_id = partnership.partner_of(principal.user_id)
        if request.partner_id is not None and request.partner_id != partner_id:
            raise ForbiddenError("User is not your partner")

    prefs = await uow.user_prefs.get(principal.user_id)
    engine = engines.for_model(prefs.preferred_ai_model if prefs else None)
    result = await engine.transform_message(request.emotion, request.raw_message, request.context)

    if not (request.save_to_history or request.share_with_partner):
        return result, None

    message = await uow.messages_w.create(
        Message(
            id=uuid.uuid4(),
            user_id=principal.user_id,
            emotion=request.emotion,
            raw_message=request.raw_message,
            transformed_message=result.transformed_message,
            communication_elements=list(result.communication_elements),
            delivery_tips=list(result.delivery_tips),
            created_at=datetime.now(timezone.utc),
            context=request.context,
            is_shared=partner_id is not None,
            partner_id=partner_id,
        )
    )

    if partner_id is not None:
        await _announce_shared_message(message, partner_id, uow)

    await uow.commit()
    return result, message


async def _announce_shared_message(message: Message, partner_id: int, uow: UnitOfWork) -> None:
    await notification_service.notify_user(
        partner_id,
        RealtimeEvent.NEW_SHARED_MESSAGE,
        _message_event(message),
        uow,
        topic=NotificationTopic.DIRECT_MESSAGES,
        push=PushNotification(
            title="New message from your partner",
            body=message.transformed_message[:120],
            url="/partner-dashboard",
            tag=f"message-{message.id}",
        ),
    )


async def list_messages(principal: Principal, uow: UnitOfWork) -> list[Message]:
    return await uow.messages.list_for_user(principal.user_id)


async def get_message(message_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> Message:
    message = await uow.messages.get_by_id(message_id)
    return assert_message_access(principal, message)


async def list_responses(
    message_id: uuid.UUID, principal: Principal, uow: UnitOfWork,
) -> list[Response]:
    await get_message(message_id, principal, uow)
    return await uow.messages.list_responses(message_id)


async def add_response(
    message_id: uuid.UUID,
    principal: Principal,
    content: str,
    engines: EngineSelector,
    uow: UnitOfWork,
) -> Response:
    """Reply to a message; the AI adds a one-line summary of the reply."""
    message = await get_message(message_id, principal, uow)

    prefs = await uow.user_prefs.get(principal.user_id)
    engine = engines.for_model(prefs.preferred_ai_model if prefs else None)
    summary = await engine.summarize_response(message.transformed_message, content)

    response = await uow.messages_w.add_response(
        Response(
            id=uuid.uuid4(),
            message_id=message.id,
            user_id=principal.user_id,
            content=content,
            ai_summary=summary,
            created_at=datetime.now(timezone.utc),
        )
    )

    recipient_id = message.partner_id if principal.user_id == message.user_id else message.user_id
    if recipient_id is not None:
        await notification_service.notify_user(
            recipient_id,
            RealtimeEvent.NEW_RESPONSE,
            _response_event(response),
            uow,
            topic=NotificationTopic.DIRECT_MESSAGES,
            push=PushNotification(
                title="Your partner responded",
                body=content[:120],
                url="/history",
                tag=f"response-{message.id}",
            ),
        )

    await uow.commit()
    logger.info("User %d responded to message %s", principal.user_id, message.id)
    return response


async def list_shared_messages(
    partner_id: int, principal: Principal, uow: UnitOfWork,
) -> list[Message]:
    """Messages ``partner_id`` shared with the caller."""
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    assert_partner(principal, partnership, partner_id)
    return await uow.messages.list_shared(partner_id, principal.user_id)

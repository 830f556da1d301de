from __future__ import annotations

from clarity_service.domain.entities.message import Message, Response
from clarity_service.infrastructure.db.models.message import MessageModel, ResponseModel


def response_to_entity(model: ResponseModel) -> Response:
    return Response(
        id=model.id,
        message_id=model.message_id,
        user_id=model.user_id,
        content=model.content,
        ai_summary=model.ai_summary,
        created_at=model.created_at,
    )


def response_to_model(entity: Response) -> ResponseModel:
    return ResponseModel(
        id=entity.id,
        message_id=entity.message_id,
        user_id=entity.user_id,
        content=entity.content,
        ai_summary=entity.ai_summary,
        created_at=entity.created_at,
    )


def model_to_entity(model: MessageModel, *, with_responses: bool = False) -> Message:
    """Convert a row; ``with_responses`` requires the relationship to be loaded."""
    responses = tuple(response_to_entity(r) for r in model.responses) if with_responses else ()
    return Message(
        id=model.id,
        user_id=model.user_id,
        emotion=model.emotion,
        raw_message=model.raw_message,
        transformed_message=model.transformed_message,
        communication_elements=list(model.communication_elements or []),
        delivery_tips=list(model.delivery_tips or []),
        created_at=model.created_at,
        context=model.context,
        is_shared=model.is_shared,
        partner_id=model.partner_id,
        responses=responses,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        user_id=entity.user_id,
        emotion=entity.emotion,
        raw_message=entity.raw_message,
        context=entity.context,
        transformed_message=entity.transformed_message,
        communication_elements=list(entity.communication_elements),
        delivery_tips=list(entity.delivery_tips),
        is_shared=entity.is_shared,
        partner_id=entity.partner_id,
        created_at=entity.created_at,
    )

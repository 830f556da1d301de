from __future__ import annotations

from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread
from clarity_service.infrastructure.db.models.conflict_thread import (
    ConflictMessageModel,
    ConflictThreadModel,
)


def model_to_entity(model: ConflictThreadModel) -> ConflictThread:
    return ConflictThread(
        id=model.id,
        user_id=model.user_id,
        partner_id=model.partner_id,
        topic=model.topic,
        status=model.status,
        created_at=model.created_at,
        last_activity_at=model.last_activity_at,
        resolved_at=model.resolved_at,
        resolution_summary=model.resolution_summary,
        resolution_insights=model.resolution_insights,
        needs_extra_help=model.needs_extra_help,
        stuck_reason=model.stuck_reason,
    )


def entity_to_model(entity: ConflictThread) -> ConflictThreadModel:
    return ConflictThreadModel(
        id=entity.id,
        user_id=entity.user_id,
        partner_id=entity.partner_id,
        topic=entity.topic,
        status=entity.status,
        created_at=entity.created_at,
        last_activity_at=entity.last_activity_at,
        resolved_at=entity.resolved_at,
        resolution_summary=entity.resolution_summary,
        resolution_insights=entity.resolution_insights,
        needs_extra_help=entity.needs_extra_help,
        stuck_reason=entity.stuck_reason,
    )


def message_to_entity(model: ConflictMessageModel) -> ConflictMessage:
    return ConflictMessage(
        id=model.id,
        thread_id=model.thread_id,
        user_id=model.user_id,
        content=model.content,
        message_type=model.message_type,
        created_at=model.created_at,
        emotional_tone=model.emotional_tone,
    )


def message_to_model(entity: ConflictMessage) -> ConflictMessageModel:
    return ConflictMessageModel(
        id=entity.id,
        thread_id=entity.thread_id,
        user_id=entity.user_id,
        content=entity.content,
        message_type=entity.message_type,
        created_at=entity.created_at,
        emotional_tone=entity.emotional_tone,
    )

from __future__ import annotations

from clarity_service.domain.entities.journal import JournalEntry, JournalResponse
from clarity_service.infrastructure.db.models.journal import JournalEntryModel, JournalResponseModel


def response_to_entity(model: JournalResponseModel) -> JournalResponse:
    return JournalResponse(
        id=model.id,
        entry_id=model.entry_id,
        user_id=model.user_id,
        content=model.content,
        created_at=model.created_at,
    )


def response_to_model(entity: JournalResponse) -> JournalResponseModel:
    return JournalResponseModel(
        id=entity.id,
        entry_id=entity.entry_id,
        user_id=entity.user_id,
        content=entity.content,
        created_at=entity.created_at,
    )


def model_to_entity(model: JournalEntryModel) -> JournalEntry:
    return JournalEntry(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        content=model.content,
        raw_content=model.raw_content,
        created_at=model.created_at,
        updated_at=model.updated_at,
        is_private=model.is_private,
        is_shared=model.is_shared,
        partner_id=model.partner_id,
        has_partner_response=model.has_partner_response,
        ai_summary=model.ai_summary,
        ai_refined_content=model.ai_refined_content,
        emotions=list(model.emotions) if model.emotions is not None else None,
    )


def entity_to_model(entity: JournalEntry) -> JournalEntryModel:
    return JournalEntryModel(
        id=entity.id,
        user_id=entity.user_id,
        title=entity.title,
        content=entity.content,
        raw_content=entity.raw_content,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
        is_private=entity.is_private,
        is_shared=entity.is_shared,
        partner_id=entity.partner_id,
        has_partner_response=entity.has_partner_response,
        ai_summary=entity.ai_summary,
        ai_refined_content=entity.ai_refined_content,
        emotions=list(entity.emotions) if entity.emotions is not None else None,
    )

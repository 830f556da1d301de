from __future__ import annotations

from clarity_service.domain.entities.therapy_session import TherapySession
from clarity_service.infrastructure.db.models.therapy_session import TherapySessionModel


def model_to_entity(model: TherapySessionModel) -> TherapySession:
    return TherapySession(
        id=model.id,
        partnership_id=model.partnership_id,
        created_at=model.created_at,
        transcript=model.transcript,
        emotional_patterns=model.emotional_patterns,
        core_issues=model.core_issues,
        recommendations=model.recommendations,
        is_reviewed=model.is_reviewed,
        reviewed_at=model.reviewed_at,
        user_notes=model.user_notes,
    )


def entity_to_model(entity: TherapySession) -> TherapySessionModel:
    return TherapySessionModel(
        id=entity.id,
        partnership_id=entity.partnership_id,
        created_at=entity.created_at,
        transcript=entity.transcript,
        emotional_patterns=entity.emotional_patterns,
        core_issues=entity.core_issues,
        recommendations=entity.recommendations,
        is_reviewed=entity.is_reviewed,
        reviewed_at=entity.reviewed_at,
        user_notes=entity.user_notes,
    )

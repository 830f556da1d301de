from __future__ import annotations

from clarity_service.domain.entities.preferences import NotificationPreferences, UserPreferences
from clarity_service.infrastructure.db.models.preferences import (
    NotificationPreferencesModel,
    UserPreferencesModel,
)


def notification_to_entity(model: NotificationPreferencesModel) -> NotificationPreferences:
    return NotificationPreferences(
        user_id=model.user_id,
        updated_at=model.updated_at,
        new_conflicts=model.new_conflicts,
        partner_emotions=model.partner_emotions,
        direct_messages=model.direct_messages,
        conflict_updates=model.conflict_updates,
        weekly_check_ins=model.weekly_check_ins,
        appreciations=model.appreciations,
        exercise_notifications=model.exercise_notifications,
    )


def notification_to_model(entity: NotificationPreferences) -> NotificationPreferencesModel:
    return NotificationPreferencesModel(
        user_id=entity.user_id,
        updated_at=entity.updated_at,
        new_conflicts=entity.new_conflicts,
        partner_emotions=entity.partner_emotions,
        direct_messages=entity.direct_messages,
        conflict_updates=entity.conflict_updates,
        weekly_check_ins=entity.weekly_check_ins,
        appreciations=entity.appreciations,
        exercise_notifications=entity.exercise_notifications,
    )


def user_to_entity(model: UserPreferencesModel) -> UserPreferences:
    return UserPreferences(
        user_id=model.user_id,
        love_language=model.love_language,
        conflict_style=model.conflict_style,
        communication_style=model.communication_style,
        repair_style=model.repair_style,
        preferred_ai_model=model.preferred_ai_model,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clarity_service.domain.value_objects.enums import AiModel, NotificationTopic


@dataclass(frozen=True, slots=True)
class NotificationPreferences:
    user_id: int
    updated_at: datetime
    new_conflicts: bool = True
    partner_emotions: bool = True
    direct_messages: bool = True
    conflict_updates: bool = True
    weekly_check_ins: bool = True
    appreciations: bool = True
    exercise_notifications: bool = True

    def allows(self, topic: NotificationTopic) -> bool:
        return bool(getattr(self, topic.value))


@dataclass(frozen=True, slots=True)
class UserPreferences:
    user_id: int
    love_language: str
    conflict_style: str
    communication_style: str
    repair_style: str
    created_at: datetime
    updated_at: datetime
    preferred_ai_model: str = AiModel.OPENAI

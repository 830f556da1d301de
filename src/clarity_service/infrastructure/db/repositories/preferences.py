from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.exceptions import NotFoundError
from clarity_service.domain.entities.preferences import NotificationPreferences, UserPreferences
from clarity_service.infrastructure.db.mappers import preferences as mapper
from clarity_service.infrastructure.db.models.preferences import (
    NotificationPreferencesModel,
    UserPreferencesModel,
)


class NotificationPreferencesRepoImpl:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> NotificationPreferences | None:
        model = await self._session.get(NotificationPreferencesModel, user_id)
        return mapper.notification_to_entity(model) if model else None

    async def create(self, preferences: NotificationPreferences) -> NotificationPreferences:
        model = mapper.notification_to_model(preferences)
        self._session.add(model)
        await self._session.flush()
        return mapper.notification_to_entity(model)

    async def update(self, user_id: int, fields: dict[str, Any]) -> NotificationPreferences:
        stmt = (
            update(NotificationPreferencesModel)
            .where(NotificationPreferencesModel.user_id == user_id)
            .values(**fields)
            .returning(NotificationPreferencesModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Notification preferences not found")
        return mapper.notification_to_entity(model)


class UserPreferencesRepoImpl:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> UserPreferences | None:
        stmt = select(UserPreferencesModel).where(UserPreferencesModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.user_to_entity(model) if model else None

    async def upsert(self, preferences: UserPreferences) -> UserPreferences:
        values = {
            "user_id": preferences.user_id,
            "love_language": preferences.love_language,
            "conflict_style": preferences.conflict_style,
            "communication_style": preferences.communication_style,
            "repair_style": preferences.repair_style,
            "preferred_ai_model": preferences.preferred_ai_model,
            "created_at": preferences.created_at,
            "updated_at": preferences.updated_at,
        }
        stmt = (
            pg_insert(UserPreferencesModel)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[UserPreferencesModel.user_id],
                set_={k: v for k, v in values.items() if k not in ("user_id", "created_at")},
            )
            .returning(UserPreferencesModel)
        )
        result = await self._session.execute(stmt)
        return mapper.user_to_entity(result.scalar_one())

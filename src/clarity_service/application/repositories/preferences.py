from __future__ import annotations

from typing import Any, Protocol

from clarity_service.domain.entities.preferences import NotificationPreferences, UserPreferences


class NotificationPreferencesRepo(Protocol):
    async def get(self, user_id: int) -> NotificationPreferences | None: ...

    async def create(self, preferences: NotificationPreferences) -> NotificationPreferences: ...

    async def update(self, user_id: int, fields: dict[str, Any]) -> NotificationPreferences: ...


class UserPreferencesRepo(Protocol):
    async def get(self, user_id: int) -> UserPreferences | None: ...

    async def upsert(self, preferences: UserPreferences) -> UserPreferences: ...

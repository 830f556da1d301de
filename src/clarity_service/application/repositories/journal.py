from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from clarity_service.domain.entities.journal import JournalEntry, JournalResponse


class JournalReader(Protocol):
    async def get_by_id(self, entry_id: UUID) -> JournalEntry | None: ...

    async def list_for_user(
        self,
        user_id: int,
        *,
        is_private: bool | None = None,
        since: datetime | None = None,
        limit: int = 50,
    ) -> list[JournalEntry]:
        """The user's own entries, newest first."""
        ...

    async def list_shared_between(self, user_ids: tuple[int, int], limit: int = 50) -> list[JournalEntry]:
        """Shared entries written by either user, newest first."""
        ...

    async def list_responses(self, entry_id: UUID) -> list[JournalResponse]: ...


class JournalWriter(Protocol):
    async def create(self, entry: JournalEntry) -> JournalEntry: ...

    async def update(self, entry_id: UUID, fields: dict[str, Any]) -> JournalEntry: ...

    async def delete(self, entry_id: UUID) -> None: ...

    async def add_response(self, response: JournalResponse) -> JournalResponse:
        """Store the response and flag the entry as answered."""
        ...

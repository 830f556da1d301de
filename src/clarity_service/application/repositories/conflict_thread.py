from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread


class ConflictThreadReader(Protocol):
    async def get_by_id(self, thread_id: UUID) -> ConflictThread | None: ...

    async def list_for_user(self, user_id: int) -> list[ConflictThread]:
        """Threads the user created or was invited to, most recent activity first."""
        ...

    async def list_messages(self, thread_id: UUID) -> list[ConflictMessage]: ...

    async def list_between(self, user_ids: tuple[int, int], since: datetime) -> list[ConflictThread]: ...


class ConflictThreadWriter(Protocol):
    async def create(self, thread: ConflictThread) -> ConflictThread: ...

    async def add_message(self, message: ConflictMessage) -> ConflictMessage:
        """Append a message and bump the thread's last activity."""
        ...

    async def update(self, thread_id: UUID, fields: dict[str, Any]) -> ConflictThread: ...

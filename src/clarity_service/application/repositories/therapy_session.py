from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from clarity_service.domain.entities.therapy_session import TherapySession


class TherapySessionReader(Protocol):
    async def get_by_id(self, session_id: UUID) -> TherapySession | None: ...

    async def list_for_partnership(self, partnership_id: UUID) -> list[TherapySession]: ...


class TherapySessionWriter(Protocol):
    async def create(self, session: TherapySession) -> TherapySession: ...

    async def update(self, session_id: UUID, fields: dict[str, Any]) -> TherapySession: ...

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from clarity_service.domain.entities.invite import Invite


class InviteRepo(Protocol):
    async def get_by_token(self, token: str) -> Invite | None: ...

    async def create(self, invite: Invite) -> Invite: ...

    async def mark_accepted(self, invite_id: UUID, accepted_at: datetime) -> None: ...

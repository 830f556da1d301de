from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.domain.entities.invite import Invite
from clarity_service.infrastructure.db.mappers import invite as mapper
from clarity_service.infrastructure.db.models.invite import InviteModel


class InviteRepoImpl:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_token(self, token: str) -> Invite | None:
        result = await self._session.execute(select(InviteModel).where(InviteModel.token == token))
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def create(self, invite: Invite) -> Invite:
        model = mapper.entity_to_model(invite)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def mark_accepted(self, invite_id: UUID, accepted_at: datetime) -> None:
        await self._session.execute(
            update(InviteModel).where(InviteModel.id == invite_id).values(accepted_at=accepted_at)
        )

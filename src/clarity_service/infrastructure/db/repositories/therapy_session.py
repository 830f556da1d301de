from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.exceptions import NotFoundError
from clarity_service.domain.entities.therapy_session import TherapySession
from clarity_service.infrastructure.db.mappers import therapy_session as mapper
from clarity_service.infrastructure.db.models.therapy_session import TherapySessionModel


class TherapySessionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, session_id: UUID) -> TherapySession | None:
        model = await self._session.get(TherapySessionModel, session_id)
        return mapper.model_to_entity(model) if model else None

    async def list_for_partnership(self, partnership_id: UUID) -> list[TherapySession]:
        stmt = (
            select(TherapySessionModel)
            .where(TherapySessionModel.partnership_id == partnership_id)
            .order_by(TherapySessionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class TherapySessionWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: TherapySession) -> TherapySession:
        model = mapper.entity_to_model(session)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, session_id: UUID, fields: dict[str, Any]) -> TherapySession:
        stmt = (
            update(TherapySessionModel)
            .where(TherapySessionModel.id == session_id)
            .values(**fields)
            .returning(TherapySessionModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Therapy session not found")
        return mapper.model_to_entity(model)

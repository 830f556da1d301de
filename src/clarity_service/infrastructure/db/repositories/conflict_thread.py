from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.exceptions import NotFoundError
from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread
from clarity_service.infrastructure.db.mappers import conflict_thread as mapper
from clarity_service.infrastructure.db.models.conflict_thread import (
    ConflictMessageModel,
    ConflictThreadModel,
)


class ConflictThreadReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, thread_id: UUID) -> ConflictThread | None:
        model = await self._session.get(ConflictThreadModel, thread_id)
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int) -> list[ConflictThread]:
        stmt = (
            select(ConflictThreadModel)
            .where(
                or_(
                    ConflictThreadModel.user_id == user_id,
                    ConflictThreadModel.partner_id == user_id,
                )
            )
            .order_by(ConflictThreadModel.last_activity_at.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_messages(self, thread_id: UUID) -> list[ConflictMessage]:
        stmt = (
            select(ConflictMessageModel)
            .where(ConflictMessageModel.thread_id == thread_id)
            .order_by(ConflictMessageModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.message_to_entity(m) for m in result.scalars().all()]

    async def list_between(self, user_ids: tuple[int, int], since: datetime) -> list[ConflictThread]:
        stmt = (
            select(ConflictThreadModel)
            .where(
                and_(
                    ConflictThreadModel.user_id.in_(user_ids),
                    ConflictThreadModel.partner_id.in_(user_ids),
                ),
                ConflictThreadModel.last_activity_at >= since,
            )
            .order_by(ConflictThreadModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ConflictThreadWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, thread: ConflictThread) -> ConflictThread:
        model = mapper.entity_to_model(thread)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def add_message(self, message: ConflictMessage) -> ConflictMessage:
        model = mapper.message_to_model(message)
        self._session.add(model)
        await self._session.execute(
            update(ConflictThreadModel)
            .where(ConflictThreadModel.id == message.thread_id)
            .values(last_activity_at=message.created_at)
        )
        await self._session.flush()
        return mapper.message_to_entity(model)

    async def update(self, thread_id: UUID, fields: dict[str, Any]) -> ConflictThread:
        stmt = (
            update(ConflictThreadModel)
            .where(ConflictThreadModel.id == thread_id)
            .values(**fields)
            .returning(ConflictThreadModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Conflict thread not found")
        return mapper.model_to_entity(model)

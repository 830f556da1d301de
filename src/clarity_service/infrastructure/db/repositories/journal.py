from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.exceptions import NotFoundError
from clarity_service.domain.entities.journal import JournalEntry, JournalResponse
from clarity_service.infrastructure.db.mappers import journal as mapper
from clarity_service.infrastructure.db.models.journal import JournalEntryModel, JournalResponseModel


class JournalReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, entry_id: UUID) -> JournalEntry | None:
        model = await self._session.get(JournalEntryModel, entry_id)
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(
        self,
        user_id: int,
        *,
        is_private: bool | None = None,
        since: datetime | None = None,
        limit: int = 50,
    ) -> list[JournalEntry]:
        stmt = select(JournalEntryModel).where(JournalEntryModel.user_id == user_id)
        if is_private is not None:
            stmt = stmt.where(JournalEntryModel.is_private.is_(is_private))
        if since is not None:
            stmt = stmt.where(JournalEntryModel.created_at >= since)
        stmt = stmt.order_by(JournalEntryModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_shared_between(self, user_ids: tuple[int, int], limit: int = 50) -> list[JournalEntry]:
        stmt = (
            select(JournalEntryModel)
            .where(
                JournalEntryModel.user_id.in_(user_ids),
                JournalEntryModel.is_shared.is_(True),
            )
            .order_by(JournalEntryModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_responses(self, entry_id: UUID) -> list[JournalResponse]:
        stmt = (
            select(JournalResponseModel)
            .where(JournalResponseModel.entry_id == entry_id)
            .order_by(JournalResponseModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.response_to_entity(r) for r in result.scalars().all()]


class JournalWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, entry: JournalEntry) -> JournalEntry:
        model = mapper.entity_to_model(entry)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, entry_id: UUID, fields: dict[str, Any]) -> JournalEntry:
        stmt = (
            update(JournalEntryModel)
            .where(JournalEntryModel.id == entry_id)
            .values(**fields)
            .returning(JournalEntryModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Journal entry not found")
        return mapper.model_to_entity(model)

    async def delete(self, entry_id: UUID) -> None:
        result = await self._session.execute(
            delete(JournalEntryModel).where(JournalEntryModel.id == entry_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("Journal entry not found")

    async def add_response(self, response: JournalResponse) -> JournalResponse:
        model = mapper.response_to_model(response)
        self._session.add(model)
        await self._session.execute(
            update(JournalEntryModel)
            .where(JournalEntryModel.id == response.entry_id)
            .values(has_partner_response=True)
        )
        await self._session.flush()
        return mapper.response_to_entity(model)

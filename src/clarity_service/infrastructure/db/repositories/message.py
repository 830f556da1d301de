from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from clarity_service.domain.entities.message import Message, Response
from clarity_service.infrastructure.db.mappers import message as mapper
from clarity_service.infrastructure.db.models.message import MessageModel, ResponseModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> Message | None:
        stmt = (
            select(MessageModel)
            .options(selectinload(MessageModel.responses))
            .where(MessageModel.id == message_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model, with_responses=True) if model else None

    async def list_for_user(self, user_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .options(selectinload(MessageModel.responses))
            .where(MessageModel.user_id == user_id)
            .order_by(MessageModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m, with_responses=True) for m in result.scalars().all()]

    async def list_shared(self, author_id: int, partner_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .options(selectinload(MessageModel.responses))
            .where(
                MessageModel.user_id == author_id,
                MessageModel.partner_id == partner_id,
                MessageModel.is_shared.is_(True),
            )
            .order_by(MessageModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m, with_responses=True) for m in result.scalars().all()]

    async def list_responses(self, message_id: UUID) -> list[Response]:
        stmt = (
            select(ResponseModel)
            .where(ResponseModel.message_id == message_id)
            .order_by(ResponseModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.response_to_entity(r) for r in result.scalars().all()]

    async def list_shared_between(self, user_ids: tuple[int, int], since: datetime) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.user_id.in_(user_ids),
                MessageModel.partner_id.in_(user_ids),
                MessageModel.is_shared.is_(True),
                MessageModel.created_at >= since,
            )
            .order_by(MessageModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return message

    async def add_response(self, response: Response) -> Response:
        model = mapper.response_to_model(response)
        self._session.add(model)
        await self._session.flush()
        return mapper.response_to_entity(model)

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.exceptions import NotFoundError
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.value_objects.enums import PartnershipStatus
from clarity_service.infrastructure.db.mappers import partnership as mapper
from clarity_service.infrastructure.db.models.partnership import PartnershipModel


class PartnershipReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, partnership_id: UUID) -> Partnership | None:
        model = await self._session.get(PartnershipModel, partnership_id)
        return mapper.model_to_entity(model) if model else None

    async def get_active_for_user(self, user_id: int) -> Partnership | None:
        stmt = (
            select(PartnershipModel)
            .where(
                or_(PartnershipModel.user1_id == user_id, PartnershipModel.user2_id == user_id),
                PartnershipModel.status == PartnershipStatus.ACTIVE,
            )
            .order_by(PartnershipModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def get_between(self, user_a: int, user_b: int) -> Partnership | None:
        stmt = (
            select(PartnershipModel)
            .where(
                or_(
                    and_(PartnershipModel.user1_id == user_a, PartnershipModel.user2_id == user_b),
                    and_(PartnershipModel.user1_id == user_b, PartnershipModel.user2_id == user_a),
                )
            )
            .order_by(PartnershipModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None


class PartnershipWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, partnership: Partnership) -> Partnership:
        model = mapper.entity_to_model(partnership)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, partnership_id: UUID, fields: dict[str, Any]) -> Partnership:
        stmt = (
            update(PartnershipModel)
            .where(PartnershipModel.id == partnership_id)
            .values(**fields)
            .returning(PartnershipModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundError("Partnership not found")
        return mapper.model_to_entity(model)

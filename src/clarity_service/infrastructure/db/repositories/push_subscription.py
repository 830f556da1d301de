from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.domain.entities.push_subscription import PushSubscription
from clarity_service.infrastructure.db.mappers import push_subscription as mapper
from clarity_service.infrastructure.db.models.push_subscription import PushSubscriptionModel


class PushSubscriptionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_endpoint(self, endpoint: str) -> PushSubscription | None:
        stmt = select(PushSubscriptionModel).where(PushSubscriptionModel.endpoint == endpoint)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: int) -> list[PushSubscription]:
        stmt = (
            select(PushSubscriptionModel)
            .where(PushSubscriptionModel.user_id == user_id)
            .order_by(PushSubscriptionModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class PushSubscriptionWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, subscription: PushSubscription) -> PushSubscription:
        model = mapper.entity_to_model(subscription)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def delete(self, subscription_id: UUID) -> None:
        await self._session.execute(
            delete(PushSubscriptionModel).where(PushSubscriptionModel.id == subscription_id)
        )

    async def delete_by_endpoint(self, user_id: int, endpoint: str) -> bool:
        result = await self._session.execute(
            delete(PushSubscriptionModel).where(
                PushSubscriptionModel.user_id == user_id,
                PushSubscriptionModel.endpoint == endpoint,
            )
        )
        return bool(result.rowcount)

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.application.repositories.outbox import OutboxRecord
from clarity_service.infrastructure.db.models.outbox import OutboxMessageModel

MAX_ERROR_LENGTH = 500


class OutboxWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, event_type: str, payload: dict[str, Any]) -> None:
        self._session.add(OutboxMessageModel(event_type=event_type, payload=payload))
        await self._session.flush()

    async def fetch_pending(self, batch_size: int) -> list[OutboxRecord]:
        """Lock a batch of due records and mark them as processing."""
        now = datetime.now(timezone.utc)
        stmt = (
            select(OutboxMessageModel)
            .where(
                OutboxMessageModel.status.in_(["pending", "failed"]),
                OutboxMessageModel.next_retry_at.is_(None)
                | (OutboxMessageModel.next_retry_at <= now),
            )
            .order_by(OutboxMessageModel.created_at.asc())
            .limit(batch_size)
            .with_for_update(skip_locked=True)
        )
        result = await self._session.execute(stmt)
        rows = result.scalars().all()
        if rows:
            await self._session.execute(
                update(OutboxMessageModel)
                .where(OutboxMessageModel.id.in_([r.id for r in rows]))
                .values(status="processing")
            )
            await self._session.flush()

        return [
            OutboxRecord(id=r.id, event_type=r.event_type, payload=r.payload, attempts=r.attempts)
            for r in rows
        ]

    async def mark_sent(self, ids: list[int]) -> None:
        if not ids:
            return
        await self._session.execute(
            update(OutboxMessageModel)
            .where(OutboxMessageModel.id.in_(ids))
            .values(status="sent", last_error=None)
        )

    async def mark_failed(self, record_id: int, next_retry_at: datetime, error: str) -> None:
        await self._session.execute(
            update(OutboxMessageModel)
            .where(OutboxMessageModel.id == record_id)
            .values(
                status="failed",
                attempts=OutboxMessageModel.attempts + 1,
                next_retry_at=next_retry_at,
                last_error=error[:MAX_ERROR_LENGTH],
            )
        )

    async def mark_dead(self, ids: list[int]) -> None:
        """Park records that ran out of attempts; ``fetch_pending`` never returns them."""
        if not ids:
            return
        await self._session.execute(
            update(OutboxMessageModel)
            .where(OutboxMessageModel.id.in_(ids))
            .values(status="dead", next_retry_at=None)
        )

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from clarity_service.infrastructure.db.repositories.conflict_thread import (
    ConflictThreadReaderRepo,
    ConflictThreadWriterRepo,
)
from clarity_service.infrastructure.db.repositories.invite import InviteRepoImpl
from clarity_service.infrastructure.db.repositories.journal import JournalReaderRepo, JournalWriterRepo
from clarity_service.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from clarity_service.infrastructure.db.repositories.outbox import OutboxWriterRepo
from clarity_service.infrastructure.db.repositories.partnership import (
    PartnershipReaderRepo,
    PartnershipWriterRepo,
)
from clarity_service.infrastructure.db.repositories.preferences import (
    NotificationPreferencesRepoImpl,
    UserPreferencesRepoImpl,
)
from clarity_service.infrastructure.db.repositories.push_subscription import (
    PushSubscriptionReaderRepo,
    PushSubscriptionWriterRepo,
)
from clarity_service.infrastructure.db.repositories.therapy_session import (
    TherapySessionReaderRepo,
    TherapySessionWriterRepo,
)
from clarity_service.infrastructure.db.repositories.user import UserReaderRepo
from clarity_service.infrastructure.db.session import session_scope


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserReaderRepo(session)
        self.partnerships = PartnershipReaderRepo(session)
        self.partnerships_w = PartnershipWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.threads = ConflictThreadReaderRepo(session)
        self.threads_w = ConflictThreadWriterRepo(session)
        self.subscriptions = PushSubscriptionReaderRepo(session)
        self.subscriptions_w = PushSubscriptionWriterRepo(session)
        self.notification_prefs = NotificationPreferencesRepoImpl(session)
        self.user_prefs = UserPreferencesRepoImpl(session)
        self.therapy_sessions = TherapySessionReaderRepo(session)
        self.therapy_sessions_w = TherapySessionWriterRepo(session)
        self.journal = JournalReaderRepo(session)
        self.journal_w = JournalWriterRepo(session)
        self.invites = InviteRepoImpl(session)
        self.outbox = OutboxWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()


@asynccontextmanager
async def uow_scope() -> AsyncIterator[SqlAlchemyUoW]:
    """Session-scoped UoW for code running outside a request (WS handlers, workers)."""
    async with session_scope() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow

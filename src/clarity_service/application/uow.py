from __future__ import annotations

from typing import Protocol

from clarity_service.application.repositories.conflict_thread import (
    ConflictThreadReader,
    ConflictThreadWriter,
)
from clarity_service.application.repositories.invite import InviteRepo
from clarity_service.application.repositories.journal import JournalReader, JournalWriter
from clarity_service.application.repositories.message import MessageReader, MessageWriter
from clarity_service.application.repositories.outbox import OutboxWriter
from clarity_service.application.repositories.partnership import (
    PartnershipReader,
    PartnershipWriter,
)
from clarity_service.application.repositories.preferences import (
    NotificationPreferencesRepo,
    UserPreferencesRepo,
)
from clarity_service.application.repositories.push_subscription import (
    PushSubscriptionReader,
    PushSubscriptionWriter,
)
from clarity_service.application.repositories.therapy_session import (
    TherapySessionReader,
    TherapySessionWriter,
)
from clarity_service.application.repositories.user import UserReader


class UnitOfWork(Protocol):
    users: UserReader
    partnerships: PartnershipReader
    partnerships_w: PartnershipWriter
    messages: MessageReader
    messages_w: MessageWriter
    threads: ConflictThreadReader
    threads_w: ConflictThreadWriter
    subscriptions: PushSubscriptionReader
    subscriptions_w: PushSubscriptionWriter
    notification_prefs: NotificationPreferencesRepo
    user_prefs: UserPreferencesRepo
    therapy_sessions: TherapySessionReader
    therapy_sessions_w: TherapySessionWriter
    journal: JournalReader
    journal_w: JournalWriter
    invites: InviteRepo
    outbox: OutboxWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...

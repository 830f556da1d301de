"""Shared test fixtures."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import pytest

from clarity_service.application.dto.insights import (
    ConflictDescription,
    LoveLanguageAnalysis,
    TherapyDraft,
    TherapyInput,
    Transformation,
)
from clarity_service.application.dto.principal import Principal
from clarity_service.application.repositories.outbox import OutboxRecord
from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread
from clarity_service.domain.entities.invite import Invite
from clarity_service.domain.entities.journal import JournalEntry, JournalResponse
from clarity_service.domain.entities.message import Message, Response
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.preferences import NotificationPreferences, UserPreferences
from clarity_service.domain.entities.push_subscription import PushSubscription
from clarity_service.domain.entities.therapy_session import TherapySession
from clarity_service.domain.entities.user import User
from clarity_service.domain.value_objects.enums import ConflictStatus, PartnershipStatus

ME = 42
PARTNER = 43
STRANGER = 99


@pytest.fixture
def me() -> Principal:
    return Principal(user_id=ME)


@pytest.fixture
def partner() -> Principal:
    return Principal(user_id=PARTNER)


@pytest.fixture
def stranger() -> Principal:
    return Principal(user_id=STRANGER)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_user(user_id: int, name: str = "Alex") -> User:
    return User(
        id=user_id,
        username=name.lower(),
        display_name=f"{name} Doe",
        first_name=name,
        email=f"{name.lower()}@example.com",
    )


def make_partnership(
    user1_id: int = ME, user2_id: int = PARTNER, status: str = PartnershipStatus.ACTIVE,
) -> Partnership:
    return Partnership(
        id=uuid.uuid4(),
        user1_id=user1_id,
        user2_id=user2_id,
        status=status,
        created_at=_now(),
    )


def make_message(
    *,
    user_id: int = ME,
    partner_id: int | None = PARTNER,
    is_shared: bool = True,
    transformed: str = "I feel unheard when plans change last minute.",
) -> Message:
    return Message(
        id=uuid.uuid4(),
        user_id=user_id,
        emotion="frustrated",
        raw_message="You always cancel on me.",
        transformed_message=transformed,
        communication_elements=["Expressing feelings"],
        delivery_tips=["Pick a calm moment"],
        created_at=_now(),
        is_shared=is_shared,
        partner_id=partner_id if is_shared else None,
    )


def make_thread(
    *,
    user_id: int = ME,
    partner_id: int = PARTNER,
    status: str = ConflictStatus.ACTIVE,
    topic: str = "Chores",
) -> ConflictThread:
    now = _now()
    return ConflictThread(
        id=uuid.uuid4(),
        user_id=user_id,
        partner_id=partner_id,
        topic=topic,
        status=status,
        created_at=now,
        last_activity_at=now,
    )


def make_subscription(user_id: int = ME, endpoint: str = "https://push.example.com/abc") -> PushSubscription:
    return PushSubscription(
        id=uuid.uuid4(),
        user_id=user_id,
        endpoint=endpoint,
        p256dh="p256dh-key",
        auth="auth-secret",
        created_at=_now(),
    )


def make_user_prefs(user_id: int = ME, model: str = "openai") -> UserPreferences:
    now = _now()
    return UserPreferences(
        user_id=user_id,
        love_language="quality_time",
        conflict_style="talk_calmly",
        communication_style="supportive",
        repair_style="talking",
        created_at=now,
        updated_at=now,
        preferred_ai_model=model,
    )


def make_journal_entry(
    *,
    user_id: int = ME,
    is_shared: bool = False,
    partner_id: int | None = None,
    title: str = "Rough week",
    created_at: datetime | None = None,
) -> JournalEntry:
    now = created_at or _now()
    return JournalEntry(
        id=uuid.uuid4(),
        user_id=user_id,
        title=title,
        content="Work has been draining and I snapped at dinner.",
        raw_content="Work has been draining and I snapped at dinner.",
        created_at=now,
        updated_at=now,
        is_private=not is_shared,
        is_shared=is_shared,
        partner_id=partner_id,
    )


def make_invite(from_user_id: int = ME, token: str = "invite-token") -> Invite:
    return Invite(
        id=uuid.uuid4(),
        from_user_id=from_user_id,
        partner_email="sam@example.com",
        token=token,
        invited_at=_now(),
    )


def make_session(partnership_id: UUID) -> TherapySession:
    return TherapySession(
        id=uuid.uuid4(),
        partnership_id=partnership_id,
        created_at=_now(),
        transcript="Therapist: Welcome.",
        emotional_patterns="Withdrawal under stress",
        core_issues="Unequal chores",
        recommendations="Weekly check-in",
    )


@dataclass
class FakeUserReader:
    _users: dict[int, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        for u in self._users.values():
            if u.email.lower() == email.strip().lower():
                return u
        return None


@dataclass
class FakePartnershipRepo:
    _items: dict[UUID, Partnership] = field(default_factory=dict)

    async def get_by_id(self, partnership_id: UUID) -> Partnership | None:
        return self._items.get(partnership_id)

    async def get_active_for_user(self, user_id: int) -> Partnership | None:
        for p in self._items.values():
            if p.status == PartnershipStatus.ACTIVE and p.includes(user_id):
                return p
        return None

    async def get_between(self, user_a: int, user_b: int) -> Partnership | None:
        matches = [p for p in self._items.values() if p.includes(user_a) and p.includes(user_b)]
        return max(matches, key=lambda p: p.created_at, default=None)

    async def create(self, partnership: Partnership) -> Partnership:
        self._items[partnership.id] = partnership
        return partnership

    async def update(self, partnership_id: UUID, fields: dict[str, Any]) -> Partnership:
        updated = dataclasses.replace(self._items[partnership_id], **fields)
        self._items[partnership_id] = updated
        return updated


@dataclass
class FakeMessageRepo:
    _messages: dict[UUID, Message] = field(default_factory=dict)
    _responses: list[Response] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        return self._messages.get(message_id)

    async def list_for_user(self, user_id: int) -> list[Message]:
        return [m for m in self._messages.values() if m.user_id == user_id]

    async def list_shared(self, author_id: int, partner_id: int) -> list[Message]:
        return [
            m for m in self._messages.values()
            if m.user_id == author_id and m.is_shared and m.partner_id == partner_id
        ]

    async def list_responses(self, message_id: UUID) -> list[Response]:
        return [r for r in self._responses if r.message_id == message_id]

    async def list_shared_between(self, user_ids: tuple[int, int], since: datetime) -> list[Message]:
        return [
            m for m in self._messages.values()
            if m.is_shared and m.user_id in user_ids and m.created_at >= since
        ]

    async def create(self, message: Message) -> Message:
        self._messages[message.id] = message
        return message

    async def add_response(self, response: Response) -> Response:
        self._responses.append(response)
        return response


@dataclass
class FakeThreadRepo:
    _threads: dict[UUID, ConflictThread] = field(default_factory=dict)
    _messages: list[ConflictMessage] = field(default_factory=list)

    async def get_by_id(self, thread_id: UUID) -> ConflictThread | None:
        return self._threads.get(thread_id)

    async def list_for_user(self, user_id: int) -> list[ConflictThread]:
        return [t for t in self._threads.values() if t.includes(user_id)]

    async def list_messages(self, thread_id: UUID) -> list[ConflictMessage]:
        return [m for m in self._messages if m.thread_id == thread_id]

    async def list_between(self, user_ids: tuple[int, int], since: datetime) -> list[ConflictThread]:
        return [
            t for t in self._threads.values()
            if {t.user_id, t.partner_id} == set(user_ids) and t.last_activity_at >= since
        ]

    async def create(self, thread: ConflictThread) -> ConflictThread:
        self._threads[thread.id] = thread
        return thread

    async def add_message(self, message: ConflictMessage) -> ConflictMessage:
        self._messages.append(message)
        thread = self._threads.get(message.thread_id)
        if thread is not None:
            self._threads[thread.id] = dataclasses.replace(thread, last_activity_at=message.created_at)
        return message

    async def update(self, thread_id: UUID, fields: dict[str, Any]) -> ConflictThread:
        updated = dataclasses.replace(self._threads[thread_id], **fields)
        self._threads[thread_id] = updated
        return updated


@dataclass
class FakeJournalRepo:
    _entries: dict[UUID, JournalEntry] = field(default_factory=dict)
    _responses: list[JournalResponse] = field(default_factory=list)

    async def get_by_id(self, entry_id: UUID) -> JournalEntry | None:
        return self._entries.get(entry_id)

    async def list_for_user(
        self,
        user_id: int,
        *,
        is_private: bool | None = None,
        since: datetime | None = None,
        limit: int = 50,
    ) -> list[JournalEntry]:
        entries = [
            e for e in self._entries.values()
            if e.user_id == user_id
            and (is_private is None or e.is_private == is_private)
            and (since is None or e.created_at >= since)
        ]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)[:limit]

    async def list_shared_between(self, user_ids: tuple[int, int], limit: int = 50) -> list[JournalEntry]:
        entries = [e for e in self._entries.values() if e.is_shared and e.user_id in user_ids]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)[:limit]

    async def list_responses(self, entry_id: UUID) -> list[JournalResponse]:
        return [r for r in self._responses if r.entry_id == entry_id]

    async def create(self, entry: JournalEntry) -> JournalEntry:
        self._entries[entry.id] = entry
        return entry

    async def update(self, entry_id: UUID, fields: dict[str, Any]) -> JournalEntry:
        updated = dataclasses.replace(self._entries[entry_id], **fields)
        self._entries[entry_id] = updated
        return updated

    async def delete(self, entry_id: UUID) -> None:
        del self._entries[entry_id]

    async def add_response(self, response: JournalResponse) -> JournalResponse:
        self._responses.append(response)
        await self.update(response.entry_id, {"has_partner_response": True})
        return response


@dataclass
class FakeInviteRepo:
    _invites: dict[UUID, Invite] = field(default_factory=dict)

    async def get_by_token(self, token: str) -> Invite | None:
        for i in self._invites.values():
            if i.token == token:
                return i
        return None

    async def create(self, invite: Invite) -> Invite:
        self._invites[invite.id] = invite
        return invite

    async def mark_accepted(self, invite_id: UUID, accepted_at: datetime) -> None:
        self._invites[invite_id] = dataclasses.replace(self._invites[invite_id], accepted_at=accepted_at)


@dataclass
class FakeSubscriptionRepo:
    _subs: dict[UUID, PushSubscription] = field(default_factory=dict)

    async def get_by_endpoint(self, endpoint: str) -> PushSubscription | None:
        for s in self._subs.values():
            if s.endpoint == endpoint:
                return s
        return None

    async def list_for_user(self, user_id: int) -> list[PushSubscription]:
        return [s for s in self._subs.values() if s.user_id == user_id]

    async def add(self, subscription: PushSubscription) -> PushSubscription:
        self._subs[subscription.id] = subscription
        return subscription

    async def delete(self, subscription_id: UUID) -> None:
        self._subs.pop(subscription_id, None)

    async def delete_by_endpoint(self, user_id: int, endpoint: str) -> bool:
        for s in list(self._subs.values()):
            if s.user_id == user_id and s.endpoint == endpoint:
                del self._subs[s.id]
                return True
        return False


@dataclass
class FakeNotificationPrefsRepo:
    _prefs: dict[int, NotificationPreferences] = field(default_factory=dict)

    async def get(self, user_id: int) -> NotificationPreferences | None:
        return self._prefs.get(user_id)

    async def create(self, preferences: NotificationPreferences) -> NotificationPreferences:
        self._prefs[preferences.user_id] = preferences
        return preferences

    async def update(self, user_id: int, fields: dict[str, Any]) -> NotificationPreferences:
        updated = dataclasses.replace(self._prefs[user_id], **fields)
        self._prefs[user_id] = updated
        return updated


@dataclass
class FakeUserPrefsRepo:
    _prefs: dict[int, UserPreferences] = field(default_factory=dict)

    async def get(self, user_id: int) -> UserPreferences | None:
        return self._prefs.get(user_id)

    async def upsert(self, preferences: UserPreferences) -> UserPreferences:
        self._prefs[preferences.user_id] = preferences
        return preferences


@dataclass
class FakeTherapySessionRepo:
    _sessions: dict[UUID, TherapySession] = field(default_factory=dict)

    async def get_by_id(self, session_id: UUID) -> TherapySession | None:
        return self._sessions.get(session_id)

    async def list_for_partnership(self, partnership_id: UUID) -> list[TherapySession]:
        return [s for s in self._sessions.values() if s.partnership_id == partnership_id]

    async def create(self, session: TherapySession) -> TherapySession:
        self._sessions[session.id] = session
        return session

    async def update(self, session_id: UUID, fields: dict[str, Any]) -> TherapySession:
        updated = dataclasses.replace(self._sessions[session_id], **fields)
        self._sessions[session_id] = updated
        return updated


@dataclass
class FakeOutboxWriter:
    _records: list[dict[str, Any]] = field(default_factory=list)
    pending: list[OutboxRecord] = field(default_factory=list)
    sent: list[int] = field(default_factory=list)
    failed: list[tuple[int, datetime, str]] = field(default_factory=list)
    dead: list[int] = field(default_factory=list)

    async def add(self, event_type: str, payload: dict[str, Any]) -> None:
        self._records.append({"event_type": event_type, "payload": payload})

    async def fetch_pending(self, batch_size: int) -> list[OutboxRecord]:
        return self.pending[:batch_size]

    async def mark_sent(self, ids: list[int]) -> None:
        self.sent.extend(ids)

    async def mark_failed(self, record_id: int, next_retry_at: datetime, error: str) -> None:
        self.failed.append((record_id, next_retry_at, error))

    async def mark_dead(self, ids: list[int]) -> None:
        self.dead.extend(ids)

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [r["payload"] for r in self._records if r["event_type"] == event_type]


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests; readers and writers share one store."""

    users: FakeUserReader = field(default_factory=FakeUserReader)
    partnerships: FakePartnershipRepo = field(default_factory=FakePartnershipRepo)
    messages: FakeMessageRepo = field(default_factory=FakeMessageRepo)
    threads: FakeThreadRepo = field(default_factory=FakeThreadRepo)
    subscriptions: FakeSubscriptionRepo = field(default_factory=FakeSubscriptionRepo)
    notification_prefs: FakeNotificationPrefsRepo = field(default_factory=FakeNotificationPrefsRepo)
    user_prefs: FakeUserPrefsRepo = field(default_factory=FakeUserPrefsRepo)
    therapy_sessions: FakeTherapySessionRepo = field(default_factory=FakeTherapySessionRepo)
    journal: FakeJournalRepo = field(default_factory=FakeJournalRepo)
    invites: FakeInviteRepo = field(default_factory=FakeInviteRepo)
    outbox: FakeOutboxWriter = field(default_factory=FakeOutboxWriter)
    _committed: bool = False
    commits: int = 0

    @property
    def partnerships_w(self) -> FakePartnershipRepo:
        return self.partnerships

    @property
    def messages_w(self) -> FakeMessageRepo:
        return self.messages

    @property
    def threads_w(self) -> FakeThreadRepo:
        return self.threads

    @property
    def subscriptions_w(self) -> FakeSubscriptionRepo:
        return self.subscriptions

    @property
    def therapy_sessions_w(self) -> FakeTherapySessionRepo:
        return self.therapy_sessions

    @property
    def journal_w(self) -> FakeJournalRepo:
        return self.journal

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True
        self.commits += 1

    async def rollback(self) -> None:
        pass


@dataclass
class FakeEngine:
    """Deterministic insight engine recording what it was asked."""

    name: str = "openai"
    calls: list[str] = field(default_factory=list)
    last_history: TherapyInput | None = None

    async def transform_message(self, emotion: str, raw_message: str, context: str | None) -> Transformation:
        self.calls.append("transform_message")
        return Transformation(
            transformed_message=f"[{self.name}] I feel {emotion}.",
            communication_elements=["I-statement"],
            delivery_tips=["Breathe first"],
        )

    async def transform_conflict(self, description: ConflictDescription) -> Transformation:
        self.calls.append("transform_conflict")
        return Transformation(transformed_message=f"About {description.topic}: {description.request}")

    async def summarize_response(self, original: str, response: str) -> str | None:
        self.calls.append("summarize_response")
        return "Partner agrees to talk."

    async def analyze_love_language(self, love_language: str) -> LoveLanguageAnalysis:
        self.calls.append("analyze_love_language")
        return LoveLanguageAnalysis(love_language=love_language, description="Undivided attention")

    async def generate_therapy_session(self, history: TherapyInput) -> TherapyDraft:
        self.calls.append("generate_therapy_session")
        self.last_history = history
        return TherapyDraft(
            transcript="Therapist: Let's begin.",
            emotional_patterns="Pursue-withdraw",
            core_issues="Chores",
            recommendations="Schedule a weekly check-in",
        )


@dataclass
class FakeEngines:
    openai: FakeEngine = field(default_factory=lambda: FakeEngine("openai"))
    anthropic: FakeEngine = field(default_factory=lambda: FakeEngine("anthropic"))
    requested: list[str | None] = field(default_factory=list)

    def for_model(self, model: str | None) -> FakeEngine:
        self.requested.append(model)
        return self.anthropic if model == "anthropic" else self.openai


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def partnered_uow() -> FakeUoW:
    uow = FakeUoW()
    p = make_partnership()
    uow.partnerships._items[p.id] = p
    uow.users._users[ME] = make_user(ME, "Alex")
    uow.users._users[PARTNER] = make_user(PARTNER, "Sam")
    return uow


@pytest.fixture
def engines() -> FakeEngines:
    return FakeEngines()

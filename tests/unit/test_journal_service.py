from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from clarity_service.application.dto.journal import JournalDraft
from clarity_service.application.dto.notification import PUSH_SEND, REALTIME_EVENT
from clarity_service.application.exceptions import BadRequestError, ForbiddenError, NotFoundError
from clarity_service.domain.entities.preferences import NotificationPreferences
from clarity_service.domain.value_objects.enums import RealtimeEvent
from clarity_service.services import journal_service
from tests.conftest import ME, PARTNER, make_journal_entry


def _store(uow, *entries):
    for entry in entries:
        uow.journal._entries[entry.id] = entry
    return entries[0] if len(entries) == 1 else entries


@pytest.mark.asyncio
async def test_create_private_entry_defaults_raw_content(me, partnered_uow):
    entry = await journal_service.create_entry(me, JournalDraft(title="Today", content="Long day"), partnered_uow)

    assert entry.raw_content == "Long day"
    assert entry.is_private is True
    assert entry.partner_id is None
    assert partnered_uow.outbox._records == []
    assert partnered_uow._committed is True


@pytest.mark.asyncio
async def test_create_shared_entry_notifies_partner(me, partnered_uow):
    draft = JournalDraft(title="Us", content="I miss our walks", is_private=False, is_shared=True)

    entry = await journal_service.create_entry(me, draft, partnered_uow)

    assert entry.partner_id == PARTNER
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["recipient_id"] == PARTNER
    assert event["type"] == RealtimeEvent.JOURNAL_ENTRY
    assert event["data"]["title"] == "Us"
    push = partnered_uow.outbox.of_type(PUSH_SEND)[0]["notification"]
    assert push["title"] == "New Journal Entry"
    assert push["body"] == "Alex shared a journal entry with you: Us"


@pytest.mark.asyncio
async def test_shared_entry_without_partnership_stays_unaddressed(me, uow):
    entry = await journal_service.create_entry(
        me, JournalDraft(title="Us", content="Hello", is_shared=True), uow,
    )

    assert entry.is_shared is True
    assert entry.partner_id is None
    assert uow.outbox._records == []


@pytest.mark.asyncio
async def test_muted_check_ins_skip_push(me, partnered_uow):
    partnered_uow.notification_prefs._prefs[PARTNER] = NotificationPreferences(
        user_id=PARTNER, updated_at=datetime.now(timezone.utc), weekly_check_ins=False,
    )

    await journal_service.create_entry(
        me, JournalDraft(title="Us", content="Hello", is_shared=True), partnered_uow,
    )

    assert len(partnered_uow.outbox.of_type(REALTIME_EVENT)) == 1
    assert partnered_uow.outbox.of_type(PUSH_SEND) == []


@pytest.mark.asyncio
async def test_list_filters_privacy(me, uow):
    private = make_journal_entry()
    shared = make_journal_entry(is_shared=True, partner_id=PARTNER)
    _store(uow, private, shared, make_journal_entry(user_id=PARTNER))

    assert {e.id for e in await journal_service.list_entries(me, uow)} == {private.id, shared.id}
    assert [e.id for e in await journal_service.list_entries(me, uow, is_private=True)] == [private.id]
    assert len(await journal_service.list_entries(me, uow, limit=1)) == 1


@pytest.mark.asyncio
async def test_recent_covers_last_week(me, uow):
    old = make_journal_entry(created_at=datetime.now(timezone.utc) - timedelta(days=10))
    fresh = [make_journal_entry(title=f"Day {i}") for i in range(6)]
    _store(uow, old, *fresh)

    recent = await journal_service.recent_entries(me, uow)

    assert recent.count == journal_service.RECENT_LIMIT
    assert old.id not in {e.id for e in recent.entries}


@pytest.mark.asyncio
async def test_partner_activity_counts_unanswered_entries(me, partnered_uow):
    now = datetime.now(timezone.utc)
    older = make_journal_entry(user_id=PARTNER, is_shared=True, partner_id=ME, created_at=now - timedelta(hours=2))
    newer = make_journal_entry(user_id=PARTNER, is_shared=True, partner_id=ME, created_at=now)
    answered = make_journal_entry(user_id=PARTNER, is_shared=True, partner_id=ME)
    _store(partnered_uow, older, newer, answered, make_journal_entry(is_shared=True, partner_id=PARTNER))
    await partnered_uow.journal.update(answered.id, {"has_partner_response": True})

    activity = await journal_service.partner_activity(me, partnered_uow)

    assert activity.unread_count == 2
    assert activity.latest_entry.id == newer.id


@pytest.mark.asyncio
async def test_partner_activity_without_partnership(me, uow):
    activity = await journal_service.partner_activity(me, uow)

    assert activity.unread_count == 0
    assert activity.latest_entry is None


@pytest.mark.asyncio
async def test_shared_requires_partnership(me, uow):
    with pytest.raises(NotFoundError, match="No active partnership found"):
        await journal_service.list_shared(me, uow)


@pytest.mark.asyncio
async def test_get_entry_access(me, partner, stranger, uow):
    private = make_journal_entry()
    shared = make_journal_entry(is_shared=True, partner_id=PARTNER)
    _store(uow, private, shared)

    assert await journal_service.get_entry(shared.id, partner, uow) == shared
    with pytest.raises(ForbiddenError):
        await journal_service.get_entry(private.id, partner, uow)
    with pytest.raises(ForbiddenError):
        await journal_service.get_entry(shared.id, stranger, uow)


@pytest.mark.asyncio
async def test_update_newly_shared_notifies_once(me, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry())
    draft = JournalDraft(title="Rough week", content="Edited", is_private=False, is_shared=True)

    updated = await journal_service.update_entry(entry.id, me, draft, partnered_uow)
    await journal_service.update_entry(entry.id, me, draft, partnered_uow)

    assert updated.partner_id == PARTNER
    assert updated.content == "Edited"
    events = partnered_uow.outbox.of_type(REALTIME_EVENT)
    assert [e["type"] for e in events] == [RealtimeEvent.JOURNAL_ENTRY_UPDATE]


@pytest.mark.asyncio
async def test_only_owner_updates_or_deletes(partner, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry(is_shared=True, partner_id=PARTNER))

    with pytest.raises(ForbiddenError):
        await journal_service.update_entry(entry.id, partner, JournalDraft(title="x", content="y"), partnered_uow)
    with pytest.raises(ForbiddenError):
        await journal_service.delete_entry(entry.id, partner, partnered_uow)


@pytest.mark.asyncio
async def test_delete_shared_entry_notifies_partner(me, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry(is_shared=True, partner_id=PARTNER))

    await journal_service.delete_entry(entry.id, me, partnered_uow)

    assert partnered_uow.journal._entries == {}
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event == {
        "recipient_id": PARTNER,
        "type": RealtimeEvent.JOURNAL_ENTRY_DELETED,
        "data": {"entryId": str(entry.id), "userId": ME},
    }


@pytest.mark.asyncio
async def test_partner_responds_to_shared_entry(partner, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry(is_shared=True, partner_id=PARTNER))

    response = await journal_service.respond(entry.id, partner, "Let's walk tonight", partnered_uow)

    assert response.user_id == PARTNER
    assert (await partnered_uow.journal.get_by_id(entry.id)).has_partner_response is True
    assert await journal_service.list_responses(entry.id, partner, partnered_uow) == [response]
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["recipient_id"] == ME
    assert event["type"] == RealtimeEvent.JOURNAL_RESPONSE
    assert event["data"]["responderName"] == "Sam"
    push = partnered_uow.outbox.of_type(PUSH_SEND)[0]["notification"]
    assert push["title"] == "New Journal Response"


@pytest.mark.asyncio
async def test_respond_rules(me, partner, uow, partnered_uow):
    shared = make_journal_entry(is_shared=True, partner_id=PARTNER)
    private = make_journal_entry()
    _store(partnered_uow, shared, private)
    uow.journal._entries[shared.id] = shared

    with pytest.raises(BadRequestError, match="not in a partnership"):
        await journal_service.respond(shared.id, partner, "hi", uow)
    with pytest.raises(BadRequestError, match="your own"):
        await journal_service.respond(shared.id, me, "hi", partnered_uow)
    with pytest.raises(BadRequestError, match="not shared"):
        await journal_service.respond(private.id, partner, "hi", partnered_uow)


@pytest.mark.asyncio
async def test_mark_resolved_notifies_partner(me, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry(is_shared=True, partner_id=PARTNER))

    updated = await journal_service.mark_resolved(entry.id, me, partnered_uow)

    assert updated.has_partner_response is True
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["type"] == RealtimeEvent.JOURNAL_ENTRY_RESOLVED
    push = partnered_uow.outbox.of_type(PUSH_SEND)[0]["notification"]
    assert push["body"] == "Alex has marked a journal entry as resolved"
    assert push["url"] == f"/journal?entry={entry.id}"


@pytest.mark.asyncio
async def test_mark_resolved_owner_only(partner, partnered_uow):
    entry = _store(partnered_uow, make_journal_entry(is_shared=True, partner_id=PARTNER))

    with pytest.raises(ForbiddenError):
        await journal_service.mark_resolved(entry.id, partner, partnered_uow)

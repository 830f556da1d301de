"""Journal entries, partner sharing and partner replies."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from clarity_service.application.dto.journal import JournalDraft, PartnerActivity, RecentEntries
from clarity_service.application.dto.notification import PushNotification
from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import BadRequestError, ForbiddenError, NotFoundError
from clarity_service.application.policies.permissions import (
    assert_journal_access,
    assert_journal_owner,
)
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.journal import JournalEntry, JournalResponse
from clarity_service.domain.value_objects.enums import NotificationTopic, RealtimeEvent
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)

RECENT_DAYS = 7
RECENT_LIMIT = 5
DEFAULT_LIST_LIMIT = 50


async def _first_name(user_id: int, uow: UnitOfWork) -> str:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        return "Your partner"
    return user.first_name or user.display_name


async def _active_partner_id(principal: Principal, uow: UnitOfWork) -> int | None:
    partnership = await uow.partnerships.get_active_for_user(principal.user_id)
    return partnership.partner_of(principal.user_id) if partnership else None


def _entry_event(entry: JournalEntry, **extra: Any) -> dict[str, Any]:
    return {"entryId": str(entry.id), "userId": entry.user_id, "title": entry.title, **extra}


async def _notify_shared(
    entry: JournalEntry, principal: Principal, event: RealtimeEvent, title: str, uow: UnitOfWork,
) -> None:
    name = await _first_name(principal.user_id, uow)
    await notification_service.notify_user(
        entry.partner_id,
        event,
        _entry_event(entry),
        uow,
        topic=NotificationTopic.WEEKLY_CHECK_INS,
        push=PushNotification(
            title=title,
            body=f"{name} shared a journal entry with you: {entry.title}",
            url=f"/journal/{entry.id}",
            tag=f"journal-{entry.id}",
        ),
    )


async def create_entry(principal: Principal, draft: JournalDraft, uow: UnitOfWork) -> JournalEntry:
    """Store a new entry; a shared entry is addressed to the active partner."""
    partner_id = await _active_partner_id(principal, uow) if draft.is_shared else None
    now = datetime.now(timezone.utc)
    entry = await uow.journal_w.create(
        JournalEntry(
            id=uuid.uuid4(),
            user_id=principal.user_id,
            title=draft.title,
            content=draft.content,
            raw_content=draft.raw_content or draft.content,
            created_at=now,
            updated_at=now,
            is_private=draft.is_private,
            is_shared=draft.is_shared,
            partner_id=partner_id,
            ai_summary=draft.ai_summary,
            ai_refined_content=draft.ai_refined_content,
            emotions=draft.emotions,
        )
    )
    if entry.is_shared and entry.partner_id is not None:
        await _notify_shared(entry, principal, RealtimeEvent.JOURNAL_ENTRY, "New Journal Entry", uow)
    await uow.commit()
    logger.info("User %d created journal entry %s (shared=%s)", principal.user_id, entry.id, entry.is_shared)
    return entry


async def list_entries(
    principal: Principal,
    uow: UnitOfWork,
    *,
    is_private: bool | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[JournalEntry]:
    return await uow.journal.list_for_user(principal.user_id, is_private=is_private, limit=limit)


async def recent_entries(principal: Principal, uow: UnitOfWork) -> RecentEntries:
    since = datetime.now(timezone.utc) - timedelta(days=RECENT_DAYS)
    entries = await uow.journal.list_for_user(principal.user_id, since=since, limit=RECENT_LIMIT)
    return RecentEntries(count=len(entries), entries=entries)


async def partner_activity(principal: Principal, uow: UnitOfWork) -> PartnerActivity:
    partner_id = await _active_partner_id(principal, uow)
    if partner_id is None:
        return PartnerActivity(unread_count=0)
    shared = await uow.journal.list_shared_between((principal.user_id, partner_id))
    unread = [e for e in shared if e.user_id == partner_id and not e.has_partner_response]
    return PartnerActivity(unread_count=len(unread), latest_entry=unread[0] if unread else None)


async def list_shared(principal: Principal, uow: UnitOfWork) -> list[JournalEntry]:
    partner_id = await _active_partner_id(principal, uow)
    if partner_id is None:
        raise NotFoundError("No active partnership found")
    return await uow.journal.list_shared_between((principal.user_id, partner_id))


async def get_entry(entry_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> JournalEntry:
    return assert_journal_access(principal, await uow.journal.get_by_id(entry_id))


async def update_entry(
    entry_id: uuid.UUID, principal: Principal, draft: JournalDraft, uow: UnitOfWork,
) -> JournalEntry:
    """Replace an entry's content; sharing it for the first time notifies the partner."""
    existing = assert_journal_owner(principal, await uow.journal.get_by_id(entry_id))
    newly_shared = draft.is_shared and not existing.is_shared
    partner_id = existing.partner_id
    if newly_shared:
        partner_id = await _active_partner_id(principal, uow) or partner_id

    updated = await uow.journal_w.update(
        existing.id,
        {
            "title": draft.title,
            "content": draft.content,
            "raw_content": draft.raw_content or draft.content,
            "is_private": draft.is_private,
            "is_shared": draft.is_shared,
            "partner_id": partner_id,
            "ai_summary": draft.ai_summary,
            "ai_refined_content": draft.ai_refined_content,
            "emotions": draft.emotions,
            "updated_at": datetime.now(timezone.utc),
        },
    )
    if newly_shared and updated.partner_id is not None:
        await _notify_shared(
            updated, principal, RealtimeEvent.JOURNAL_ENTRY_UPDATE, "Journal Entry Shared", uow,
        )
    await uow.commit()
    return updated


async def delete_entry(entry_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> None:
    entry = assert_journal_owner(principal, await uow.journal.get_by_id(entry_id))
    await uow.journal_w.delete(entry.id)
    if entry.is_shared and entry.partner_id is not None:
        await notification_service.notify_user(
            entry.partner_id,
            RealtimeEvent.JOURNAL_ENTRY_DELETED,
            {"entryId": str(entry.id), "userId": entry.user_id},
            uow,
        )
    await uow.commit()
    logger.info("User %d deleted journal entry %s", principal.user_id, entry.id)


async def list_responses(
    entry_id: uuid.UUID, principal: Principal, uow: UnitOfWork,
) -> list[JournalResponse]:
    await get_entry(entry_id, principal, uow)
    return await uow.journal.list_responses(entry_id)


async def respond(
    entry_id: uuid.UUID, principal: Principal, content: str, uow: UnitOfWork,
) -> JournalResponse:
    """Reply to an entry the partner shared; the author is notified."""
    entry = await uow.journal.get_by_id(entry_id)
    if entry is None:
        raise NotFoundError("Journal entry not found")
    if await uow.partnerships.get_active_for_user(principal.user_id) is None:
        raise BadRequestError("You are not in a partnership")
    if entry.user_id == principal.user_id:
        raise BadRequestError("You cannot respond to your own journal entry")
    if not entry.is_shared:
        raise BadRequestError("This journal entry is not shared with you")
    if entry.partner_id != principal.user_id:
        raise ForbiddenError("You do not have permission to access this journal entry")

    response = await uow.journal_w.add_response(
        JournalResponse(
            id=uuid.uuid4(),
            entry_id=entry.id,
            user_id=principal.user_id,
            content=content,
            created_at=datetime.now(timezone.utc),
        )
    )
    name = await _first_name(principal.user_id, uow)
    await notification_service.notify_user(
        entry.user_id,
        RealtimeEvent.JOURNAL_RESPONSE,
        {
            "entryId": str(entry.id),
            "journalTitle": entry.title,
            "responseId": str(response.id),
            "responderId": principal.user_id,
            "responderName": name,
        },
        uow,
        topic=NotificationTopic.APPRECIATIONS,
        push=PushNotification(
            title="New Journal Response",
            body=f"{name} responded to your journal entry: {entry.title}",
            url=f"/journal/{entry.id}",
            tag=f"journal-{entry.id}",
        ),
    )
    await uow.commit()
    return response


async def mark_resolved(entry_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> JournalEntry:
    entry = assert_journal_owner(principal, await uow.journal.get_by_id(entry_id))
    updated = await uow.journal_w.update(
        entry.id, {"has_partner_response": True, "updated_at": datetime.now(timezone.utc)},
    )
    if updated.partner_id is not None:
        name = await _first_name(principal.user_id, uow)
        await notification_service.notify_user(
            updated.partner_id,
            RealtimeEvent.JOURNAL_ENTRY_RESOLVED,
            _entry_event(updated),
            uow,
            topic=NotificationTopic.WEEKLY_CHECK_INS,
            push=PushNotification(
                title="Journal Entry Updated",
                body=f"{name} has marked a journal entry as resolved",
                url=f"/journal?entry={updated.id}",
                tag=f"journal-{updated.id}",
            ),
        )
    await uow.commit()
    return updated

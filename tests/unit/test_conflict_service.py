from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest

from clarity_service.application.dto.conflict import ThreadStatusChange
from clarity_service.application.dto.insights import ConflictDescription
from clarity_service.application.dto.notification import PUSH_SEND, REALTIME_EVENT
from clarity_service.application.exceptions import BadRequestError, ForbiddenError, ValidationError
from clarity_service.domain.value_objects.enums import ConflictStatus, RealtimeEvent
from clarity_service.services import conflict_service
from tests.conftest import ME, PARTNER, STRANGER, make_thread


@pytest.mark.asyncio
async def test_create_thread_with_initial_message(me, partnered_uow):
    thread = await conflict_service.create_thread(me, "Money", PARTNER, "Can we budget?", partnered_uow)

    assert thread.status == ConflictStatus.ACTIVE
    messages = await partnered_uow.threads.list_messages(thread.id)
    assert [m.content for m in messages] == ["Can we budget?"]
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["type"] == RealtimeEvent.CONFLICT_CREATED
    assert event["recipient_id"] == PARTNER
    assert event["data"]["createdBy"] == ME
    push = partnered_uow.outbox.of_type(PUSH_SEND)[0]
    assert push["notification"]["require_interaction"] is True
    assert partnered_uow._committed is True


@pytest.mark.asyncio
async def test_create_thread_with_non_partner(me, partnered_uow):
    with pytest.raises(ForbiddenError):
        await conflict_service.create_thread(me, "Money", STRANGER, None, partnered_uow)


@pytest.mark.asyncio
async def test_create_thread_without_partnership(me, uow):
    with pytest.raises(BadRequestError):
        await conflict_service.create_thread(me, "Money", PARTNER, None, uow)


@pytest.mark.asyncio
async def test_non_participant_cannot_read_thread(stranger, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread

    with pytest.raises(ForbiddenError):
        await conflict_service.list_thread_messages(thread.id, stranger, uow)


@pytest.mark.asyncio
async def test_add_message_notifies_other_participant(partner, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread

    message = await conflict_service.add_thread_message(thread.id, partner, "I agree", "calm", uow)

    assert message.emotional_tone == "calm"
    event = uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["recipient_id"] == ME
    assert event["type"] == RealtimeEvent.CONFLICT_UPDATE
    assert event["data"]["messageId"] == str(message.id)


@pytest.mark.asyncio
async def test_add_message_bumps_last_activity(me, uow):
    thread = make_thread()
    stale = thread.last_activity_at - timedelta(days=3)
    uow.threads._threads[thread.id] = dataclasses.replace(thread, last_activity_at=stale)

    message = await conflict_service.add_thread_message(thread.id, me, "Still thinking", None, uow)

    bumped = await uow.threads.get_by_id(thread.id)
    assert bumped.last_activity_at == message.created_at
    assert bumped.last_activity_at > stale


@pytest.mark.asyncio
async def test_add_message_to_resolved_thread(me, uow):
    thread = make_thread(status=ConflictStatus.RESOLVED)
    uow.threads._threads[thread.id] = thread

    with pytest.raises(BadRequestError):
        await conflict_service.add_thread_message(thread.id, me, "Hello?", None, uow)


@pytest.mark.asyncio
async def test_resolve_requires_summary(me, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread

    with pytest.raises(ValidationError):
        await conflict_service.update_status(thread.id, me, ThreadStatusChange(status="resolved"), uow)


@pytest.mark.asyncio
async def test_resolve_sets_resolved_at(me, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread

    updated = await conflict_service.update_status(
        thread.id, me, ThreadStatusChange(status="resolved", summary="Split chores weekly"), uow,
    )

    assert updated.status == ConflictStatus.RESOLVED
    assert updated.resolved_at is not None
    assert updated.resolution_summary == "Split chores weekly"
    assert uow.outbox.of_type(REALTIME_EVENT)[0]["data"]["status"] == "resolved"


@pytest.mark.asyncio
async def test_reopen_clears_resolution(me, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread
    await conflict_service.update_status(
        thread.id, me,
        ThreadStatusChange(status="resolved", summary="Split chores weekly", insights="Fairness matters"),
        uow,
    )

    reopened = await conflict_service.update_status(thread.id, me, ThreadStatusChange(status="active"), uow)

    assert reopened.status == ConflictStatus.ACTIVE
    assert reopened.resolved_at is None
    assert reopened.resolution_summary is None
    assert reopened.resolution_insights is None


@pytest.mark.asyncio
async def test_abandon_resolved_thread_clears_resolution(me, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread
    await conflict_service.update_status(
        thread.id, me, ThreadStatusChange(status="resolved", summary="Agreed"), uow,
    )

    abandoned = await conflict_service.update_status(thread.id, me, ThreadStatusChange(status="abandoned"), uow)

    assert abandoned.status == ConflictStatus.ABANDONED
    assert abandoned.resolved_at is None
    assert abandoned.resolution_summary is None


@pytest.mark.asyncio
async def test_unknown_status(me, uow):
    thread = make_thread()
    uow.threads._threads[thread.id] = thread

    with pytest.raises(ValidationError):
        await conflict_service.update_status(thread.id, me, ThreadStatusChange(status="paused"), uow)


@pytest.mark.asyncio
async def test_transform_conflict(me, partnered_uow, engines):
    description = ConflictDescription(
        topic="Chores", situation="Dishes pile up", feelings="tired", impact="resentment", request="alternate nights",
    )

    result = await conflict_service.transform_conflict(me, description, PARTNER, engines, partnered_uow)

    assert result.transformed_message == "About Chores: alternate nights"
    assert engines.openai.calls == ["transform_conflict"]

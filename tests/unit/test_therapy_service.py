from __future__ import annotations

import uuid

import pytest

from clarity_service.application.dto.notification import REALTIME_EVENT
from clarity_service.application.exceptions import BadRequestError, ForbiddenError, NotFoundError
from clarity_service.domain.entities.conflict_thread import ConflictMessage
from clarity_service.domain.value_objects.enums import RealtimeEvent
from clarity_service.services import therapy_service
from tests.conftest import ME, PARTNER, make_message, make_partnership, make_session, make_thread


@pytest.mark.asyncio
async def test_create_session_collects_history(me, partnered_uow, engines):
    thread = make_thread(topic="Weekends")
    partnered_uow.threads._threads[thread.id] = thread
    partnered_uow.threads._messages.append(
        ConflictMessage(
            id=uuid.uuid4(), thread_id=thread.id, user_id=ME,
            content="I want a slow Sunday", message_type="user", created_at=thread.created_at,
        )
    )
    shared = make_message()
    partnered_uow.messages._messages[shared.id] = shared

    session = await therapy_service.create_session(me, engines, partnered_uow)

    history = engines.openai.last_history
    assert history.partner_names == ("Alex", "Sam")
    assert history.conflict_topics == ["Weekends"]
    assert history.conflict_messages == [f"[Weekends] {ME}: I want a slow Sunday"]
    assert history.shared_messages == [shared.transformed_message]
    assert session.core_issues == "Chores"
    event = partnered_uow.outbox.of_type(REALTIME_EVENT)[0]
    assert event["recipient_id"] == PARTNER
    assert event["type"] == RealtimeEvent.THERAPY_SESSION


@pytest.mark.asyncio
async def test_create_session_requires_partnership(me, uow, engines):
    with pytest.raises(BadRequestError):
        await therapy_service.create_session(me, engines, uow)


@pytest.mark.asyncio
async def test_get_session_of_other_couple(me, partnered_uow):
    other = make_session(make_partnership(7, 8).id)
    partnered_uow.therapy_sessions._sessions[other.id] = other

    with pytest.raises(ForbiddenError):
        await therapy_service.get_session(other.id, me, partnered_uow)
    with pytest.raises(NotFoundError):
        await therapy_service.get_session(uuid.uuid4(), me, partnered_uow)


@pytest.mark.asyncio
async def test_review_session(partner, partnered_uow):
    partnership = await partnered_uow.partnerships.get_active_for_user(PARTNER)
    session = make_session(partnership.id)
    partnered_uow.therapy_sessions._sessions[session.id] = session

    updated = await therapy_service.update_session(session.id, partner, "Helpful", True, partnered_uow)

    assert updated.is_reviewed is True
    assert updated.reviewed_at is not None
    assert updated.user_notes == "Helpful"
    assert await therapy_service.list_sessions(partner, partnered_uow) == [updated]

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from clarity_service.application.dto.insights import TherapyInput
from clarity_service.application.dto.principal import Principal
from clarity_service.application.policies.permissions import (
    assert_session_access,
    require_partnership,
)
from clarity_service.application.ports.ai import EngineSelector
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.therapy_session import TherapySession
from clarity_service.domain.value_objects.enums import RealtimeEvent
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 14


async def _display_name(user_id: int, uow: UnitOfWork) -> str:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        return f"Partner {user_id}"
    return user.first_name or user.display_name


async def _collect_history(
    partnership: Partnership, since: datetime, uow: UnitOfWork,
) -> TherapyInput:
    pair = (partnership.user1_id, partnership.user2_id)
    threads = await uow.threads.list_between(pair, since)
    conflict_lines: list[str] = []
    for thread in threads:
        for message in await uow.threads.list_messages(thread.id):
            conflict_lines.append(f"[{thread.topic}] {message.user_id}: {message.content}")
    shared = await uow.messages.list_shared_between(pair, since)
    return TherapyInput(
        partner_names=(
            await _display_name(partnership.user1_id, uow),
            await _display_name(partnership.user2_id, uow),
        ),
        conflict_topics=[t.topic for t in threads],
        conflict_messages=conflict_lines,
        shared_messages=[m.transformed_message for m in shared],
    )


async def create_session(
    principal: Principal,
    engines: EngineSelector,
    uow: UnitOfWork,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> TherapySession:
    """Generate a therapy-session summary from the couple's recent history."""
    partnership = require_partnership(
        await uow.partnerships.get_active_for_user(principal.user_id)
    )
    now = datetime.now(timezone.utc)
    history = await _collect_history(partnership, now - timedelta(days=lookback_days), uow)

    prefs = await uow.user_prefs.get(principal.user_id)
    engine = engines.for_model(prefs.preferred_ai_model if prefs else None)
    draft = await engine.generate_therapy_session(history)

    session = await uow.therapy_sessions_w.create(
        TherapySession(
            id=uuid.uuid4(),
            partnership_id=partnership.id,
            created_at=now,
            transcript=draft.transcript,
            emotional_patterns=draft.emotional_patterns,
            core_issues=draft.core_issues,
            recommendations=draft.recommendations,
        )
    )
    await notification_service.notify_user(
        partnership.partner_of(principal.user_id),
        RealtimeEvent.THERAPY_SESSION,
        {"sessionId": str(session.id), "createdAt": session.created_at.isoformat()},
        uow,
    )
    await uow.commit()
    logger.info(
        "Therapy session %s generated for partnership %s (%d threads, %d shared messages)",
        session.id,
        partnership.id,
        len(history.conflict_topics),
        len(history.shared_messages),
    )
    return session


async def list_sessions(principal: Principal, uow: UnitOfWork) -> list[TherapySession]:
    partnership = require_partnership(
        await uow.partnerships.get_active_for_user(principal.user_id)
    )
    return await uow.therapy_sessions.list_for_partnership(partnership.id)


async def get_session(
    session_id: uuid.UUID, principal: Principal, uow: UnitOfWork,
) -> TherapySession:
    partnership = require_partnership(
        await uow.partnerships.get_active_for_user(principal.user_id)
    )
    session = await uow.therapy_sessions.get_by_id(session_id)
    return assert_session_access(session, partnership)


async def update_session(
    session_id: uuid.UUID,
    principal: Principal,
    user_notes: str | None,
    is_reviewed: bool | None,
    uow: UnitOfWork,
) -> TherapySession:
    session = await get_session(session_id, principal, uow)
    fields: dict[str, Any] = {}
    if user_notes is not None:
        fields["user_notes"] = user_notes
    if is_reviewed is not None:
        fields["is_reviewed"] = is_reviewed
        if is_reviewed:
            fields["reviewed_at"] = datetime.now(timezone.utc)
    if not fields:
        return session
    updated = await uow.therapy_sessions_w.update(session.id, fields)
    await uow.commit()
    return updated

from __future__ import annotations

from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import BadRequestError, ForbiddenError, NotFoundError
from clarity_service.domain.entities.conflict_thread import ConflictThread
from clarity_service.domain.entities.journal import JournalEntry
from clarity_service.domain.entities.message import Message
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.therapy_session import TherapySession


def assert_message_access(principal: Principal, message: Message | None) -> Message:
    """Raise unless the caller authored the message or it was shared with them."""
    if message is None:
        raise NotFoundError("Message not found")
    if not message.visible_to(principal.user_id):
        raise ForbiddenError("You don't have permission to access this message")
    return message


def assert_thread_participant(principal: Principal, thread: ConflictThread | None) -> ConflictThread:
    if thread is None:
        raise NotFoundError("Conflict thread not found")
    if not thread.includes(principal.user_id):
        raise ForbiddenError("Not a participant of this conflict thread")
    return thread


def require_partnership(partnership: Partnership | None) -> Partnership:
    if partnership is None:
        raise BadRequestError("No active partnership found")
    return partnership


def assert_partner(principal: Principal, partnership: Partnership | None, partner_id: int) -> Partnership:
    """Raise unless ``partner_id`` is the caller's active partner."""
    partnership = require_partnership(partnership)
    if partnership.partner_of(principal.user_id) != partner_id or partner_id == principal.user_id:
        raise ForbiddenError("User is not your partner")
    return partnership


def assert_session_access(
    session: TherapySession | None, partnership: Partnership | None,
) -> TherapySession:
    if session is None:
        raise NotFoundError("Therapy session not found")
    if partnership is None or session.partnership_id != partnership.id:
        raise ForbiddenError("You don't have permission to access this therapy session")
    return session


def assert_journal_access(principal: Principal, entry: JournalEntry | None) -> JournalEntry:
    if entry is None:
        raise NotFoundError("Journal entry not found")
    if not entry.visible_to(principal.user_id):
        raise ForbiddenError("You do not have permission to access this journal entry")
    return entry


def assert_journal_owner(principal: Principal, entry: JournalEntry | None) -> JournalEntry:
    if entry is None:
        raise NotFoundError("Journal entry not found")
    if entry.user_id != principal.user_id:
        raise ForbiddenError("You do not have permission to modify this journal entry")
    return entry

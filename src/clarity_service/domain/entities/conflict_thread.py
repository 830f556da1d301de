from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ConflictThread:
    id: UUID
    user_id: int
    partner_id: int
    topic: str
    status: str
    created_at: datetime
    last_activity_at: datetime
    resolved_at: datetime | None = None
    resolution_summary: str | None = None
    resolution_insights: str | None = None
    needs_extra_help: bool = False
    stuck_reason: str | None = None

    def includes(self, user_id: int) -> bool:
        return user_id in (self.user_id, self.partner_id)

    def other_participant(self, user_id: int) -> int:
        return self.partner_id if self.user_id == user_id else self.user_id


@dataclass(frozen=True, slots=True)
class ConflictMessage:
    id: UUID
    thread_id: UUID
    user_id: int
    content: str
    message_type: str
    created_at: datetime
    emotional_tone: str | None = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Partnership:
    id: UUID
    user1_id: int
    user2_id: int
    status: str
    created_at: datetime
    start_date: datetime | None = None
    relationship_type: str | None = None
    anniversary_date: datetime | None = None
    meeting_story: str | None = None
    couple_nickname: str | None = None
    shared_picture: str | None = None
    relationship_goals: str | None = None
    privacy_level: str = "standard"

    def includes(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def partner_of(self, user_id: int) -> int:
        """Return the other member of the partnership."""
        return self.user2_id if self.user1_id == user_id else self.user1_id

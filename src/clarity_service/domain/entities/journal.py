from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class JournalResponse:
    id: UUID
    entry_id: UUID
    user_id: int
    content: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class JournalEntry:
    """A journal entry; ``partner_id`` is fixed when the entry is first shared."""

    id: UUID
    user_id: int
    title: str
    content: str
    raw_content: str
    created_at: datetime
    updated_at: datetime
    is_private: bool = True
    is_shared: bool = False
    partner_id: int | None = None
    has_partner_response: bool = False
    ai_summary: str | None = None
    ai_refined_content: str | None = None
    emotions: list[str] | None = None

    def visible_to(self, user_id: int) -> bool:
        if user_id == self.user_id:
            return True
        return self.is_shared and self.partner_id == user_id

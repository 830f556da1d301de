from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Response:
    id: UUID
    message_id: UUID
    user_id: int
    content: str
    ai_summary: str | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Message:
    """A transformed message. Immutable once stored; only responses grow."""

    id: UUID
    user_id: int
    emotion: str
    raw_message: str
    transformed_message: str
    communication_elements: list[str]
    delivery_tips: list[str]
    created_at: datetime
    context: str | None = None
    is_shared: bool = False
    partner_id: int | None = None
    responses: tuple[Response, ...] = ()

    def visible_to(self, user_id: int) -> bool:
        if user_id == self.user_id:
            return True
        return self.is_shared and self.partner_id == user_id

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from clarity_service.api.schemas.common import CamelModel

MAX_MESSAGE_LENGTH = 500


class TransformRequest(CamelModel):
    emotion: str = Field(min_length=1, max_length=50)
    raw_message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    context: str | None = None
    save_to_history: bool = True
    share_with_partner: bool = False
    partner_id: int | None = None


class TransformResponse(CamelModel):
    transformed_message: str
    communication_elements: list[str]
    delivery_tips: list[str]
    message_id: UUID | None = None


class ResponseOut(CamelModel):
    id: UUID
    message_id: UUID
    user_id: int
    content: str
    ai_summary: str | None
    created_at: datetime


class MessageOut(CamelModel):
    id: UUID
    user_id: int
    emotion: str
    raw_message: str
    context: str | None
    transformed_message: str
    communication_elements: list[str]
    delivery_tips: list[str]
    is_shared: bool
    partner_id: int | None
    created_at: datetime
    responses: list[ResponseOut] = []


class CreateResponseRequest(CamelModel):
    content: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)

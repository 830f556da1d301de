from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from clarity_service.api.schemas.common import CamelModel
from clarity_service.domain.value_objects.enums import ConflictStatus


class CreateThreadRequest(CamelModel):
    topic: str = Field(min_length=1, max_length=300)
    partner_id: int
    initial_message: str | None = None


class ThreadOut(CamelModel):
    id: UUID
    user_id: int
    partner_id: int
    topic: str
    status: str
    created_at: datetime
    last_activity_at: datetime
    resolved_at: datetime | None
    resolution_summary: str | None
    resolution_insights: str | None
    needs_extra_help: bool
    stuck_reason: str | None


class ThreadMessageRequest(CamelModel):
    content: str = Field(min_length=1)
    emotional_tone: str | None = None


class ThreadMessageOut(CamelModel):
    id: UUID
    thread_id: UUID
    user_id: int
    content: str
    emotional_tone: str | None
    message_type: str
    created_at: datetime


class ThreadStatusRequest(CamelModel):
    status: ConflictStatus
    summary: str | None = None
    insights: str | None = None
    needs_extra_help: bool | None = None
    stuck_reason: str | None = None


class TransformConflictRequest(CamelModel):
    topic: str = Field(min_length=1)
    situation: str = Field(min_length=1)
    feelings: str = Field(min_length=1)
    impact: str = Field(min_length=1)
    request: str = Field(min_length=1)
    partner_id: int


class TransformConflictResponse(CamelModel):
    transformed_message: str
    communication_elements: list[str]
    delivery_tips: list[str]

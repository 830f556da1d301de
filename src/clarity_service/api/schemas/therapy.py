from __future__ import annotations

from datetime import datetime
from uuid import UUID

from clarity_service.api.schemas.common import CamelModel


class TherapySessionOut(CamelModel):
    id: UUID
    partnership_id: UUID
    created_at: datetime
    transcript: str
    emotional_patterns: str
    core_issues: str
    recommendations: str
    is_reviewed: bool
    reviewed_at: datetime | None
    user_notes: str | None


class TherapySessionUpdate(CamelModel):
    user_notes: str | None = None
    is_reviewed: bool | None = None

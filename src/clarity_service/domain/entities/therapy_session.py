from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class TherapySession:
    id: UUID
    partnership_id: UUID
    created_at: datetime
    transcript: str
    emotional_patterns: str
    core_issues: str
    recommendations: str
    is_reviewed: bool = False
    reviewed_at: datetime | None = None
    user_notes: str | None = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PushSubscription:
    id: UUID
    user_id: int
    endpoint: str
    p256dh: str
    auth: str
    created_at: datetime

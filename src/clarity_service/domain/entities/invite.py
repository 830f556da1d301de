from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Invite:
    id: UUID
    from_user_id: int
    partner_email: str
    token: str
    invited_at: datetime
    partner_first_name: str = ""
    partner_last_name: str = ""
    accepted_at: datetime | None = None

    @property
    def accepted(self) -> bool:
        return self.accepted_at is not None

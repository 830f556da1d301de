from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from clarity_service.domain.entities.partnership import Partnership


class PartnershipReader(Protocol):
    async def get_by_id(self, partnership_id: UUID) -> Partnership | None: ...

    async def get_active_for_user(self, user_id: int) -> Partnership | None:
        """Return the user's active partnership, if any."""
        ...

    async def get_between(self, user_a: int, user_b: int) -> Partnership | None:
        """Newest partnership of any status between the two users."""
        ...


class PartnershipWriter(Protocol):
    async def create(self, partnership: Partnership) -> Partnership: ...

    async def update(self, partnership_id: UUID, fields: dict[str, Any]) -> Partnership: ...

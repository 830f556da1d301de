from __future__ import annotations

from typing import Protocol

from clarity_service.domain.entities.user import User


class UserReader(Protocol):
    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

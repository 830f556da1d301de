from __future__ import annotations

from typing import Protocol
from uuid import UUID

from clarity_service.domain.entities.push_subscription import PushSubscription


class PushSubscriptionReader(Protocol):
    async def get_by_endpoint(self, endpoint: str) -> PushSubscription | None: ...

    async def list_for_user(self, user_id: int) -> list[PushSubscription]: ...


class PushSubscriptionWriter(Protocol):
    async def add(self, subscription: PushSubscription) -> PushSubscription: ...

    async def delete(self, subscription_id: UUID) -> None: ...

    async def delete_by_endpoint(self, user_id: int, endpoint: str) -> bool:
        """Remove the user's subscription for ``endpoint``; False if none matched."""
        ...

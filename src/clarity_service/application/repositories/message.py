from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from clarity_service.domain.entities.message import Message, Response


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_for_user(self, user_id: int) -> list[Message]:
        """Messages authored by ``user_id``, newest first, with responses."""
        ...

    async def list_shared(self, author_id: int, partner_id: int) -> list[Message]: ...

    async def list_responses(self, message_id: UUID) -> list[Response]: ...

    async def list_shared_between(self, user_ids: tuple[int, int], since: datetime) -> list[Message]: ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def add_response(self, response: Response) -> Response: ...

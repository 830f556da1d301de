"""Partner dashboard state: shared messages, responses and realtime reconciliation."""
from __future__ import annotations

import logging
from collections import deque
from typing import Any

from clarity_service.client.queries import QueryClient
from clarity_service.client.toast import Toaster, log_toast
from clarity_service.client.transport import PartnerSocket

logger = logging.getLogger(__name__)

MAX_RESPONSE_LENGTH = 500


def responses_key(message_id: Any) -> tuple[Any, ...]:
    return ("/api/messages", message_id, "responses")


def shared_messages_key(partner_id: int) -> tuple[Any, ...]:
    return ("/api/partners", partner_id, "shared-messages")


class PartnerDashboard:
    def __init__(
        self,
        socket: PartnerSocket,
        queries: QueryClient,
        partner_id: int,
        *,
        toast: Toaster = log_toast,
    ) -> None:
        self._socket = socket
        self._queries = queries
        self._partner_id = partner_id
        self._toast = toast
        self._pending: deque[Any] = deque()
        self._unsubscribe = socket.on_message(self._pending.append)

    async def shared_messages(self) -> list[dict[str, Any]]:
        return await self._queries.fetch_query(shared_messages_key(self._partner_id))

    async def responses(self, message_id: Any) -> list[dict[str, Any]]:
        return await self._queries.fetch_query(responses_key(message_id))

    async def send_response(self, message_id: Any, content: str) -> dict[str, Any]:
        """Post a reply, refresh its responses, tell the partner, then toast."""
        if not content or len(content) > MAX_RESPONSE_LENGTH:
            raise ValueError(f"Response must be 1..{MAX_RESPONSE_LENGTH} characters")
        response = await self._queries.mutate(
            "POST",
            f"/api/messages/{message_id}/responses",
            {"content": content},
            invalidates=[responses_key(message_id)],
        )
        await self._socket.send_message({"type": "new_response", "data": response})
        self._toast("Response sent", "Your response has been sent to your partner.")
        return response

    def process_socket_messages(self) -> int:
        """React to messages received since the last call; return how many were handled."""
        handled = 0
        shared_arrived = False
        while self._pending:
            message = self._pending.popleft()
            handled += 1
            if not isinstance(message, dict):
                continue
            kind = message.get("type")
            data = message.get("data") or {}
            if kind == "new_shared_message":
                shared_arrived = True
            elif kind == "new_response" and isinstance(data, dict) and data.get("messageId"):
                self._queries.invalidate(responses_key(data["messageId"]))

        if shared_arrived:
            self._queries.invalidate(shared_messages_key(self._partner_id))
            self._toast("New message", "Your partner shared a new message with you.")
        return handled

    def detach(self) -> None:
        self._unsubscribe()

"""In-process WebSocket connection registry keyed by user id."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

from clarity_service.infrastructure.ws.protocol import WsEnvelope

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks every open socket of each user on this process.

    A user may hold several sockets (tabs, devices); events go to all of them.
    """

    def __init__(self) -> None:
        self._connections: dict[int, set[WebSocket]] = {}

    async def connect(self, ws: WebSocket, user_id: int) -> None:
        await ws.accept()
        self._connections.setdefault(user_id, set()).add(ws)
        logger.debug("WS connected: user %d (%d sockets)", user_id, len(self._connections[user_id]))

    def disconnect(self, ws: WebSocket, user_id: int) -> None:
        sockets = self._connections.get(user_id)
        if not sockets:
            return
        sockets.discard(ws)
        if not sockets:
            del self._connections[user_id]
        logger.debug("WS disconnected: user %d", user_id)

    def is_connected(self, user_id: int) -> bool:
        return bool(self._connections.get(user_id))

    @property
    def connection_count(self) -> int:
        return sum(len(s) for s in self._connections.values())

    async def send_to_user(self, user_id: int, event_type: str, data: Any = None) -> int:
        """Send an envelope to every socket of ``user_id``; return how many got it."""
        sockets = self._connections.get(user_id)
        if not sockets:
            return 0
        raw = WsEnvelope(type=event_type, data=data).dump()
        delivered = 0
        dead: list[WebSocket] = []
        for ws in list(sockets):
            try:
                await ws.send_text(raw)
                delivered += 1
            except Exception:
                logger.debug("Dropping dead socket of user %d", user_id, exc_info=True)
                dead.append(ws)
        for ws in dead:
            self.disconnect(ws, user_id)
        return delivered

    async def dispatch_realtime(self, data: dict[str, Any]) -> None:
        """Deliver a ``realtime.event`` outbox payload received over Pub/Sub."""
        try:
            recipient_id = int(data["recipient_id"])
            event_type = str(data["type"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Realtime event without recipient or type: %r", data)
            return
        await self.send_to_user(recipient_id, event_type, data.get("data"))

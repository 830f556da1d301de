"""Client-side WebSocket transport to the partner realtime channel."""
from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any, Self
from urllib.parse import quote, urlsplit, urlunsplit

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

logger = logging.getLogger(__name__)

MessageListener = Callable[[Any], None]

_SOCKET_SCHEMES = {"http": "ws", "https": "wss"}


def _socket_base(base_url: str) -> str:
    parts = urlsplit(base_url.rstrip("/"))
    scheme = _SOCKET_SCHEMES.get(parts.scheme, parts.scheme)
    return urlunsplit(parts._replace(scheme=scheme))


class PartnerSocket:
    """One socket to ``<base_url>/ws`` with an ordered log of received JSON messages.

    Valid JSON text frames are appended to ``messages`` in arrival order;
    anything else is dropped. ``max_messages`` bounds the log (oldest entries
    are evicted); by default it grows without limit. A dropped connection is
    not re-established.
    """

    def __init__(self, base_url: str, token: str, *, max_messages: int | None = None) -> None:
        self._url = f"{_socket_base(base_url)}/ws?token={quote(token)}"
        self._ws: websockets.ClientConnection | None = None
        self._connected = False
        self._messages: deque[Any] = deque(maxlen=max_messages)
        self._listeners: list[MessageListener] = []
        self._receive_task: asyncio.Task[None] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def messages(self) -> list[Any]:
        return list(self._messages)

    def on_message(self, listener: MessageListener) -> Callable[[], None]:
        """Call ``listener`` with every appended message; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def open(self) -> bool:
        """Connect and start receiving in the background. Never raises on network errors."""
        if self._ws is not None:
            return self._connected
        try:
            self._ws = await websockets.connect(self._url)
        except (OSError, WebSocketException) as exc:
            logger.error("WebSocket error: %s", exc)
            self._connected = False
            return False
        self._connected = True
        logger.info("WebSocket connection established")
        self._receive_task = asyncio.create_task(self.receive_loop(), name="partner-socket-receive")
        return True

    async def receive_loop(self) -> None:
        if self._ws is None:
            return
        try:
            async for frame in self._ws:
                if isinstance(frame, str):
                    self._handle_frame(frame)
        except ConnectionClosed:
            logger.info("WebSocket connection closed")
        except (OSError, WebSocketException) as exc:
            logger.error("WebSocket error: %s", exc)
        finally:
            self._connected = False

    def _handle_frame(self, frame: str) -> None:
        try:
            message = json.loads(frame)
        except json.JSONDecodeError:
            logger.error("Error parsing WebSocket message: %.200s", frame)
            return
        self._messages.append(message)
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception:
                logger.exception("WebSocket message listener failed")

    async def wait_closed(self) -> None:
        """Wait until the server side ends the stream."""
        if self._receive_task is not None:
            await self._receive_task

    async def send_message(self, message: Mapping[str, Any]) -> bool:
        """Send ``{type, data}`` if open; otherwise log and return False."""
        if not self._connected or self._ws is None:
            logger.error("WebSocket is not connected")
            return False
        try:
            await self._ws.send(json.dumps(message))
        except ConnectionClosed:
            logger.error("WebSocket is not connected")
            self._connected = False
            return False
        return True

    async def close(self) -> None:
        ws, self._ws = self._ws, None
        self._connected = False
        if ws is not None:
            await ws.close()
        if self._receive_task is not None and not self._receive_task.done():
            self._receive_task.cancel()
            try:
                await self._receive_task
            except asyncio.CancelledError:
                pass
        self._receive_task = None

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

"""WebSocket envelope: ``{"type": str, "data": any}`` in both directions."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from clarity_service.domain.value_objects.enums import RealtimeEvent

CLIENT_BROADCAST_EVENTS = frozenset({RealtimeEvent.NEW_RESPONSE, RealtimeEvent.NEW_SHARED_MESSAGE})


class WsEnvelope(BaseModel):
    type: str
    data: Any = None

    def dump(self) -> str:
        return self.model_dump_json(exclude_none=True)


def error_frame(code: str, **extra: Any) -> str:
    return WsEnvelope(type=RealtimeEvent.ERROR, data={"code": code, **extra}).dump()


def pong_frame() -> str:
    return WsEnvelope(type=RealtimeEvent.PONG).dump()

"""Wire format of events carried over Redis Pub/Sub."""
from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def serialize_event(event_type: str, payload: dict[str, Any]) -> str:
    envelope = {"event": event_type, "data": payload}
    return json.dumps(envelope, cls=_Encoder)


def deserialize_event(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    """Return (event_type, data). Raises ValueError on a malformed envelope."""
    try:
        envelope = json.loads(raw)
        event_type = envelope["event"]
        data = envelope["data"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise ValueError(f"Malformed pubsub envelope: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Pubsub envelope data must be an object")
    return event_type, data

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

REALTIME_EVENT = "realtime.event"
PUSH_SEND = "push.send"


@dataclass(frozen=True, slots=True)
class PushNotification:
    """Content of a Web Push message before it is encoded for the browser."""

    title: str
    body: str
    url: str = "/"
    tag: str | None = None
    actions: list[dict[str, str]] = field(default_factory=list)
    require_interaction: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PushNotification:
        return cls(
            title=data["title"],
            body=data["body"],
            url=data.get("url", "/"),
            tag=data.get("tag"),
            actions=list(data.get("actions") or []),
            require_interaction=bool(data.get("require_interaction", False)),
        )


@dataclass(frozen=True, slots=True)
class PushResult:
    success: bool
    sent: int = 0
    removed: int = 0
    reason: str | None = None

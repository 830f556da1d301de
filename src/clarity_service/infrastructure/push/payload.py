"""Web Push JSON body, as read by the service worker."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from clarity_service.application.dto.notification import PushNotification

DEFAULT_ICON = "/favicon.ico"


class PushAction(BaseModel):
    action: str
    title: str


class PushData(BaseModel):
    url: str = "/"


class PushPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    body: str
    icon: str = DEFAULT_ICON
    badge: str = DEFAULT_ICON
    data: PushData = Field(default_factory=PushData)
    actions: list[PushAction] = Field(default_factory=list)
    tag: str | None = None
    require_interaction: bool = False

    @classmethod
    def from_notification(cls, notification: PushNotification) -> PushPayload:
        return cls(
            title=notification.title,
            body=notification.body,
            data=PushData(url=notification.url),
            actions=[PushAction.model_validate(a) for a in notification.actions],
            tag=notification.tag,
            require_interaction=notification.require_interaction,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

"""Web Push subscription management on the client side."""
from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from clarity_service.client.queries import ApiError, QueryClient
from clarity_service.client.toast import Toaster, log_toast

logger = logging.getLogger(__name__)

VAPID_KEY_PATH = "/api/notifications/vapid-public-key"
SUBSCRIBE_PATH = "/api/notifications/subscribe"
UNSUBSCRIBE_PATH = "/api/notifications/unsubscribe"
PREFERENCES_PATH = "/api/notifications/preferences"


class PushPlatformError(Exception):
    """Raised by a platform when the browser-side push API fails."""


@dataclass(frozen=True, slots=True)
class PlatformSubscription:
    endpoint: str
    p256dh: str
    auth: str

    def to_json(self) -> dict[str, Any]:
        return {"endpoint": self.endpoint, "keys": {"p256dh": self.p256dh, "auth": self.auth}}


class PushPlatform(Protocol):
    """Service worker and PushManager capabilities of the host."""

    def is_supported(self) -> bool: ...

    async def request_permission(self) -> str:
        """Return ``granted``, ``denied`` or ``default``."""
        ...

    async def get_subscription(self) -> PlatformSubscription | None: ...

    async def subscribe(self, application_server_key: bytes) -> PlatformSubscription: ...

    async def unsubscribe(self, subscription: PlatformSubscription) -> bool: ...


def url_base64_to_bytes(value: str) -> bytes:
    """Decode a URL-safe base64 VAPID key, restoring the stripped padding."""
    padding = "=" * ((4 - len(value) % 4) % 4)
    standard = (value + padding).replace("-", "+").replace("_", "/")
    return base64.b64decode(standard)


class NotificationManager:
    def __init__(
        self,
        queries: QueryClient,
        platform: PushPlatform,
        *,
        toast: Toaster = log_toast,
    ) -> None:
        self._queries = queries
        self._platform = platform
        self._toast = toast
        self.is_supported = False
        self.is_subscribed = False
        self.is_subscribing = False
        self.error: str | None = None
        self.preferences: dict[str, Any] | None = None

    def _fail(self, message: str) -> bool:
        self.error = message
        logger.error("Push notification error: %s", message)
        self._toast("Notification error", message, variant="destructive")
        return False

    async def initialize(self) -> None:
        self.is_supported = self._platform.is_supported()
        if not self.is_supported:
            return
        try:
            self.is_subscribed = await self._platform.get_subscription() is not None
        except PushPlatformError as exc:
            self._fail(str(exc))
            return
        if self.is_subscribed:
            await self.load_preferences()

    async def subscribe(self) -> bool:
        if not self.is_supported:
            return self._fail("Push notifications are not supported in this browser")
        self.is_subscribing = True
        self.error = None
        try:
            permission = await self._platform.request_permission()
            if permission != "granted":
                return self._fail("Notification permission was denied")
            key_info = await self._queries.request("GET", VAPID_KEY_PATH)
            server_key = url_base64_to_bytes(key_info["publicKey"])
            subscription = await self._platform.subscribe(server_key)
            await self._queries.request("POST", SUBSCRIBE_PATH, subscription.to_json())
        except (ApiError, PushPlatformError, KeyError, TypeError, binascii.Error) as exc:
            return self._fail(f"Failed to subscribe to notifications: {exc}")
        finally:
            self.is_subscribing = False

        self.is_subscribed = True
        self._toast("Notifications enabled", "You'll be notified about partner activity.")
        await self.load_preferences()
        return True

    async def unsubscribe(self) -> bool:
        self.error = None
        try:
            subscription = await self._platform.get_subscription()
            if subscription is not None:
                await self._queries.request(
                    "DELETE", UNSUBSCRIBE_PATH, {"endpoint": subscription.endpoint},
                )
                await self._platform.unsubscribe(subscription)
        except (ApiError, PushPlatformError) as exc:
            return self._fail(f"Failed to unsubscribe from notifications: {exc}")
        self.is_subscribed = False
        self._toast("Notifications disabled", "You will no longer receive push notifications.")
        return True

    async def load_preferences(self) -> dict[str, Any] | None:
        try:
            self.preferences = await self._queries.request("GET", PREFERENCES_PATH)
        except ApiError as exc:
            self._fail(f"Failed to load notification preferences: {exc}")
        return self.preferences

    async def update_preferences(self, changes: dict[str, bool]) -> bool:
        try:
            self.preferences = await self._queries.request("POST", PREFERENCES_PATH, changes)
        except ApiError as exc:
            return self._fail(f"Failed to update notification preferences: {exc}")
        self._toast("Preferences updated", "Your notification preferences have been saved.")
        return True

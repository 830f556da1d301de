"""REST query cache and mutations against the CoupleClarity API."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from clarity_service.client.toast import Toaster, log_toast

logger = logging.getLogger(__name__)

QueryKey = tuple[Any, ...]

CSRF_HEADER_VALUE = "CoupleClarity"


class ApiError(Exception):
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self.text = text
        super().__init__(f"{status}: {text}")


def _normalize(key: Iterable[Any]) -> tuple[str, ...]:
    return tuple(str(part) for part in key)


def key_to_path(key: Iterable[Any]) -> str:
    """``("/api/messages", 7, "responses")`` -> ``/api/messages/7/responses``."""
    return "/".join(_normalize(key))


class QueryClient:
    """Caches GET results by key until a mutation invalidates them.

    There is no background refetch, no retry and no optimistic update. A 401
    answer clears the whole cache.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        toast: Toaster = log_toast,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {
            "Content-Type": "application/json",
            "X-Requested-With": CSRF_HEADER_VALUE,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = http or httpx.AsyncClient(base_url=base_url)
        self._http.headers.update(headers)
        self._toast = toast
        self._cache: dict[tuple[str, ...], Any] = {}

    def get_query_data(self, key: QueryKey) -> Any | None:
        return self._cache.get(_normalize(key))

    def has_query(self, key: QueryKey) -> bool:
        return _normalize(key) in self._cache

    def invalidate(self, prefix: QueryKey) -> int:
        """Drop every cached key starting with ``prefix``; return how many."""
        prefix_n = _normalize(prefix)
        stale = [k for k in self._cache if k[: len(prefix_n)] == prefix_n]
        for k in stale:
            del self._cache[k]
        return len(stale)

    def clear(self) -> None:
        self._cache.clear()

    async def request(self, method: str, path: str, body: Any | None = None) -> Any:
        """Send one request without touching the cache or emitting toasts."""
        try:
            response = await self._http.request(method, path, json=body)
        except httpx.HTTPError as exc:
            raise ApiError(0, str(exc)) from exc

        if response.status_code == 401:
            logger.info("Unauthorized response, clearing query cache")
            self.clear()
        if response.is_error:
            raise ApiError(response.status_code, response.text or response.reason_phrase)
        if not response.content:
            return None
        return response.json()

    async def fetch_query(self, key: QueryKey) -> Any:
        normalized = _normalize(key)
        if normalized in self._cache:
            return self._cache[normalized]
        try:
            data = await self.request("GET", key_to_path(normalized))
        except ApiError as exc:
            self._toast("Error", str(exc), variant="destructive")
            raise
        self._cache[normalized] = data
        return data

    async def mutate(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        *,
        invalidates: Iterable[QueryKey] = (),
    ) -> Any:
        try:
            data = await self.request(method, path, body)
        except ApiError as exc:
            self._toast("Error", str(exc), variant="destructive")
            raise
        for key in invalidates:
            self.invalidate(key)
        return data

    async def aclose(self) -> None:
        await self._http.aclose()

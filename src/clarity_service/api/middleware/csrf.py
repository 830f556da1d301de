"""Header-based CSRF gate for state-changing API calls."""
from __future__ import annotations

from collections.abc import Mapping

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
DEFAULT_HEADER_VALUE = "CoupleClarity"
FORBIDDEN_BODY = {"error": "Forbidden: missing required request headers"}


def is_request_allowed(
    method: str,
    headers: Mapping[str, str],
    expected_header: str = DEFAULT_HEADER_VALUE,
) -> bool:
    """Safe methods always pass; others need the custom header or a non-form content type.

    ``headers`` must use lower-case keys (Starlette's ``Headers`` does).
    """
    if method.upper() in SAFE_METHODS:
        return True
    if headers.get("x-requested-with") == expected_header:
        return True
    content_type = headers.get("content-type") or ""
    return "application/json" in content_type or content_type.startswith("multipart/form-data")


class CSRFMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        header_value: str = DEFAULT_HEADER_VALUE,
        path_prefix: str = "/api",
    ) -> None:
        super().__init__(app)
        self._header_value = header_value
        self._path_prefix = path_prefix

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.startswith(self._path_prefix) and not is_request_allowed(
            request.method, request.headers, self._header_value,
        ):
            return JSONResponse(status_code=403, content=FORBIDDEN_BODY)
        return await call_next(request)

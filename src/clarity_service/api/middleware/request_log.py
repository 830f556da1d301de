from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation id and logs ``METHOD path status in Nms`` for API calls."""

    def __init__(self, app: ASGIApp, path_prefix: str = "/api") -> None:
        super().__init__(app)
        self._path_prefix = path_prefix

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        cid = request.headers.get(HEADER) or uuid.uuid4().hex
        token = correlation_id_ctx.set(cid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(token)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[HEADER] = cid
        if request.url.path.startswith(self._path_prefix):
            logger.info(
                "%s %s %s in %.0fms [%s]",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                cid,
            )
        return response

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clarity_service.api.middleware.csrf import CSRFMiddleware
from clarity_service.api.middleware.request_log import RequestLogMiddleware
from clarity_service.api.routers import (
    conflict_threads,
    health,
    journal,
    messages,
    notifications,
    partnerships,
    profile,
    therapy_sessions,
    ws,
)
from clarity_service.application.dto.notification import REALTIME_EVENT
from clarity_service.application.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from clarity_service.config import settings
from clarity_service.infrastructure.bus.redis_pubsub import RedisPubSubSubscriber

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[AppError], int] = {
    BadRequestError: 400,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    ValidationError: 422,
}


async def _on_pubsub_event(event_type: str, data: dict[str, Any]) -> None:
    """Dispatch a Redis Pub/Sub event to local WS connections."""
    if event_type != REALTIME_EVENT:
        return
    await ws.get_manager().dispatch_realtime(data)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    subscriber = RedisPubSubSubscriber(
        app.state.redis,
        settings.REDIS_PUBSUB_CHANNEL,
        _on_pubsub_event,
    )
    await subscriber.start()
    app.state.pubsub_subscriber = subscriber

    yield

    await subscriber.stop()
    await app.state.redis.aclose()
    logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="CoupleClarity API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.ws_manager = ws.get_manager()

    app.add_middleware(CSRFMiddleware, header_value=settings.CSRF_HEADER_VALUE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(conflict_threads.router)
    app.include_router(notifications.router)
    app.include_router(profile.router)
    app.include_router(journal.router)
    app.include_router(partnerships.router)
    app.include_router(therapy_sessions.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        status_code = next(
            (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
            500,
        )
        if status_code == 500:
            logger.error("Unmapped application error: %r", exc)
        return JSONResponse(status_code=status_code, content={"detail": exc.detail})

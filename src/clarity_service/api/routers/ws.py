from __future__ import annotations

import asyncio
import logging
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from clarity_service.api.deps import get_verifier
from clarity_service.application.dto.principal import Principal
from clarity_service.config import settings
from clarity_service.domain.value_objects.enums import RealtimeEvent
from clarity_service.infrastructure.ws.manager import ConnectionManager
from clarity_service.infrastructure.ws.protocol import (
    CLIENT_BROADCAST_EVENTS,
    WsEnvelope,
    error_frame,
    pong_frame,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

manager = ConnectionManager()


def get_manager() -> ConnectionManager:
    return manager


async def _authenticate(token: str) -> Principal | None:
    try:
        return await get_verifier().verify(token)
    except Exception:
        logger.debug("WS auth failed", exc_info=True)
        return None


@router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    token: str = Query(...),
) -> None:
    principal = await _authenticate(token)
    if principal is None:
        await websocket.close(code=4001, reason="Authentication failed")
        return

    user_id = principal.user_id
    await manager.connect(websocket, user_id)
    heartbeat_task = asyncio.create_task(_heartbeat(websocket), name=f"ws-heartbeat-{user_id}")
    try:
        await _read_loop(websocket, principal)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for user %d", user_id)
    finally:
        heartbeat_task.cancel()
        manager.disconnect(websocket, user_id)


async def _heartbeat(ws: WebSocket) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await ws.send_text(pong_frame())
    except asyncio.CancelledError:
        pass
    except Exception:
        logger.debug("WS heartbeat stopped", exc_info=True)


async def _read_loop(ws: WebSocket, principal: Principal) -> None:
    while True:
        raw = await ws.receive_text()
        try:
            msg = WsEnvelope.model_validate_json(raw)
        except PydanticValidationError:
            await ws.send_text(error_frame("invalid_payload"))
            continue

        if msg.type == RealtimeEvent.PING:
            await ws.send_text(pong_frame())
        elif msg.type in CLIENT_BROADCAST_EVENTS:
            # The REST write that produced this already queued the partner event.
            logger.debug("Ignoring client broadcast %s from user %d", msg.type, principal.user_id)
        else:
            await ws.send_text(error_frame("unknown_type", type=msg.type))


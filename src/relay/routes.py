"""Relay socket endpoint."""

import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from src.auth.dependencies import CurrentUser, get_current_user
from src.relay.manager import ConnectionManager, get_connection_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Relay"])


@router.websocket("/ws/relay")
async def relay_socket(websocket: WebSocket, manager: ConnectionManager = Depends(get_connection_manager)):
    await websocket.accept()
    connection_id = await manager.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            # Binary frames are accepted when they carry UTF-8 JSON
            text = message.get("text")
            if text is None:
                text = (message.get("bytes") or b"").decode("utf-8", errors="replace")
            try:
                raw = json.loads(text)
            except json.JSONDecodeError:
                logger.debug("Non-JSON frame on connection %s", connection_id)
                await manager.reply_error(connection_id, "invalid_json", "Frame is not valid JSON")
                continue
            await manager.handle(connection_id, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(connection_id)


@router.get("/api/v1/presence", summary="Online users", description="Point-in-time list of user ids currently identified on the relay.")
async def presence(
    manager: ConnectionManager = Depends(get_connection_manager),
    user: CurrentUser = Depends(get_current_user),
):
    return {"status": "success", "data": manager.registry.snapshot()}

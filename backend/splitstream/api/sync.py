from __future__ import annotations

from fastapi import APIRouter, WebSocket

from splitstream.runtime import runtime

SYNC_SOCKET_PATHS = ("/ws", "/api/ws")

router = APIRouter(tags=["sync"])


async def sync_socket(ws: WebSocket) -> None:
    await runtime.handle_websocket(ws)


for path in SYNC_SOCKET_PATHS:
    router.add_api_websocket_route(path, sync_socket)

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from .config import settings
from .constants import WS_STATS_ROOMS_LIMIT
from .router import EventRouter
from .session_registry import SessionRegistry
from .session_types import Delivery
from .snapshot import build_room_summary
from .utils import now_ms, random_id

logger = logging.getLogger(__name__)


class SyncRuntime:
    def __init__(self, registry: SessionRegistry | None = None) -> None:
        self.registry = registry if registry is not None else SessionRegistry()
        self.router = EventRouter(self.registry, max_message_length=settings.max_message_length)
        self.connections: dict[str, WebSocket] = {}
        self._ws_stats: dict[str, int] = {
            "connectSuccess": 0,
            "disconnects": 0,
            "messageReceived": 0,
            "pingReceived": 0,
            "invalidFrames": 0,
            "sendFailures": 0,
            "activeConnections": 0,
            "peakConnections": 0,
        }

    @property
    def active_rooms_count(self) -> int:
        return self.registry.active_rooms_count

    @property
    def total_users(self) -> int:
        return self.registry.total_users

    def health(self) -> dict[str, object]:
        return {"status": "ok", **self.registry.stats()}

    def _increment_stat(self, key: str, amount: int = 1) -> None:
        self._ws_stats[key] = int(self._ws_stats.get(key, 0)) + amount

    def _on_connect(self) -> None:
        self._increment_stat("connectSuccess")
        active_connections = len(self.connections)
        self._ws_stats["activeConnections"] = active_connections
        if active_connections > int(self._ws_stats.get("peakConnections", 0)):
            self._ws_stats["peakConnections"] = active_connections

    def _on_disconnect(self) -> None:
        self._increment_stat("disconnects")
        self._ws_stats["activeConnections"] = len(self.connections)

    def _log_ws_event(self, event: str, level: int = logging.INFO, **fields: object) -> None:
        logger.log(
            level,
            "ws.%s %s",
            event,
            json.dumps(fields, ensure_ascii=False, separators=(",", ":")),
        )

    async def get_ws_stats(self) -> dict[str, Any]:
        room_summaries = [build_room_summary(room) for room in self.registry.rooms.values()]
        room_summaries.sort(key=lambda item: int(item.get("users", 0)), reverse=True)

        return {
            "generatedAt": now_ms(),
            **self.registry.stats(),
            "stats": dict(self._ws_stats),
            "rooms": room_summaries[:WS_STATS_ROOMS_LIMIT],
        }

    def register(self, websocket: WebSocket) -> str:
        connection_id = random_id()
        self.connections[connection_id] = websocket
        self._on_connect()
        return connection_id

    async def handle_websocket(self, websocket: WebSocket) -> None:
        await websocket.accept()
        connection_id = self.register(websocket)
        self._log_ws_event("connect", connectionId=connection_id)

        disconnect_code: int | None = None
        disconnect_reason = "unknown"

        try:
            while True:
                raw = await websocket.receive_text()
                await self.handle_frame(connection_id, raw)
        except WebSocketDisconnect as exc:
            disconnect_code = exc.code
            disconnect_reason = "websocket_disconnect"
        except Exception:
            disconnect_reason = "server_error"
            logger.exception("Unexpected websocket error for connection %s", connection_id)
        finally:
            await self.handle_disconnect(
                connection_id,
                reason=disconnect_reason,
                close_code=disconnect_code,
            )

    async def handle_frame(self, connection_id: str, raw: str) -> None:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self._increment_stat("invalidFrames")
            logger.debug("Ignoring non-JSON frame from %s", connection_id)
            return
        if not isinstance(data, dict):
            self._increment_stat("invalidFrames")
            logger.debug("Ignoring non-object frame from %s", connection_id)
            return
        self._increment_stat("messageReceived")

        if data.get("type") == "ping":
            self._increment_stat("pingReceived")
            await self._send_safe(connection_id, {"type": "pong", "serverTime": now_ms()})
            return

        deliveries = self.router.dispatch_raw(connection_id, data)
        await self._deliver(deliveries)

    async def handle_disconnect(
        self,
        connection_id: str,
        reason: str = "unknown",
        close_code: int | None = None,
    ) -> None:
        if self.connections.pop(connection_id, None) is None:
            return
        self._on_disconnect()

        room_id = self.registry.room_of(connection_id)
        deliveries = self.router.disconnect(connection_id)
        self._log_ws_event(
            "disconnect",
            connectionId=connection_id,
            roomId=room_id or "-",
            reason=reason,
            closeCode=close_code,
        )
        if room_id is not None and self.registry.get_room(room_id) is None:
            self._log_ws_event("room_empty", roomId=room_id)
        await self._deliver(deliveries)

    async def _deliver(self, deliveries: list[Delivery]) -> None:
        for delivery in deliveries:
            frame = delivery.frame()
            for recipient in delivery.recipients:
                await self._send_safe(recipient, frame, room_id=delivery.room_id)

    async def _send_safe(
        self,
        connection_id: str,
        data: dict[str, Any],
        room_id: str | None = None,
    ) -> None:
        websocket = self.connections.get(connection_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(data)
        except Exception as exc:
            # Connection may already be closed.
            self._increment_stat("sendFailures")
            logger.debug(
                "[SEND_FAIL] room=%s connection=%s reason=%s ws_client_state=%s",
                room_id or "-",
                connection_id,
                repr(exc),
                getattr(websocket, "client_state", None),
            )

    async def shutdown(self) -> None:
        self.registry.clear()
        self.connections.clear()
        self._ws_stats["activeConnections"] = 0


runtime = SyncRuntime()

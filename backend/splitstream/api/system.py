from __future__ import annotations

from fastapi import APIRouter

from splitstream.runtime import runtime

router = APIRouter(tags=["system"])


@router.get("/health")
async def health() -> dict[str, object]:
    return runtime.health()


@router.get("/api/health")
async def api_health() -> dict[str, object]:
    return runtime.health()


@router.get("/api/ws-stats")
async def websocket_stats() -> dict[str, object]:
    return await runtime.get_ws_stats()

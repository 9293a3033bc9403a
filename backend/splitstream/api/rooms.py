from __future__ import annotations

from fastapi import APIRouter, HTTPException

from splitstream.runtime import runtime
from splitstream.utils import sanitize_room_id

router = APIRouter(tags=["rooms"])


@router.get("/api/rooms/{room_id}")
async def room_snapshot(room_id: str) -> dict[str, object]:
    room_id_value = sanitize_room_id(room_id)
    snapshot = runtime.registry.snapshot(room_id_value)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return {"roomId": room_id_value, **snapshot}

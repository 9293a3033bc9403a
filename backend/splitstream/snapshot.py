from __future__ import annotations

from typing import Any

from .session_types import RoomSession


def build_room_state(room: RoomSession) -> dict[str, Any]:
    playback = room.playback
    return {
        "videoUrl": playback.video_url,
        "isPlaying": playback.is_playing,
        "currentTime": playback.current_time,
        "messages": [message.to_payload() for message in room.messages],
        "users": room.users,
    }


def build_room_summary(room: RoomSession) -> dict[str, Any]:
    return {
        "roomId": room.room_id,
        "users": len(room.members),
        "isPlaying": room.playback.is_playing,
    }

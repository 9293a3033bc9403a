from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

RoomLifecycle = Literal["absent", "active"]
DeliveryTarget = Literal["sender", "room", "others"]
InboundEventType = Literal[
    "join-room",
    "load-video",
    "play-video",
    "pause-video",
    "seek-video",
    "send-message",
]
OutboundEventType = Literal[
    "room-state",
    "user-joined",
    "user-left",
    "video-loaded",
    "video-play",
    "video-pause",
    "video-seek",
    "receive-message",
    "error",
    "pong",
]


@dataclass(frozen=True)
class ChatMessage:
    username: str
    message: str
    timestamp: Any = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass
class PlaybackState:
    video_url: str = ""
    is_playing: bool = False
    current_time: float = 0


@dataclass
class RoomSession:
    room_id: str
    playback: PlaybackState = field(default_factory=PlaybackState)
    messages: list[ChatMessage] = field(default_factory=list)
    # connection id -> display name, insertion ordered
    members: dict[str, str] = field(default_factory=dict)

    @property
    def users(self) -> list[str]:
        return list(self.members.values())


@dataclass(frozen=True)
class LeaveResult:
    room_id: str
    username: str
    users: list[str]
    room_destroyed: bool


@dataclass(frozen=True)
class JoinResult:
    room_id: str
    username: str
    snapshot: dict[str, Any]
    users: list[str]
    room_created: bool
    previous: LeaveResult | None = None


@dataclass(frozen=True)
class Delivery:
    target: DeliveryTarget
    event: OutboundEventType
    payload: dict[str, Any]
    recipients: tuple[str, ...]
    room_id: str | None = None

    def frame(self) -> dict[str, Any]:
        return {"type": self.event, **self.payload}

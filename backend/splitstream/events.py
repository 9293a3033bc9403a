from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .constants import INBOUND_EVENT_TYPES
from .errors import InvalidPayloadError


class _InboundEvent(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class JoinRoomEvent(_InboundEvent):
    type: Literal["join-room"]
    roomId: str = ""
    username: str = ""


class LoadVideoEvent(_InboundEvent):
    type: Literal["load-video"]
    roomId: str
    videoUrl: str = ""


class PlayVideoEvent(_InboundEvent):
    type: Literal["play-video"]
    roomId: str
    # type and range checked by utils.normalize_timestamp
    timestamp: Any


class PauseVideoEvent(_InboundEvent):
    type: Literal["pause-video"]
    roomId: str
    timestamp: Any


class SeekVideoEvent(_InboundEvent):
    type: Literal["seek-video"]
    roomId: str
    timestamp: Any


class SendMessageEvent(_InboundEvent):
    type: Literal["send-message"]
    roomId: str
    username: str | None = None
    message: Any = None
    timestamp: Any = None


InboundEvent = Annotated[
    Union[
        JoinRoomEvent,
        LoadVideoEvent,
        PlayVideoEvent,
        PauseVideoEvent,
        SeekVideoEvent,
        SendMessageEvent,
    ],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)


def parse_inbound(data: dict[str, Any]) -> InboundEvent:
    event_type = data.get("type")
    if event_type not in INBOUND_EVENT_TYPES:
        raise InvalidPayloadError(f"Unknown event type: {event_type}")
    try:
        return _inbound_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidPayloadError(f"Invalid {event_type} payload") from exc

from __future__ import annotations

import re

from .config import settings
from .session_types import InboundEventType

MAX_MESSAGE_LENGTH = settings.max_message_length
WS_STATS_ROOMS_LIMIT = 50

INBOUND_EVENT_TYPES: tuple[InboundEventType, ...] = (
    "join-room",
    "load-video",
    "play-video",
    "pause-video",
    "seek-video",
    "send-message",
)

# watch?v=<id>, youtu.be/<id>, embed/<id>
YOUTUBE_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:(?:www|m)\.)?"
    r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)"
    r"([^&\n?#]+)",
    re.IGNORECASE,
)

INVALID_VIDEO_URL_MESSAGE = "Invalid Youtube URL"
ROOM_ID_REQUIRED_MESSAGE = "Room id is required"
USERNAME_REQUIRED_MESSAGE = "Username is required"


def message_too_long_text(limit: int) -> str:
    return f"Message too long(max {limit} characters)"

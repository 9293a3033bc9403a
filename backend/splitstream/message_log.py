from __future__ import annotations

from typing import Any

from .constants import MAX_MESSAGE_LENGTH, message_too_long_text
from .errors import MessageTooLongError
from .session_registry import SessionRegistry
from .session_types import ChatMessage
from .utils import sanitize_username


def append_message(
    registry: SessionRegistry,
    room_id: str,
    username: Any,
    message: Any,
    timestamp: Any = None,
    *,
    fallback_username: str | None = None,
    max_length: int = MAX_MESSAGE_LENGTH,
) -> ChatMessage | None:
    text = message if isinstance(message, str) else ""
    if not text.strip():
        return None
    if len(text) > max_length:
        raise MessageTooLongError(message_too_long_text(max_length))

    room = registry.get_room(room_id)
    if room is None:
        return None

    author = sanitize_username(username) or sanitize_username(fallback_username)
    entry = ChatMessage(username=author, message=text, timestamp=timestamp)
    room.messages.append(entry)
    return entry

"""Playback transitions for a room.

The server never advances ``current_time`` on its own; it always holds the
last position a client reported. Every transition is a silent no-op (returns
``None``) when the room has already been torn down.
"""

from __future__ import annotations

from typing import Any

from .constants import INVALID_VIDEO_URL_MESSAGE
from .errors import InvalidVideoUrlError
from .media import is_supported_video_url, normalize_video_url
from .session_registry import SessionRegistry
from .session_types import PlaybackState
from .utils import normalize_timestamp


def load_video(registry: SessionRegistry, room_id: str, video_url: Any) -> PlaybackState | None:
    url = normalize_video_url(video_url)
    if not is_supported_video_url(url):
        raise InvalidVideoUrlError(INVALID_VIDEO_URL_MESSAGE)

    room = registry.get_room(room_id)
    if room is None:
        return None

    room.playback = PlaybackState(video_url=url, is_playing=False, current_time=0)
    return room.playback


def play_video(registry: SessionRegistry, room_id: str, timestamp: Any) -> PlaybackState | None:
    position = normalize_timestamp(timestamp)
    room = registry.get_room(room_id)
    if room is None:
        return None

    room.playback.is_playing = True
    room.playback.current_time = position
    return room.playback


def pause_video(registry: SessionRegistry, room_id: str, timestamp: Any) -> PlaybackState | None:
    position = normalize_timestamp(timestamp)
    room = registry.get_room(room_id)
    if room is None:
        return None

    room.playback.is_playing = False
    room.playback.current_time = position
    return room.playback


def seek_video(registry: SessionRegistry, room_id: str, timestamp: Any) -> PlaybackState | None:
    position = normalize_timestamp(timestamp)
    room = registry.get_room(room_id)
    if room is None:
        return None

    room.playback.current_time = position
    return room.playback

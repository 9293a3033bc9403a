from __future__ import annotations

import pytest

from splitstream.errors import InvalidPayloadError, InvalidVideoUrlError
from splitstream.playback import load_video, pause_video, play_video, seek_video
from splitstream.session_registry import SessionRegistry


@pytest.fixture
def registry() -> SessionRegistry:
    registry = SessionRegistry()
    registry.join("r1", "conn-a", "alice")
    return registry


def test_load_resets_playhead_and_pause(registry: SessionRegistry) -> None:
    play_video(registry, "r1", 42.0)

    playback = load_video(registry, "r1", "https://www.youtube.com/watch?v=dQw4w9WgXcQ")

    assert playback is not None
    assert playback.video_url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert playback.is_playing is False
    assert playback.current_time == 0


def test_load_rejects_unsupported_url_without_mutation(registry: SessionRegistry) -> None:
    load_video(registry, "r1", "https://youtu.be/abc123")
    play_video(registry, "r1", 10)

    with pytest.raises(InvalidVideoUrlError):
        load_video(registry, "r1", "https://vimeo.com/12345")

    room = registry.get_room("r1")
    assert room is not None
    assert room.playback.video_url == "https://youtu.be/abc123"
    assert room.playback.is_playing is True
    assert room.playback.current_time == 10


def test_play_twice_keeps_playing_with_latest_timestamp(registry: SessionRegistry) -> None:
    play_video(registry, "r1", 5)
    playback = play_video(registry, "r1", 7.5)

    assert playback is not None
    assert playback.is_playing is True
    assert playback.current_time == 7.5


def test_pause_stops_at_timestamp(registry: SessionRegistry) -> None:
    play_video(registry, "r1", 5)
    playback = pause_video(registry, "r1", 9)

    assert playback is not None
    assert playback.is_playing is False
    assert playback.current_time == 9


@pytest.mark.parametrize("playing", [True, False])
def test_seek_keeps_play_flag(registry: SessionRegistry, playing: bool) -> None:
    if playing:
        play_video(registry, "r1", 1)
    playback = seek_video(registry, "r1", 120)

    assert playback is not None
    assert playback.current_time == 120
    assert playback.is_playing is playing


@pytest.mark.parametrize("operation", [play_video, pause_video, seek_video])
def test_transitions_on_missing_room_are_noops(registry: SessionRegistry, operation) -> None:
    assert operation(registry, "nope", 3) is None
    assert registry.get_room("nope") is None


def test_load_on_missing_room_is_noop(registry: SessionRegistry) -> None:
    assert load_video(registry, "nope", "https://youtu.be/abc123") is None
    assert registry.get_room("nope") is None


@pytest.mark.parametrize("timestamp", [-1, float("nan"), float("inf"), "12", None, True])
def test_bad_timestamps_are_rejected(registry: SessionRegistry, timestamp) -> None:
    with pytest.raises(InvalidPayloadError):
        play_video(registry, "r1", timestamp)

    room = registry.get_room("r1")
    assert room is not None
    assert room.playback.is_playing is False

from __future__ import annotations

from typing import Any

from .constants import YOUTUBE_URL_PATTERN


def normalize_video_url(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def extract_video_id(url: Any) -> str | None:
    match = YOUTUBE_URL_PATTERN.match(normalize_video_url(url))
    if match is None:
        return None
    return match.group(1)


def is_supported_video_url(url: Any) -> bool:
    return extract_video_id(url) is not None

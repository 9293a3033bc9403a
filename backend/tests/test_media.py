from __future__ import annotations

import pytest

from splitstream.media import extract_video_id, is_supported_video_url


@pytest.mark.parametrize(
    ("url", "video_id"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://youtu.be/abc123", "abc123"),
        ("youtu.be/abc123?si=share", "abc123"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://m.youtube.com/watch?v=mobile1", "mobile1"),
        ("  https://youtu.be/padded  ", "padded"),
    ],
)
def test_supported_link_shapes(url: str, video_id: str) -> None:
    assert is_supported_video_url(url)
    assert extract_video_id(url) == video_id


@pytest.mark.parametrize(
    "url",
    [
        "",
        "https://vimeo.com/12345",
        "https://www.youtube.com/watch?v=",
        "https://www.youtube.com/playlist?list=PL123",
        "https://example.com/?next=youtu.be/abc123",
        "not a url",
        None,
        42,
    ],
)
def test_other_links_are_rejected(url) -> None:
    assert not is_supported_video_url(url)
    assert extract_video_id(url) is None

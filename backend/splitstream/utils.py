from __future__ import annotations

import math
import time
import uuid
from typing import Any

from .errors import InvalidPayloadError


def now_ms() -> int:
    return int(time.time() * 1000)


def random_id() -> str:
    return str(uuid.uuid4())


def sanitize_room_id(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def sanitize_username(raw: Any) -> str:
    if raw is None:
        return ""
    return " ".join(str(raw).split())


def normalize_timestamp(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPayloadError("Timestamp must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidPayloadError("Timestamp must be a non-negative number")
    return float(value)

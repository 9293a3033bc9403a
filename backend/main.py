from __future__ import annotations

import logging

from splitstream.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

from splitstream.application import app  # noqa: E402

__all__ = ["app"]

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "https://splitstream-frontend.vercel.app",
)


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or DEFAULT_CORS_ORIGINS


class Settings:
    def __init__(self) -> None:
        self.host = os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0"
        self.port = int(os.getenv("PORT", "5000"))
        self.cors_origins = _parse_origins(os.getenv("CORS_ORIGINS"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        self.max_message_length = max(1, int(os.getenv("MAX_MESSAGE_LENGTH", "500")))

    @property
    def allow_all_origins(self) -> bool:
        return "*" in self.cors_origins


settings = Settings()

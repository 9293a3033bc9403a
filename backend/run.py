from __future__ import annotations

from pathlib import Path

import uvicorn

from splitstream.config import settings

BACKEND_DIR = Path(__file__).resolve().parent


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        app_dir=str(BACKEND_DIR),
        reload_dirs=[str(BACKEND_DIR)],
    )

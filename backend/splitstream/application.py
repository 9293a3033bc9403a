from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitstream.api.router import api_router
from splitstream.config import settings
from splitstream.runtime import runtime


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    await runtime.shutdown()


def create_app() -> FastAPI:
    app = FastAPI(title="SplitStream Backend", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.allow_all_origins else list(settings.cors_origins),
        allow_credentials=not settings.allow_all_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app


app = create_app()

from __future__ import annotations

from fastapi import APIRouter

from splitstream.api.rooms import router as rooms_router
from splitstream.api.sync import router as sync_router
from splitstream.api.system import router as system_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(rooms_router)
api_router.include_router(sync_router)

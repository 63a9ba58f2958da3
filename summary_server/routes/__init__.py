from __future__ import annotations

from fastapi import APIRouter

from .history import router as history_router
from .meta import router as meta_router
from .summarize import router as summarize_router

api_router = APIRouter()
api_router.include_router(meta_router)
api_router.include_router(summarize_router)
api_router.include_router(history_router)

__all__ = ["api_router"]

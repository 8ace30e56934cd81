"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from inkprompt.api import analyze, backends, enhance, health, history, recommend, styles, transfer

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(analyze.router)
api_router.include_router(enhance.router)
api_router.include_router(transfer.router)
api_router.include_router(recommend.router)
api_router.include_router(backends.router)
api_router.include_router(history.router)
api_router.include_router(styles.router)

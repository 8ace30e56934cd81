"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from inkprompt.engine.registry import get_registry
from inkprompt.engine.tables import get_tables
from inkprompt.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        stages_registered=get_registry().count,
        tables_version=get_tables().version,
    )

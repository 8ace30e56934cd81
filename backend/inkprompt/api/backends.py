"""GET /api/backends — the capability table."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from inkprompt.engine.recommender import all_backends, get_backend
from inkprompt.models.responses import BackendInfo

router = APIRouter(prefix="/backends")


def _info(caps) -> BackendInfo:
    data = asdict(caps)
    data.pop("traits", None)
    data.pop("base_generation_seconds", None)
    return BackendInfo(**data)


@router.get("", response_model=list[BackendInfo])
async def list_backends() -> list[BackendInfo]:
    return [_info(caps) for caps in all_backends()]


@router.get("/{name}", response_model=BackendInfo)
async def backend_detail(name: str) -> BackendInfo:
    caps = get_backend(name)
    if caps is None:
        raise HTTPException(status_code=404, detail=f"Unknown backend: {name}")
    return _info(caps)

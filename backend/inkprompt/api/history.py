"""Per-user history endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from inkprompt.config import Settings
from inkprompt.dependencies import get_history_store, get_settings
from inkprompt.engine.pipeline import analyze_pipeline_performance
from inkprompt.history.store import HistoryStore
from inkprompt.models.pipeline import PipelinePerformance
from inkprompt.models.responses import HistoryEntry, HistoryResponse

router = APIRouter(prefix="/history")


@router.get("/{user_id}", response_model=HistoryResponse)
async def history(
    user_id: str,
    limit: int | None = Query(default=None, ge=1, le=200),
    kind: str | None = Query(default=None, description="pipeline or transfer"),
    settings: Settings = Depends(get_settings),
    store: HistoryStore = Depends(get_history_store),
) -> HistoryResponse:
    records = store.recent(user_id, limit=limit or settings.history_limit, kind=kind)
    entries = []
    for r in records:
        data = asdict(r)
        data.pop("user_id")
        data.pop("stage_impacts")
        entries.append(HistoryEntry(**data))
    return HistoryResponse(user_id=user_id, records=entries)


@router.get("/{user_id}/performance", response_model=PipelinePerformance)
async def performance(
    user_id: str,
    settings: Settings = Depends(get_settings),
    store: HistoryStore = Depends(get_history_store),
) -> PipelinePerformance:
    records = store.recent(user_id, limit=settings.history_limit, kind="pipeline")
    return analyze_pipeline_performance(records)

"""POST /api/enhance — run the enhancement pipeline."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from inkprompt.config import Settings
from inkprompt.dependencies import get_history_store, get_settings
from inkprompt.engine.config import PipelineConfig
from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.errors import UnknownStageError
from inkprompt.engine.pipeline import create_pipeline
from inkprompt.history.store import HistoryStore, persist_record, record_from_pipeline
from inkprompt.models.pipeline import PipelineResult
from inkprompt.models.requests import EnhanceRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/enhance", response_model=PipelineResult)
async def enhance(
    req: EnhanceRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    store: HistoryStore = Depends(get_history_store),
) -> PipelineResult:
    try:
        config = PipelineConfig().with_overrides(
            enabled=req.stages_enabled,
            weights=req.stage_weights,
        )
    except UnknownStageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    backend = req.target_backend or settings.default_backend
    ctx = EnhancementContext(
        target_backend=backend,
        style=req.style,
        technique=req.technique,
        subject=req.subject,
        color_palette=req.color_palette,
        body_zone=req.body_zone,
        preview_mode=req.preview_mode,
        user_preferences=dict(req.user_preferences),
    )
    result = create_pipeline(config).run(req.prompt, ctx)

    if req.user_id:
        background_tasks.add_task(
            persist_record, store, record_from_pipeline(req.user_id, result, backend)
        )
    return result

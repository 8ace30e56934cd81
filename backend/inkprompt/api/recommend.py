"""POST /api/recommend — backend recommendation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from inkprompt.config import Settings
from inkprompt.dependencies import get_history_store, get_settings
from inkprompt.engine.analyzer import analyze_prompt
from inkprompt.engine.recommender import preferences_from_history, recommend_model
from inkprompt.history.store import HistoryStore
from inkprompt.models.recommendation import ModelRecommendation
from inkprompt.models.requests import RecommendRequest

router = APIRouter()


@router.post("/recommend", response_model=ModelRecommendation)
async def recommend(
    req: RecommendRequest,
    settings: Settings = Depends(get_settings),
    store: HistoryStore = Depends(get_history_store),
) -> ModelRecommendation:
    analysis = analyze_prompt(req.prompt, req.style, req.technique, req.subject)
    prefs = req.preferences
    if req.user_id:
        history = store.recent(req.user_id, limit=settings.history_limit)
        prefs = preferences_from_history(history, base=prefs)
    return recommend_model(analysis, prefs)

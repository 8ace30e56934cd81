"""POST /api/analyze — prompt classification."""

from __future__ import annotations

from fastapi import APIRouter

from inkprompt.engine.analyzer import analyze_prompt
from inkprompt.models.analysis import PromptAnalysis
from inkprompt.models.requests import AnalyzeRequest

router = APIRouter()


@router.post("/analyze", response_model=PromptAnalysis)
async def analyze(req: AnalyzeRequest) -> PromptAnalysis:
    return analyze_prompt(req.prompt, req.style, req.technique, req.subject)

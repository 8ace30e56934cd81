"""Style-guide helpers: prompt quality, templates, completions."""

from __future__ import annotations

from fastapi import APIRouter

from inkprompt.engine.style_guides import (
    analyze_prompt_quality,
    generate_prompt_suggestions,
    get_style_templates,
)
from inkprompt.models.quality import PromptQualityReport
from inkprompt.models.requests import QualityRequest, SuggestionsRequest
from inkprompt.models.responses import SuggestionsResponse

router = APIRouter()


@router.post("/quality", response_model=PromptQualityReport)
async def quality(req: QualityRequest) -> PromptQualityReport:
    return analyze_prompt_quality(req.prompt)


@router.get("/styles/templates", response_model=dict[str, list[str]])
async def templates() -> dict[str, list[str]]:
    return get_style_templates()


@router.post("/styles/suggestions", response_model=SuggestionsResponse)
async def suggestions(req: SuggestionsRequest) -> SuggestionsResponse:
    return SuggestionsResponse(
        suggestions=generate_prompt_suggestions(req.partial_prompt, req.count)
    )

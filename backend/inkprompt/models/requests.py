"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from inkprompt.models.recommendation import ModelPreferences


class AnalyzeRequest(BaseModel):
    prompt: str = Field(..., description="Free-text design description")
    style: str | None = None
    technique: str | None = None
    subject: str | None = None


class EnhanceRequest(BaseModel):
    prompt: str = Field(..., description="Free-text design description")
    user_id: str | None = Field(default=None, description="Opaque id; when set the result is recorded")
    target_backend: str | None = Field(default=None, description="Defaults to the configured backend")
    style: str | None = None
    technique: str | None = Field(default=None, description="line_work, shading, dotwork, watercolor, geometric")
    subject: str | None = None
    color_palette: str | None = Field(default=None, description="black_and_gray or color")
    body_zone: str | None = None
    preview_mode: bool = False
    user_preferences: dict[str, str] = Field(default_factory=dict)
    stages_enabled: dict[str, bool] = Field(
        default_factory=dict,
        description="Per-stage enable overrides (e.g., quality_enhancement=False)",
    )
    stage_weights: dict[str, float] = Field(default_factory=dict)


class TransferRequest(BaseModel):
    original_prompt: str = Field(..., description="Prompt written in the source style")
    original_style: str
    target_style: str
    user_id: str | None = None
    preserve_subject: bool = True
    preserve_composition: bool = True
    preserve_color_scheme: bool = False
    target_backend: str | None = None
    custom_instructions: str | None = None


class RecommendRequest(BaseModel):
    prompt: str = Field(..., description="Prompt to recommend a backend for")
    style: str | None = None
    technique: str | None = None
    subject: str | None = None
    user_id: str | None = Field(default=None, description="Learn preferred backends from this user's history")
    preferences: ModelPreferences = Field(default_factory=ModelPreferences)


class QualityRequest(BaseModel):
    prompt: str


class SuggestionsRequest(BaseModel):
    partial_prompt: str
    count: int = Field(default=5, ge=0, le=20)

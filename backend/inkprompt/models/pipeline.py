"""Enhancement pipeline output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StageImprovement(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: str
    before: str
    after: str
    impact: int = 0


class PipelineResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_prompt: str
    enhanced_prompt: str
    stages_applied: list[str] = Field(default_factory=list)
    confidence_score: int = 0
    processing_time_ms: float = 0.0
    improvements: list[StageImprovement] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class PipelinePerformance(BaseModel):
    average_confidence: float = 0.0
    average_processing_time_ms: float = 0.0
    most_effective_stages: list[str] = Field(default_factory=list)
    common_warnings: list[str] = Field(default_factory=list)
    improvement_suggestions: list[str] = Field(default_factory=list)

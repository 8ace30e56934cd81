"""Backend recommendation models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelPreferences(BaseModel):
    prioritize_quality: bool = False
    prioritize_speed: bool = False
    prioritize_cost: bool = False
    preferred_backends: list[str] = Field(default_factory=list)
    avoid_backends: list[str] = Field(default_factory=list)


class ModelRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    backend: str
    confidence: int = 60
    reasoning: list[str] = Field(default_factory=list)
    expected_quality: float = 0.0
    estimated_time_seconds: int = 0
    alternatives: list[str] = Field(default_factory=list)

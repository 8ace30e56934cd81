"""Prompt analysis profile: derived per call, never mutated."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Complexity = Literal["simple", "moderate", "complex"]
ColorRequirement = Literal["black_and_gray", "color", "mixed", "any"]
DetailLevel = Literal["minimal", "moderate", "high", "ultra"]


class PromptAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    complexity: Complexity = "simple"
    color_requirement: ColorRequirement = "any"
    detail_level: DetailLevel = "moderate"
    keywords: list[str] = Field(default_factory=list)
    estimated_size: int = 0
    # Caller hints, carried through for scoring
    style: str | None = None
    subject: str | None = None
    technique: str | None = None

"""Prompt quality report and style enrichment output."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PromptQualityReport(BaseModel):
    score: int = 50
    suggestions: list[str] = Field(default_factory=list)
    missing_elements: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class StyleEnhancement(BaseModel):
    original_prompt: str
    enhanced_prompt: str
    added_elements: list[str] = Field(default_factory=list)
    technical_terms: list[str] = Field(default_factory=list)
    style_specific_terms: list[str] = Field(default_factory=list)
    quality_modifiers: list[str] = Field(default_factory=list)
    confidence: int = 60

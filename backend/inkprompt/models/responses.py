"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0
    tables_version: str = ""


class BackendInfo(BaseModel):
    backend: str
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    best_for: list[str] = Field(default_factory=list)
    style_compatibility: list[str] = Field(default_factory=list)
    quality_score: float = 0.0
    speed_score: float = 0.0
    cost_score: float = 0.0
    max_prompt_length: int = 0
    supported_sizes: list[str] = Field(default_factory=list)


class HistoryEntry(BaseModel):
    kind: str
    original_prompt: str
    final_prompt: str
    confidence: int = 0
    applied: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    warnings: list[str] = Field(default_factory=list)
    backend: str | None = None
    timestamp: float = 0.0


class HistoryResponse(BaseModel):
    user_id: str
    records: list[HistoryEntry] = Field(default_factory=list)


class SuggestionsResponse(BaseModel):
    suggestions: list[str] = Field(default_factory=list)

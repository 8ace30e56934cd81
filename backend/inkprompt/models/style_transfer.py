"""Style transfer request/result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StyleTransferRequest(BaseModel):
    original_prompt: str = Field(..., description="Prompt written in the source style")
    original_style: str = Field(..., description="Source style name")
    target_style: str = Field(..., description="Target style name")
    preserve_subject: bool = True
    preserve_composition: bool = True
    preserve_color_scheme: bool = False
    target_backend: str | None = Field(default=None, description="Backend to adapt the result for")
    custom_instructions: str | None = Field(default=None, description="Appended verbatim")


class TransformedElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    transformed: str
    reason: str = ""


class StyleTransferResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_prompt: str
    transferred_prompt: str
    from_style: str
    to_style: str
    confidence: int = 0
    compatibility_score: int = 0
    estimated_quality: int = 0
    preserved_elements: list[str] = Field(default_factory=list)
    transformed_elements: list[TransformedElement] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class AvailableTransfer(BaseModel):
    from_style: str
    to_style: str
    compatibility: int


class TransferPreview(BaseModel):
    compatibility: int = 0
    preserved_elements: list[str] = Field(default_factory=list)
    modified_elements: list[str] = Field(default_factory=list)
    added_elements: list[str] = Field(default_factory=list)
    removed_elements: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

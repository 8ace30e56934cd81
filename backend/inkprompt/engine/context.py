"""EnhancementContext: the read-only caller input every stage sees.

Stages receive the running prompt text plus this context; they never write to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EnhancementContext:
    """Structured preferences collected alongside the free-text prompt."""

    # Backend identifier, e.g. "balanced-tier"
    target_backend: str = "balanced-tier"
    style: str | None = None
    # line_work, shading, dotwork, watercolor, geometric
    technique: str | None = None
    subject: str | None = None
    # black_and_gray or color
    color_palette: str | None = None
    body_zone: str | None = None
    # True renders on skin, False produces a stencil
    preview_mode: bool = False
    user_preferences: dict[str, Any] = field(default_factory=dict)
    previous_enhancements: tuple[str, ...] = ()

    @property
    def normalized_style(self) -> str | None:
        return self.style.strip().lower() if self.style else None

    @property
    def normalized_zone(self) -> str | None:
        return self.body_zone.strip().lower() if self.body_zone else None

"""Stage 5: quality enhancement."""

from __future__ import annotations

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import stage

QUALITY_TERMS = ("professional quality", "tattoo-ready design", "clean execution")


@stage(
    name="quality_enhancement",
    order=5,
    description="Append the first missing quality term",
)
def quality_enhancement(prompt: str, ctx: EnhancementContext) -> str:
    lowered = prompt.lower()
    for term in QUALITY_TERMS:
        if term not in lowered:
            return f"{prompt}, {term}"
    return prompt

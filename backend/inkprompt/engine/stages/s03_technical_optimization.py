"""Stage 3: technical optimization.

Technique vocabulary first, then a generic resolution qualifier.
"""

from __future__ import annotations

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import stage

TECHNIQUE_TERMS: dict[str, tuple[str, ...]] = {
    "line_work": ("precise lineart", "clean outlines"),
    "shading": ("detailed shading", "gradient work"),
    "dotwork": ("stippling technique", "dot shading"),
    "watercolor": ("flowing colors", "paint-like texture"),
    "geometric": ("precise geometry", "mathematical patterns"),
}

QUALITY_TERMS = ("high resolution", "detailed", "crisp")


@stage(
    name="technical_optimization",
    order=3,
    description="Append technique terms and a resolution qualifier",
)
def technical_optimization(prompt: str, ctx: EnhancementContext) -> str:
    text = prompt
    terms = TECHNIQUE_TERMS.get((ctx.technique or "").strip().lower())
    if terms and terms[0] not in text.lower():
        text = f"{text}, {', '.join(terms)}"

    if not any(term in text.lower() for term in QUALITY_TERMS):
        text = f"{text}, high resolution, detailed"
    return text

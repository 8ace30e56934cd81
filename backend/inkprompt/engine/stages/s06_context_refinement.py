"""Stage 6: context refinement.

Placement phrase for the body zone, then a skin-preview or stencil finish.
"""

from __future__ import annotations

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import stage

ZONE_PHRASES = {
    "arm": "flows with arm contour",
    "forearm": "follows forearm length",
    "sleeve": "full sleeve composition",
    "shoulder": "rounded placement",
    "back": "large canvas design",
    "chest": "heart-centered placement",
    "leg": "follows leg shape",
    "thigh": "large curved canvas",
    "ribs": "follows rib curvature",
    "neck": "fits neck curvature",
    "hand": "small scale detail",
    "wrist": "delicate scale",
    "ankle": "compact design",
}

PREVIEW_MARKER = "realistic skin application"
PREVIEW_PHRASE = "realistic skin application, natural lighting"
STENCIL_PHRASE = "clean stencil design"


@stage(
    name="context_refinement",
    order=6,
    description="Add placement phrase and preview or stencil finish",
)
def context_refinement(prompt: str, ctx: EnhancementContext) -> str:
    text = prompt
    phrase = ZONE_PHRASES.get(ctx.normalized_zone or "")
    if phrase and phrase not in text.lower():
        text = f"{text}, {phrase}"

    if ctx.preview_mode:
        if PREVIEW_MARKER not in text.lower():
            text = f"{text}, {PREVIEW_PHRASE}"
    elif STENCIL_PHRASE not in text.lower():
        text = f"{text}, {STENCIL_PHRASE}"
    return text

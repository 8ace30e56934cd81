"""Stage 2: style enhancement. Only runs when a style was chosen."""

from __future__ import annotations

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import stage
from inkprompt.engine.style_guides import enhance_with_style


@stage(
    name="style_enhancement",
    order=2,
    description="Inject style, palette, placement and subject vocabulary",
)
def style_enhancement(prompt: str, ctx: EnhancementContext) -> str:
    if not ctx.style:
        return prompt
    return enhance_with_style(
        prompt,
        style=ctx.style,
        technique=ctx.technique,
        color_palette=ctx.color_palette,
        body_zone=ctx.body_zone,
        subject=ctx.subject,
        preview_mode=ctx.preview_mode,
    ).enhanced_prompt

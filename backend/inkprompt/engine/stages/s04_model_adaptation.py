"""Stage 4: model adaptation.

Re-analyses the running prompt and rewrites it for the target backend,
truncating to the backend's prompt limit.
"""

from __future__ import annotations

from inkprompt.engine.analyzer import analyze_prompt
from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.recommender import adapt_for_backend
from inkprompt.engine.registry import stage


@stage(
    name="model_adaptation",
    order=4,
    description="Apply backend vocabulary and length limit",
)
def model_adaptation(prompt: str, ctx: EnhancementContext) -> str:
    analysis = analyze_prompt(prompt, ctx.style, ctx.technique, ctx.subject)
    return adapt_for_backend(
        prompt,
        ctx.target_backend,
        analysis,
        style=ctx.style,
        technique=ctx.technique,
    )

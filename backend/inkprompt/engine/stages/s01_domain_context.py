"""Stage 1: domain context.

Makes sure the prompt reads as a professional tattoo request.
"""

from __future__ import annotations

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import stage


@stage(
    name="domain_context",
    order=1,
    description="Prefix tattoo and professional context",
)
def domain_context(prompt: str, ctx: EnhancementContext) -> str:
    text = prompt
    if "tattoo" not in text.lower():
        text = f"tattoo design of {text}"
    if "professional" not in text.lower():
        text = f"professional {text}"
    return text

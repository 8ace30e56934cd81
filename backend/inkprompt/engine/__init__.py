"""InkPrompt prompt engine."""

from inkprompt.engine.analyzer import analyze_prompt
from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.pipeline import EnhancementPipeline, create_pipeline, enhance
from inkprompt.engine.recommender import recommend_model
from inkprompt.engine.registry import get_registry, stage
from inkprompt.engine.style_transfer import transfer_style

__all__ = [
    "analyze_prompt",
    "EnhancementContext",
    "EnhancementPipeline",
    "create_pipeline",
    "enhance",
    "recommend_model",
    "get_registry",
    "stage",
    "transfer_style",
]

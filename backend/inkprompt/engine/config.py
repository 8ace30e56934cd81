"""Pipeline configuration: which stages run and how much each one weighs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from inkprompt.engine.errors import UnknownStageError

# Declaration order is execution order
STAGE_NAMES: tuple[str, ...] = (
    "domain_context",
    "style_enhancement",
    "technical_optimization",
    "model_adaptation",
    "quality_enhancement",
    "context_refinement",
)

DEFAULT_STAGE_WEIGHTS: dict[str, float] = {
    "domain_context": 0.2,
    "style_enhancement": 0.25,
    "technical_optimization": 0.15,
    "model_adaptation": 0.2,
    "quality_enhancement": 0.1,
    "context_refinement": 0.1,
}


@dataclass(frozen=True)
class StageSettings:
    enabled: bool = True
    # Scales the stage's impact figure only
    weight: float = 0.1


def _default_stages() -> dict[str, StageSettings]:
    return {name: StageSettings(True, DEFAULT_STAGE_WEIGHTS[name]) for name in STAGE_NAMES}


@dataclass
class PipelineConfig:
    """Controls stage enablement and the confidence model."""

    stages: dict[str, StageSettings] = field(default_factory=_default_stages)

    # Confidence model
    base_confidence: int = 50
    per_stage_bonus: int = 8
    max_impact_bonus: int = 30
    length_bonus_ratio: float = 1.5  # +10 at this growth
    long_bonus_ratio: float = 2.0  # another +5
    word_penalty_threshold: int = 50
    min_confidence: int = 60
    max_confidence: int = 95

    # Suggestion thresholds (user prompt word count)
    short_prompt_words: int = 5
    long_prompt_words: int = 40

    def __post_init__(self) -> None:
        unknown = set(self.stages) - set(STAGE_NAMES)
        if unknown:
            raise UnknownStageError(f"Unknown stage name(s): {', '.join(sorted(unknown))}")
        # Fill in anything the caller left out
        merged = _default_stages()
        merged.update(self.stages)
        self.stages = merged

    def settings_for(self, stage_name: str) -> StageSettings:
        return self.stages.get(stage_name, StageSettings())

    def is_enabled(self, stage_name: str) -> bool:
        return self.settings_for(stage_name).enabled

    def with_overrides(
        self,
        enabled: dict[str, bool] | None = None,
        weights: dict[str, float] | None = None,
    ) -> PipelineConfig:
        """Return a copy with per-stage overrides applied. Unknown names are rejected."""
        enabled = enabled or {}
        weights = weights or {}
        unknown = (set(enabled) | set(weights)) - set(STAGE_NAMES)
        if unknown:
            raise UnknownStageError(f"Unknown stage name(s): {', '.join(sorted(unknown))}")

        stages = dict(self.stages)
        for name, flag in enabled.items():
            stages[name] = replace(stages[name], enabled=bool(flag))
        for name, weight in weights.items():
            stages[name] = replace(stages[name], weight=max(0.0, min(1.0, float(weight))))
        return replace(self, stages=stages)

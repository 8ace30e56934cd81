"""Enhancement pipeline: runs the registered stages in declaration order and scores the result."""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from inkprompt.engine.config import PipelineConfig
from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.registry import StageRegistry, get_registry, load_builtin_stages
from inkprompt.models.pipeline import PipelinePerformance, PipelineResult, StageImprovement

if TYPE_CHECKING:
    from inkprompt.history.store import HistoryRecord

logger = logging.getLogger(__name__)

EMPTY_PROMPT_OUTPUT = "professional tattoo design"


def _ratio(after: int, before: int) -> float:
    return (after - before) / before if before else float(after > 0)


def stage_impact(before: str, after: str, weight: float) -> int:
    """Weighted length and word-count growth of one stage, as an integer percentage."""
    length_growth = _ratio(len(after), len(before))
    word_growth = _ratio(len(after.split(" ")), len(before.split(" ")))
    return round((length_growth + word_growth) * weight * 100)


class EnhancementPipeline:
    """Orchestrates the enhancement stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, prompt: str, ctx: EnhancementContext | None = None) -> PipelineResult:
        """Enhance a prompt. Never raises for string input."""
        ctx = ctx or EnhancementContext()
        start = time.perf_counter()

        if not prompt or not prompt.strip():
            return PipelineResult(
                original_prompt=prompt or "",
                enhanced_prompt=EMPTY_PROMPT_OUTPUT,
                confidence_score=0,
                processing_time_ms=(time.perf_counter() - start) * 1000,
                warnings=["Empty prompt provided"],
                suggestions=["Please provide a descriptive prompt for better results"],
            )

        current = prompt.strip()
        applied: list[str] = []
        improvements: list[StageImprovement] = []
        warnings: list[str] = []

        ordered = [s for s in self.registry.all() if self.config.is_enabled(s.name)]
        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                result = spec.fn(current, ctx)
                if not isinstance(result, str):
                    raise TypeError(f"returned {type(result).__name__}, expected str")
            except Exception as e:
                warnings.append(f"Stage {spec.name} failed: {e}")
                logger.warning("  %s FAILED: %s", spec.name, e)
                continue

            if result != current:
                weight = self.config.settings_for(spec.name).weight
                improvements.append(
                    StageImprovement(
                        stage=spec.name,
                        before=current,
                        after=result,
                        impact=stage_impact(current, result, weight),
                    )
                )
                applied.append(spec.name)
                current = result
            logger.debug("  %s completed in %.1fms", spec.name, (time.perf_counter() - t0) * 1000)

        confidence = self._confidence(prompt.strip(), current, applied, improvements)
        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages applied in %.0fms",
            len(applied),
            len(ordered),
            total,
        )

        return PipelineResult(
            original_prompt=prompt,
            enhanced_prompt=current,
            stages_applied=applied,
            confidence_score=confidence,
            processing_time_ms=total,
            improvements=improvements,
            warnings=warnings,
            suggestions=self._suggestions(prompt, ctx),
        )

    def _confidence(
        self,
        original: str,
        final: str,
        applied: list[str],
        improvements: list[StageImprovement],
    ) -> int:
        cfg = self.config
        score = cfg.base_confidence + cfg.per_stage_bonus * len(applied)
        score += min(cfg.max_impact_bonus, max(0, sum(i.impact for i in improvements)))

        growth = len(final) / len(original) if original else 0.0
        if growth >= cfg.length_bonus_ratio:
            score += 10
        if growth >= cfg.long_bonus_ratio:
            score += 5
        if len(final.split()) > cfg.word_penalty_threshold:
            score -= 10

        return int(max(cfg.min_confidence, min(cfg.max_confidence, score)))

    def _suggestions(self, prompt: str, ctx: EnhancementContext) -> list[str]:
        suggestions: list[str] = []
        if not ctx.style:
            suggestions.append("Consider specifying a tattoo style (traditional, realistic, etc.)")
        if not ctx.color_palette:
            suggestions.append("Specify color preference (color or black & gray)")
        if not ctx.body_zone:
            suggestions.append("Mention body placement for better composition")

        # Judged on what the user wrote, not on the enhanced text
        words = len(prompt.split())
        if words < self.config.short_prompt_words:
            suggestions.append("Add more descriptive details for better results")
        elif words > self.config.long_prompt_words:
            suggestions.append("Consider shortening the prompt for clarity")
        return suggestions


def create_pipeline(config: PipelineConfig | None = None) -> EnhancementPipeline:
    """Factory function for a pipeline over the built-in stages."""
    return EnhancementPipeline(registry=load_builtin_stages(), config=config)


def enhance(
    prompt: str,
    ctx: EnhancementContext | None = None,
    config: PipelineConfig | None = None,
) -> PipelineResult:
    return create_pipeline(config).run(prompt, ctx)


def analyze_pipeline_performance(records: Iterable[HistoryRecord]) -> PipelinePerformance:
    """Summarise a user's past pipeline runs."""
    runs = [r for r in records if r.kind == "pipeline"]
    if not runs:
        return PipelinePerformance(
            improvement_suggestions=["No enhancement history yet"],
        )

    avg_confidence = sum(r.confidence for r in runs) / len(runs)
    avg_time = sum(r.processing_time_ms for r in runs) / len(runs)

    impacts: dict[str, list[int]] = {}
    for r in runs:
        for name, impact in r.stage_impacts.items():
            impacts.setdefault(name, []).append(impact)
    # Mean impact over the runs where the stage applied
    ranked = sorted(impacts, key=lambda name: sum(impacts[name]) / len(impacts[name]), reverse=True)
    most_effective = ranked[:3]

    warning_counts = Counter(w for r in runs for w in r.warnings)
    common_warnings = [w for w, _ in warning_counts.most_common(3)]

    suggestions: list[str] = []
    if avg_confidence < 70:
        suggestions.append("Add style and placement details to raise enhancement confidence")
    if avg_time > 1000:
        suggestions.append("Disable unused stages to reduce processing time")
    if common_warnings:
        suggestions.append("Review recurring stage warnings")

    return PipelinePerformance(
        average_confidence=round(avg_confidence, 1),
        average_processing_time_ms=round(avg_time, 1),
        most_effective_stages=most_effective,
        common_warnings=common_warnings,
        improvement_suggestions=suggestions,
    )

"""Tests for the enhancement pipeline orchestrator."""

import pytest

from inkprompt.engine.config import STAGE_NAMES, PipelineConfig
from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.pipeline import (
    EMPTY_PROMPT_OUTPUT,
    EnhancementPipeline,
    create_pipeline,
    enhance,
    stage_impact,
)
from inkprompt.engine.registry import StageRegistry, StageSpec
from tests.conftest import LONG_PROMPT, ROSE_PROMPT

FULL_CONTEXT_PROMPT = "a howling wolf under a full moon with pine trees"


def _pipeline(*fns) -> EnhancementPipeline:
    reg = StageRegistry()
    for i, (name, fn) in enumerate(fns, start=1):
        reg.register(StageSpec(name=name, order=i, fn=fn))
    return EnhancementPipeline(registry=reg)


def test_pipeline_runs_stages_in_order():
    calls = []

    def first(prompt, ctx):
        calls.append("first")
        return prompt + " one"

    def second(prompt, ctx):
        calls.append("second")
        return prompt + " two"

    reg = StageRegistry()
    reg.register(StageSpec(name="second", order=2, fn=second))
    reg.register(StageSpec(name="first", order=1, fn=first))

    result = EnhancementPipeline(registry=reg).run("koi")

    assert calls == ["first", "second"]
    assert result.enhanced_prompt == "koi one two"
    assert result.stages_applied == ["first", "second"]


def test_pipeline_handles_stage_errors():
    def boom(prompt, ctx):
        raise ValueError("test error")

    def suffix(prompt, ctx):
        return prompt + ", inked"

    result = _pipeline(("boom", boom), ("suffix", suffix)).run("koi fish")

    assert result.enhanced_prompt == "koi fish, inked"
    assert result.stages_applied == ["suffix"]
    assert result.warnings == ["Stage boom failed: test error"]


def test_non_string_stage_output_is_a_failure():
    result = _pipeline(("bad", lambda p, c: None)).run("koi fish")

    assert result.enhanced_prompt == "koi fish"
    assert result.stages_applied == []
    assert result.warnings[0].startswith("Stage bad failed")


def test_unchanged_output_not_recorded():
    result = _pipeline(("identity", lambda p, c: p)).run("koi fish")

    assert result.stages_applied == []
    assert result.improvements == []


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
def test_empty_prompt_short_circuits(prompt):
    result = create_pipeline().run(prompt, EnhancementContext(style="traditional"))

    assert result.enhanced_prompt == EMPTY_PROMPT_OUTPUT
    assert result.confidence_score == 0
    assert result.stages_applied == []
    assert result.warnings == ["Empty prompt provided"]
    assert result.suggestions == ["Please provide a descriptive prompt for better results"]


def test_rose_traditional_line_work(traditional_ctx):
    result = enhance(ROSE_PROMPT, traditional_ctx)

    text = result.enhanced_prompt.lower()
    assert "tattoo" in text
    assert "traditional" in text
    assert "precise lineart" in text
    assert len(result.enhanced_prompt) <= 1000
    assert result.stages_applied == list(STAGE_NAMES)
    assert result.confidence_score >= 80
    assert [i.stage for i in result.improvements] == list(STAGE_NAMES)


def test_stages_applied_is_subsequence_of_declared_order(full_ctx):
    result = enhance(FULL_CONTEXT_PROMPT, full_ctx)

    positions = [STAGE_NAMES.index(name) for name in result.stages_applied]
    assert positions == sorted(positions)


def test_style_stage_skipped_without_style():
    result = enhance("koi fish swimming upstream", EnhancementContext())

    assert "style_enhancement" not in result.stages_applied
    assert "domain_context" in result.stages_applied


def test_disabled_stage_never_applied(traditional_ctx):
    config = PipelineConfig().with_overrides(enabled={"quality_enhancement": False})
    result = enhance(ROSE_PROMPT, traditional_ctx, config=config)

    assert "quality_enhancement" not in result.stages_applied
    assert len(result.stages_applied) == 5


def test_disabled_stage_keeps_remaining_order(traditional_ctx):
    config = PipelineConfig().with_overrides(
        enabled={"domain_context": False, "model_adaptation": False}
    )
    result = enhance(ROSE_PROMPT, traditional_ctx, config=config)

    assert result.stages_applied == [
        "style_enhancement",
        "technical_optimization",
        "quality_enhancement",
        "context_refinement",
    ]


def test_confidence_clamped_to_floor():
    result = _pipeline(("bang", lambda p, c: p + "!")).run(
        "a long prompt with several words in it already"
    )

    assert result.stages_applied == ["bang"]
    assert result.confidence_score == 60


def test_confidence_clamped_to_ceiling(traditional_ctx):
    result = enhance(ROSE_PROMPT, traditional_ctx)
    assert result.confidence_score == 95


class TestStageImpact:
    def test_length_growth_only(self):
        assert stage_impact("ab", "abcd", 0.5) == 50

    def test_length_and_word_growth(self):
        # (4/3 + 1) * 0.2 * 100
        assert stage_impact("one", "one two", 0.2) == 47

    def test_zero_weight(self):
        assert stage_impact("one", "one two three", 0.0) == 0

    def test_weight_changes_impact_only(self):
        def grow(prompt, ctx):
            return prompt + " more words"

        reg = StageRegistry()
        reg.register(StageSpec(name="domain_context", order=1, fn=grow))
        low = EnhancementPipeline(
            registry=reg,
            config=PipelineConfig().with_overrides(weights={"domain_context": 0.1}),
        ).run("koi")
        high = EnhancementPipeline(
            registry=reg,
            config=PipelineConfig().with_overrides(weights={"domain_context": 0.9}),
        ).run("koi")

        assert low.improvements[0].impact < high.improvements[0].impact
        assert low.stages_applied == high.stages_applied


class TestSuggestions:
    def test_bare_prompt_gets_all_hints(self):
        result = enhance(ROSE_PROMPT, EnhancementContext())

        assert result.suggestions == [
            "Consider specifying a tattoo style (traditional, realistic, etc.)",
            "Specify color preference (color or black & gray)",
            "Mention body placement for better composition",
            "Add more descriptive details for better results",
        ]

    def test_full_context_no_hints(self, full_ctx):
        result = enhance(FULL_CONTEXT_PROMPT, full_ctx)
        assert result.suggestions == []

    def test_long_prompt_hint(self, full_ctx):
        result = enhance(LONG_PROMPT, full_ctx)
        assert result.suggestions == ["Consider shortening the prompt for clarity"]

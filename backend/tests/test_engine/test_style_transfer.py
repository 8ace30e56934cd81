"""Tests for the style transfer engine."""

import re
from dataclasses import replace
from types import MappingProxyType

import pytest

from inkprompt.engine.errors import StyleTransferValidationError
from inkprompt.engine.style_transfer import (
    FALLBACK_WARNING,
    available_transfers,
    is_transfer_supported,
    preview_transfer,
    transfer_compatibility,
    transfer_style,
)
from inkprompt.models.style_transfer import StyleTransferRequest
from tests.conftest import TRADITIONAL_ROSE_PROMPT, WATERCOLOR_PROMPT

RECOGNIZED_STYLES = (
    "traditional",
    "realistic",
    "watercolor",
    "geometric",
    "minimalist",
    "neo-traditional",
    "blackwork",
    "tribal",
    "japanese",
    "fineline",
)


def _request(prompt, from_style, to_style, **kwargs) -> StyleTransferRequest:
    return StyleTransferRequest(
        original_prompt=prompt,
        original_style=from_style,
        target_style=to_style,
        **kwargs,
    )


class TestValidation:
    def test_empty_prompt_rejected(self):
        with pytest.raises(StyleTransferValidationError, match="cannot be empty"):
            transfer_style(_request("   ", "traditional", "realistic"))

    @pytest.mark.parametrize("style", RECOGNIZED_STYLES)
    def test_same_style_rejected(self, style):
        with pytest.raises(StyleTransferValidationError, match="cannot be the same"):
            transfer_style(_request("rose", style, style))
        with pytest.raises(StyleTransferValidationError, match="cannot be the same"):
            transfer_style(_request("rose", style.title(), style.upper()))

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            transfer_style(_request("", "traditional", "realistic"))


class TestTraditionalToRealistic:
    @pytest.fixture
    def result(self):
        return transfer_style(_request(TRADITIONAL_ROSE_PROMPT, "traditional", "realistic"))

    def test_scores(self, result):
        assert result.compatibility_score == 85
        assert len(result.transformed_elements) == 3
        assert result.confidence == 76
        assert result.estimated_quality == 60

    def test_prompt_rewritten(self, result):
        text = result.transferred_prompt.lower()
        assert "photorealistic" in text
        assert "bold black outlines" not in text
        assert "fine detailed linework" in text

    def test_subject_preserved(self, result):
        assert result.preserved_elements[0] == "rose"
        assert "subject" in result.preserved_elements

    def test_no_warnings_and_backend_suggestion(self, result):
        assert result.warnings == []
        assert result.suggestions == ["Consider using realism-tier backend for best results"]

    def test_transformed_element_reasons(self, result):
        reasons = [e.reason for e in result.transformed_elements]
        assert reasons[0] == "Style transfer: traditional -> realistic"
        assert reasons[-1] == "Added for realistic style"


def test_rule_lookup_case_insensitive():
    result = transfer_style(_request(TRADITIONAL_ROSE_PROMPT, "Traditional", "REALISTIC"))
    assert result.compatibility_score == 85


def test_missing_rule_falls_back():
    result = transfer_style(_request("koi", "traditional", "tribal"))

    assert result.confidence == 50
    assert result.compatibility_score == 50
    assert result.estimated_quality == 60
    assert result.preserved_elements == ["subject"]
    assert result.warnings == [FALLBACK_WARNING]
    assert result.transformed_elements[0].reason == "Fallback style enhancement applied"
    assert "tribal" in result.transferred_prompt


def test_low_compatibility_scores_and_warnings():
    result = transfer_style(_request(WATERCOLOR_PROMPT, "watercolor", "blackwork"))

    assert result.compatibility_score == 50
    assert result.confidence == 45
    assert result.estimated_quality == 40
    assert result.warnings == ["Style transfer compatibility is 50% - results may vary"]
    assert "Try the advanced prompt builder for additional refinements" in result.suggestions
    assert "bold, defined, high contrast" in result.transferred_prompt


def test_challenging_transformation_below_fifty(tables):
    rule = tables.transfer_rule("watercolor", "blackwork")
    rules = dict(tables.transfer_rules)
    rules[("watercolor", "blackwork")] = replace(rule, compatibility=40)
    weak = replace(tables, transfer_rules=MappingProxyType(rules))

    result = transfer_style(_request(WATERCOLOR_PROMPT, "watercolor", "blackwork"), tables=weak)

    assert len(result.warnings) == 2
    assert result.warnings[1].startswith("Challenging transformation")
    assert result.confidence == 39


def test_limited_transformations_warning():
    result = transfer_style(_request("koi swimming", "minimalist", "fineline"))
    assert "Limited transformations applied - consider manual refinement" in result.warnings


def test_modify_inserts_after_subject():
    prompt = "traditional eagle with organic feathers"
    kept = transfer_style(_request(prompt, "traditional", "geometric", preserve_subject=True))
    dropped = transfer_style(_request(prompt, "traditional", "geometric", preserve_subject=False))

    assert "eagle stylized with geometric elements" in kept.transferred_prompt
    assert "stylized with geometric elements" not in dropped.transferred_prompt
    assert "geometric patterns, precise angles" in kept.transferred_prompt


def test_modify_not_counted_as_transformation():
    result = transfer_style(_request("traditional rose with flowing petals", "traditional", "geometric"))

    assert "rose stylized with geometric elements" in result.transferred_prompt
    assert [e.reason for e in result.transformed_elements] == [
        "Style transfer: traditional -> geometric",
        "Added for geometric style",
    ]
    # 60 * 0.6 + 2 * 5 + 5 + 5
    assert result.confidence == 56


def test_realistic_target_adds_no_palette():
    result = transfer_style(_request(TRADITIONAL_ROSE_PROMPT, "traditional", "realistic"))
    assert "vibrant colors" not in result.transferred_prompt
    assert "black and gray tattoo" not in result.transferred_prompt


def test_black_and_gray_prompt_keeps_monochrome():
    result = transfer_style(
        _request("black and gray realistic wolf portrait", "realistic", "traditional")
    )
    assert "vibrant colors" not in result.transferred_prompt
    assert "black and gray" in result.transferred_prompt


def test_color_palette_for_colored_target():
    result = transfer_style(_request("realistic koi", "realistic", "traditional"))
    assert "vibrant colors, full color tattoo, rich saturation" in result.transferred_prompt


def test_blackwork_replaces_leftover_color_words():
    result = transfer_style(_request("tribal band with red accents", "tribal", "blackwork"))
    assert not re.search(r"\bred\b", result.transferred_prompt, re.IGNORECASE)
    assert "black ink accents" in result.transferred_prompt


def test_preserved_color_scheme():
    request = _request(
        "tribal koi with red and blue colors",
        "tribal",
        "blackwork",
        preserve_color_scheme=True,
    )
    result = transfer_style(request)

    assert "red and blue colors" in result.transferred_prompt
    assert result.preserved_elements[:2] == ["koi", "red and blue colors"]


def test_target_backend_adaptation():
    result = transfer_style(
        _request(TRADITIONAL_ROSE_PROMPT, "traditional", "realistic", target_backend="realism-tier")
    )
    text = result.transferred_prompt
    assert "suitable for skin application" in text
    assert text.count("tattoo stencil ready") == 1
    assert len(result.transferred_prompt) <= 1000


def test_custom_instructions_appended_last():
    result = transfer_style(
        _request(TRADITIONAL_ROSE_PROMPT, "traditional", "realistic", custom_instructions="on inner forearm")
    )
    assert result.transferred_prompt.endswith(", on inner forearm")


def test_no_double_separators():
    result = transfer_style(_request("classic americana rose, bold lines", "traditional", "realistic"))
    assert ",," not in result.transferred_prompt
    assert " ," not in result.transferred_prompt
    assert "  " not in result.transferred_prompt


class TestRuleIntrospection:
    def test_available_sorted_by_compatibility(self):
        rows = available_transfers()
        assert len(rows) == 10
        assert [r.compatibility for r in rows] == sorted((r.compatibility for r in rows), reverse=True)

    def test_supported(self):
        assert is_transfer_supported("Traditional", "Realistic")
        assert not is_transfer_supported("realistic", "tribal")

    def test_compatibility(self):
        assert transfer_compatibility("geometric", "minimalist") == 90
        assert transfer_compatibility("koi", "carp") == 0

    def test_preview_unsupported(self):
        preview = preview_transfer("realistic", "tribal")
        assert preview.compatibility == 0
        assert preview.warnings == ["Style transfer not supported between these styles"]

    def test_preview_low_compatibility(self):
        preview = preview_transfer("watercolor", "blackwork")
        assert preview.compatibility == 50
        assert preview.warnings == ["Low compatibility - significant changes expected"]
        assert "color elements" in preview.removed_elements

    def test_preview_high_compatibility(self):
        preview = preview_transfer("traditional", "realistic")
        assert preview.warnings == []
        assert preview.preserved_elements == ["subject", "composition", "basic color scheme"]

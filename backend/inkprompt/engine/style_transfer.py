"""Style transfer: rewrites a prompt from one tattoo style into another.

Rules come from the loaded RuleTables. A missing rule falls back to generic
style enrichment; only an empty prompt or identical styles are rejected.
"""

from __future__ import annotations

import logging
import re
import time

from inkprompt.engine.analyzer import analyze_prompt
from inkprompt.engine.errors import StyleTransferValidationError
from inkprompt.engine.recommender import adapt_for_backend
from inkprompt.engine.style_guides import detect_subject, enhance_with_style
from inkprompt.engine.tables import RuleTables, StyleTransferRule, get_tables
from inkprompt.models.style_transfer import (
    AvailableTransfer,
    StyleTransferRequest,
    StyleTransferResult,
    TransferPreview,
    TransformedElement,
)

logger = logging.getLogger(__name__)

MONOCHROME_TARGET = "blackwork"
_COLOR_WORDS = re.compile(
    r"\b(?:colou?r\w*|vibrant|rainbow|red|blue|green|yellow)\b", re.IGNORECASE
)
_COLOR_PHRASE = re.compile(
    r"\b((?:[a-z]+(?:,\s*|\s+and\s+))*[a-z]+\s+colou?rs?)\b", re.IGNORECASE
)

DEFAULT_BACKEND = "realism-tier"

FALLBACK_WARNING = "No specific transfer rule found - using generic style enhancement"
FALLBACK_SUGGESTION = "Consider using a supported style combination for better results"


def _tidy(text: str) -> str:
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\s+,", ",", text)
    text = re.sub(r",(?:\s*,)+", ",", text)
    return text.strip().strip(",").strip()


def _validate(request: StyleTransferRequest) -> None:
    if not request.original_prompt or not request.original_prompt.strip():
        raise StyleTransferValidationError("Original prompt cannot be empty")
    if request.original_style.strip().lower() == request.target_style.strip().lower():
        raise StyleTransferValidationError("Source and target styles cannot be the same")


def _apply_rule(
    prompt: str,
    rule: StyleTransferRule,
    request: StyleTransferRequest,
) -> tuple[str, list[TransformedElement]]:
    text = prompt
    elements: list[TransformedElement] = []
    # sorted() is stable, equal priorities keep table order
    for t in sorted(rule.transformations, key=lambda t: t.priority):
        if t.type == "replace" and t.replacement:
            pattern = re.compile(t.target, re.IGNORECASE)
            if pattern.search(text):
                text = pattern.sub(lambda _m, r=t.replacement: r, text)
                elements.append(TransformedElement(
                    original=t.target,
                    transformed=t.replacement,
                    reason=f"Style transfer: {request.original_style} -> {request.target_style}",
                ))
        elif t.type == "add" and t.replacement:
            text = f"{text}, {t.replacement}"
            elements.append(TransformedElement(
                original="",
                transformed=t.replacement,
                reason=f"Added for {request.target_style} style",
            ))
        elif t.type == "remove":
            pattern = re.compile(t.target, re.IGNORECASE)
            if pattern.search(text):
                text = pattern.sub("", text)
                elements.append(TransformedElement(
                    original=t.target,
                    transformed="[removed]",
                    reason=f"Removed for {request.target_style} style compatibility",
                ))
        elif t.type == "modify":
            if t.condition == "preserve_subject" and request.preserve_subject and t.replacement:
                pattern = re.compile(f"({t.target})", re.IGNORECASE)
                # Rewrites in place without counting as a transformation
                text = pattern.sub(lambda m, r=t.replacement: f"{m.group(1)} {r}", text)
        text = _tidy(text)
    return text, elements


def _preserved_elements(
    request: StyleTransferRequest,
    rule: StyleTransferRule,
    subject: str | None,
) -> list[str]:
    preserved: list[str] = []
    if request.preserve_subject and subject:
        preserved.append(subject)
    if request.preserve_color_scheme:
        preserved.extend(m.strip() for m in _COLOR_PHRASE.findall(request.original_prompt))
    for element in rule.preserved_elements:
        if element not in preserved:
            preserved.append(element)
    return preserved


def transfer_confidence(rule: StyleTransferRule, request: StyleTransferRequest, transformed: int) -> int:
    confidence = rule.compatibility * 6 / 10
    confidence += min(30, transformed * 5)
    if request.preserve_subject:
        confidence += 5
    if request.preserve_composition:
        confidence += 5
    if rule.compatibility < 60:
        confidence -= 10
    return max(30, min(95, round(confidence)))


def transfer_quality(rule: StyleTransferRule, request: StyleTransferRequest, tables: RuleTables) -> int:
    quality = rule.compatibility * 7 / 10
    pair = (request.original_style.lower(), request.target_style.lower())
    if pair in tables.difficult_pairs or pair[::-1] in tables.difficult_pairs:
        quality -= 15
    return max(40, min(90, round(quality)))


def _fallback(request: StyleTransferRequest, tables: RuleTables, start: float) -> StyleTransferResult:
    logger.info(
        "No transfer rule for %s -> %s, using generic enhancement",
        request.original_style,
        request.target_style,
    )
    enhancement = enhance_with_style(request.original_prompt, request.target_style, tables=tables)
    return StyleTransferResult(
        original_prompt=request.original_prompt,
        transferred_prompt=enhancement.enhanced_prompt,
        from_style=request.original_style,
        to_style=request.target_style,
        confidence=50,
        compatibility_score=50,
        estimated_quality=60,
        preserved_elements=["subject"],
        transformed_elements=[TransformedElement(
            original=request.original_prompt,
            transformed=enhancement.enhanced_prompt,
            reason="Fallback style enhancement applied",
        )],
        warnings=[FALLBACK_WARNING],
        suggestions=[FALLBACK_SUGGESTION],
        processing_time_ms=(time.perf_counter() - start) * 1000,
    )


def transfer_style(
    request: StyleTransferRequest,
    tables: RuleTables | None = None,
) -> StyleTransferResult:
    """Rewrite ``request.original_prompt`` into the target style.

    Raises:
        StyleTransferValidationError: empty prompt, or source and target styles match.
    """
    start = time.perf_counter()
    _validate(request)
    tables = tables or get_tables()

    rule = tables.transfer_rule(request.original_style, request.target_style)
    if rule is None:
        return _fallback(request, tables, start)

    target = rule.to_style
    text, elements = _apply_rule(request.original_prompt, rule, request)

    if not request.preserve_color_scheme and target == MONOCHROME_TARGET:
        text = _COLOR_WORDS.sub("black ink", text)

    subject = detect_subject(request.original_prompt, tables)
    palette = None if request.preserve_color_scheme else tables.style_palettes.get(target)
    if palette == "color" and analyze_prompt(request.original_prompt).color_requirement == "black_and_gray":
        palette = None
    text = enhance_with_style(
        text,
        style=target,
        color_palette=palette,
        subject=subject,
        tables=tables,
    ).enhanced_prompt

    if request.target_backend:
        analysis = analyze_prompt(text, style=target)
        text = adapt_for_backend(text, request.target_backend, analysis, style=target, tables=tables)

    if request.custom_instructions:
        text = f"{text}, {request.custom_instructions}"

    confidence = transfer_confidence(rule, request, len(elements))
    quality = transfer_quality(rule, request, tables)

    warnings: list[str] = []
    suggestions: list[str] = []
    if rule.compatibility < 70:
        warnings.append(f"Style transfer compatibility is {rule.compatibility}% - results may vary")
    if rule.compatibility < 50:
        warnings.append(
            f"Challenging transformation: {request.original_style} and {request.target_style} share few elements"
        )
        suggestions.append("Consider an intermediate style or a manual rewrite for best fidelity")
    if len(elements) < 2:
        warnings.append("Limited transformations applied - consider manual refinement")

    optimal = tables.optimal_backends.get(target, DEFAULT_BACKEND)
    suggestions.append(f"Consider using {optimal} backend for best results")
    if confidence < 75:
        suggestions.append("Try the advanced prompt builder for additional refinements")

    total = (time.perf_counter() - start) * 1000
    logger.info(
        "Style transfer %s -> %s: %d transformations, confidence %d in %.0fms",
        rule.from_style,
        target,
        len(elements),
        confidence,
        total,
    )
    return StyleTransferResult(
        original_prompt=request.original_prompt,
        transferred_prompt=text,
        from_style=request.original_style,
        to_style=request.target_style,
        confidence=confidence,
        compatibility_score=rule.compatibility,
        estimated_quality=quality,
        preserved_elements=_preserved_elements(request, rule, subject),
        transformed_elements=elements,
        warnings=warnings,
        suggestions=suggestions,
        processing_time_ms=total,
    )


# == Rule introspection ==


def available_transfers(tables: RuleTables | None = None) -> list[AvailableTransfer]:
    tables = tables or get_tables()
    rows = [
        AvailableTransfer(from_style=r.from_style, to_style=r.to_style, compatibility=r.compatibility)
        for r in tables.transfer_rules.values()
    ]
    return sorted(rows, key=lambda r: r.compatibility, reverse=True)


def is_transfer_supported(from_style: str, to_style: str, tables: RuleTables | None = None) -> bool:
    return (tables or get_tables()).transfer_rule(from_style, to_style) is not None


def transfer_compatibility(from_style: str, to_style: str, tables: RuleTables | None = None) -> int:
    rule = (tables or get_tables()).transfer_rule(from_style, to_style)
    return rule.compatibility if rule else 0


def preview_transfer(from_style: str, to_style: str, tables: RuleTables | None = None) -> TransferPreview:
    """What a transfer between two styles would keep, change, add and drop."""
    rule = (tables or get_tables()).transfer_rule(from_style, to_style)
    if rule is None:
        return TransferPreview(
            compatibility=0,
            warnings=["Style transfer not supported between these styles"],
        )

    warnings: list[str] = []
    if rule.compatibility < 70:
        warnings.append("Low compatibility - significant changes expected")
    if rule.compatibility < 50:
        warnings.append("Very low compatibility - consider alternative target styles")

    return TransferPreview(
        compatibility=rule.compatibility,
        preserved_elements=list(rule.preserved_elements),
        modified_elements=list(rule.modified_elements),
        added_elements=list(rule.added_elements),
        removed_elements=list(rule.removed_elements),
        warnings=warnings,
    )

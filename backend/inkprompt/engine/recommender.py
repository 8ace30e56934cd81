"""Model recommendation: scores every generation backend against a prompt analysis.

Also owns the per-backend adaptation vocabulary shared by the enhancement
pipeline and style transfer.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from inkprompt.engine.tables import ModelCapabilities, RuleTables, get_tables
from inkprompt.models.analysis import PromptAnalysis
from inkprompt.models.recommendation import ModelPreferences, ModelRecommendation

if TYPE_CHECKING:
    from inkprompt.history.store import HistoryRecord

logger = logging.getLogger(__name__)

CLOSING_PHRASE = "tattoo stencil ready, black outline, suitable for skin application"
CLOSING_PARTS = tuple(p.strip() for p in CLOSING_PHRASE.split(","))
TRUNCATION_MARKER = "..."

COMPLEXITY_TIME_FACTOR = {"simple": 0.8, "moderate": 1.0, "complex": 1.3}

_TEXT_SUBJECT = re.compile(r"\b(?:text|lettering|letters|script|quote|words?|name)\b", re.IGNORECASE)
_GEOMETRIC_KEYWORDS = ("geometric", "pattern", "symbol")

MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95


# == Lookups ==


def get_backend(name: str, tables: RuleTables | None = None) -> ModelCapabilities | None:
    return (tables or get_tables()).backend(name)


def all_backends(tables: RuleTables | None = None) -> list[ModelCapabilities]:
    return list((tables or get_tables()).backends)


def estimated_time(backend: str, complexity: str, tables: RuleTables | None = None) -> int:
    """Expected generation time in seconds for a backend at a complexity level."""
    caps = get_backend(backend, tables)
    base = caps.base_generation_seconds if caps else 10
    return round(base * COMPLEXITY_TIME_FACTOR.get(complexity, 1.0))


# == Adaptation ==


def _append(text: str, phrase: str) -> str:
    if phrase.lower() in text.lower():
        return text
    return f"{text}, {phrase}" if text else phrase


def _close(text: str) -> str:
    # Parts already present (e.g. from a stencil phrase) are not repeated
    missing = [p for p in CLOSING_PARTS if p.lower() not in text.lower()]
    return _append(text, ", ".join(missing)) if missing else text


def _backend_phrases(
    caps: ModelCapabilities,
    prompt: str,
    analysis: PromptAnalysis,
    style: str | None,
    technique: str | None,
) -> list[str]:
    style = (style or "").lower()
    phrases: list[str] = []

    if caps.backend == "realism-tier":
        if analysis.detail_level != "ultra":
            phrases.append("highly detailed, photorealistic, professional tattoo quality")
        if technique:
            phrases.append(f"masterful {technique.replace('_', ' ')} technique")
    elif caps.backend == "balanced-tier":
        phrases.append("clean professional tattoo design, well-balanced composition")
        if style == "traditional":
            phrases.append("classic American traditional style")
    elif caps.backend == "artistic-tier":
        phrases.append("artistic tattoo design, creative interpretation")
        if "watercolor" in style:
            phrases.append("watercolor tattoo style, flowing colors")
    elif caps.backend == "typography-tier":
        if _TEXT_SUBJECT.search(analysis.subject or "") or _TEXT_SUBJECT.search(prompt):
            phrases.append("clear typography, readable text, professional lettering")
        if any(k in _GEOMETRIC_KEYWORDS for k in analysis.keywords):
            phrases.append("precise geometric design, clean lines")
    elif caps.backend == "experimental-tier":
        phrases.append("cutting-edge tattoo design, modern interpretation")

    return phrases


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def adapt_for_backend(
    prompt: str,
    backend: str,
    analysis: PromptAnalysis,
    style: str | None = None,
    technique: str | None = None,
    tables: RuleTables | None = None,
) -> str:
    """Inject the backend's vocabulary, close with the stencil phrase, then fit the length limit.

    Unknown backends leave the prompt untouched.
    """
    caps = get_backend(backend, tables)
    if caps is None:
        logger.debug("No capabilities for backend %s, prompt left as-is", backend)
        return prompt

    adapted = prompt
    for phrase in _backend_phrases(caps, prompt, analysis, style or analysis.style, technique or analysis.technique):
        adapted = _append(adapted, phrase)
    adapted = _close(adapted)
    return truncate(adapted, caps.max_prompt_length)


# == Scoring ==


def _score(
    caps: ModelCapabilities,
    analysis: PromptAnalysis,
    prefs: ModelPreferences,
) -> tuple[float, list[str]]:
    score = caps.quality_score * 0.3
    reasoning: list[str] = []

    if analysis.style and analysis.style.lower() in caps.style_compatibility:
        score += 2
        reasoning.append(f"Excellent for {analysis.style} style")

    if analysis.complexity == "complex" and caps.has_trait("realism"):
        score += 2
        reasoning.append("Best for complex, detailed designs")
    elif analysis.complexity == "simple" and caps.has_trait("precision"):
        score += 1.5
        reasoning.append("Efficient for simple designs")

    if analysis.detail_level == "ultra" and caps.has_trait("ultra_detail"):
        score += 1.5
        reasoning.append("Handles ultra-detailed prompts well")

    if analysis.subject:
        subject = analysis.subject.lower()
        if "portrait" in subject and caps.has_trait("portrait"):
            score += 2
            reasoning.append("Excellent for portrait work")
        elif "text" in subject and caps.has_trait("typography"):
            score += 2
            reasoning.append("Best for text and typography")
        elif "geometric" in subject and caps.has_trait("typography"):
            score += 1.5
            reasoning.append("Great for geometric patterns")

    if prefs.prioritize_quality:
        score += caps.quality_score * 0.2
        reasoning.append("High quality prioritized")
    if prefs.prioritize_speed:
        score += caps.speed_score * 0.2
        reasoning.append("Fast generation prioritized")
    if prefs.prioritize_cost:
        score += caps.cost_score * 0.2
        reasoning.append("Cost efficiency prioritized")
    if caps.backend in prefs.preferred_backends:
        score += 1
        reasoning.append("User preferred backend")

    if analysis.estimated_size > caps.max_prompt_length:
        score -= 2
        reasoning.append("Prompt may be too long for this backend")

    return score, reasoning


def rank_backends(
    analysis: PromptAnalysis,
    preferences: ModelPreferences | None = None,
    tables: RuleTables | None = None,
) -> list[tuple[ModelCapabilities, float, list[str]]]:
    """Score every non-avoided backend. Ties keep table order."""
    tables = tables or get_tables()
    prefs = preferences or ModelPreferences()
    avoided = set(prefs.avoid_backends)
    scored = [
        (caps, *_score(caps, analysis, prefs))
        for caps in tables.backends
        if caps.backend not in avoided
    ]
    # sorted() is stable
    return sorted(scored, key=lambda row: row[1], reverse=True)


def recommend_model(
    analysis: PromptAnalysis,
    preferences: ModelPreferences | None = None,
    tables: RuleTables | None = None,
) -> ModelRecommendation:
    """Pick the best backend for an analysed prompt, with up to three alternatives."""
    tables = tables or get_tables()
    ranked = rank_backends(analysis, preferences, tables)

    if not ranked:
        fallback = tables.backends[0]
        logger.info("All backends avoided, falling back to %s", fallback.backend)
        return ModelRecommendation(
            backend=fallback.backend,
            confidence=MIN_CONFIDENCE,
            reasoning=["All backends were excluded, using default backend"],
            expected_quality=fallback.quality_score,
            estimated_time_seconds=estimated_time(fallback.backend, analysis.complexity, tables),
            alternatives=[],
        )

    top, top_score, reasoning = ranked[0]
    confidence = int(round(min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, top_score * 10))))

    logger.debug("Recommended %s (score %.2f, confidence %d)", top.backend, top_score, confidence)
    return ModelRecommendation(
        backend=top.backend,
        confidence=confidence,
        reasoning=reasoning,
        expected_quality=top.quality_score,
        estimated_time_seconds=estimated_time(top.backend, analysis.complexity, tables),
        alternatives=[caps.backend for caps, _, _ in ranked[1:4]],
    )


def preferences_from_history(
    records: Iterable[HistoryRecord],
    base: ModelPreferences | None = None,
    min_confidence: int = 80,
    min_uses: int = 2,
) -> ModelPreferences:
    """Derive preferred backends from a user's past high-confidence results."""
    counts = Counter(
        r.backend for r in records if r.backend and r.confidence >= min_confidence
    )
    learned = [name for name, uses in counts.most_common(2) if uses >= min_uses]
    prefs = base or ModelPreferences()
    merged = list(prefs.preferred_backends)
    merged.extend(name for name in learned if name not in merged)
    return prefs.model_copy(update={"preferred_backends": merged})

"""Prompt analyzer: keyword classification of a raw prompt into a PromptAnalysis.

Never fails: empty input yields the simple / any / moderate defaults.
"""

from __future__ import annotations

import math
import re

from inkprompt.models.analysis import PromptAnalysis

COMPLEXITY_KEYWORDS = ("detailed", "intricate", "complex", "elaborate", "sophisticated")

COLOR_KEYWORDS = (
    "color", "colors", "colored", "colour", "colours", "colourful", "colorful",
    "vibrant", "rainbow", "red", "blue", "green", "yellow", "purple", "orange", "pink",
)
BLACK_AND_GRAY_KEYWORDS = (
    "black", "blackwork", "white", "gray", "grey", "grayscale", "greyscale", "monochrome", "black and white",
)

# Priority order: the first group with a hit wins
DETAIL_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("minimal", ("simple", "clean", "minimal", "basic")),
    ("moderate", ("detailed", "medium", "standard")),
    ("high", ("intricate", "detailed", "complex", "elaborate")),
    ("ultra", ("hyper-detailed", "ultra-detailed", "extremely detailed", "photorealistic")),
)

STOPWORDS = frozenset({
    "the", "and", "with", "that", "this", "for", "are", "was", "will", "have", "been",
    "from", "into", "over", "some", "very", "their", "them", "they", "like", "onto",
})

MAX_KEYWORDS = 10
TOKENS_PER_WORD = 1.3

_TOKEN_STRIP = ".,;:!?\"'()[]{}"


def _has_term(text: str, term: str) -> bool:
    return re.search(rf"(?<![\w-]){re.escape(term)}(?![\w])", text) is not None


def _any_term(text: str, terms: tuple[str, ...]) -> bool:
    return any(_has_term(text, t) for t in terms)


def classify_complexity(tokens: list[str], text: str) -> str:
    if len(tokens) > 20 or any(k in text for k in COMPLEXITY_KEYWORDS):
        return "complex"
    if len(tokens) > 10:
        return "moderate"
    return "simple"


def classify_color(text: str) -> str:
    # Black/gray wins when both vocabularies appear
    if _any_term(text, BLACK_AND_GRAY_KEYWORDS):
        return "black_and_gray"
    if _any_term(text, COLOR_KEYWORDS):
        return "color"
    return "any"


def classify_detail(text: str) -> str:
    for level, keywords in DETAIL_KEYWORDS:
        if any(k in text for k in keywords):
            return level
    return "moderate"


def extract_keywords(tokens: list[str]) -> list[str]:
    seen: list[str] = []
    for raw in tokens:
        token = raw.strip(_TOKEN_STRIP)
        if len(token) <= 3 or token in STOPWORDS or token in seen:
            continue
        seen.append(token)
        if len(seen) == MAX_KEYWORDS:
            break
    return seen


def analyze_prompt(
    prompt: str,
    style: str | None = None,
    technique: str | None = None,
    subject: str | None = None,
) -> PromptAnalysis:
    """Classify a prompt by complexity, color intent, detail level and size."""
    text = (prompt or "").lower()
    tokens = text.split()

    return PromptAnalysis(
        complexity=classify_complexity(tokens, text),
        color_requirement=classify_color(text),
        detail_level=classify_detail(text),
        keywords=extract_keywords(tokens),
        estimated_size=math.ceil(len(tokens) * TOKENS_PER_WORD),
        style=style or None,
        subject=subject or None,
        technique=technique or None,
    )

"""Style-guide enrichment: tattoo vocabulary injected per style, palette, zone and subject.

Every append is presence-checked so running the enrichment twice over the
same text adds nothing the second time.
"""

from __future__ import annotations

import logging

from inkprompt.engine.tables import RuleTables, get_tables
from inkprompt.models.quality import PromptQualityReport, StyleEnhancement

logger = logging.getLogger(__name__)

PALETTE_PHRASES = {
    "black_and_gray": ("black and gray tattoo, monochromatic, grayscale shading", "black and gray technique"),
    "color": ("vibrant colors, full color tattoo, rich saturation", "color saturation"),
}

PREVIEW_PHRASE = "realistic skin application, proper tattoo placement, natural lighting on skin"
STENCIL_PHRASE = "tattoo stencil ready, clean design for application"

# Styles drawn without hard outlines
_NO_OUTLINE_STYLES = ("watercolor", "abstract")

GENERIC_SUGGESTION_TEMPLATES = (
    "{prompt} with bold lines and solid colors",
    "{prompt} in realistic style with detailed shading",
    "{prompt} as minimalist design with clean lines",
    "{prompt} in traditional tattoo style",
    "{prompt} with geometric patterns and precise lines",
)


def _append(text: str, phrase: str) -> tuple[str, bool]:
    if phrase.lower() in text.lower():
        return text, False
    return f"{text}, {phrase}" if text else phrase, True


def subject_enhancement(subject: str | None, tables: RuleTables | None = None) -> str | None:
    """Descriptive phrase for a subject, falling back to its broad category."""
    if not subject:
        return None
    tables = tables or get_tables()
    lowered = subject.lower()
    for key, phrase in tables.subjects.items():
        if key in lowered:
            return phrase
    for category, phrase in tables.subject_categories.items():
        if category in lowered:
            return phrase
    return None


def detect_subject(prompt: str, tables: RuleTables | None = None) -> str | None:
    """First common subject mentioned in the prompt, if any."""
    tables = tables or get_tables()
    lowered = prompt.lower()
    for subject in tables.common_subjects:
        if subject in lowered:
            return subject
    return None


def enhance_with_style(
    prompt: str,
    style: str | None = None,
    technique: str | None = None,
    color_palette: str | None = None,
    body_zone: str | None = None,
    subject: str | None = None,
    preview_mode: bool = False,
    tables: RuleTables | None = None,
) -> StyleEnhancement:
    """Enrich a prompt with style keywords, technique, palette, placement and quality terms."""
    tables = tables or get_tables()
    enhanced = prompt.strip()
    added: list[str] = []
    technical: list[str] = []
    style_terms: list[str] = []
    quality: list[str] = []

    guide = tables.style_guide(style)
    if guide is not None:
        for keyword in guide.prompt_keywords[:2]:
            enhanced, changed = _append(enhanced, keyword)
            if changed:
                style_terms.append(keyword)

        if technique and guide.techniques:
            wanted = technique.replace("_", " ").lower()
            match = next((t for t in guide.techniques if wanted in t.lower()), None)
            if match:
                enhanced, changed = _append(enhanced, match)
                if changed:
                    technical.append(match)

    if color_palette in PALETTE_PHRASES:
        phrase, label = PALETTE_PHRASES[color_palette]
        enhanced, changed = _append(enhanced, phrase)
        if changed:
            technical.append(label)

    zone = body_zone.strip().lower() if body_zone else None
    if zone and tables.body_zones.get(zone):
        enhanced, changed = _append(enhanced, tables.body_zones[zone][0])
        if changed:
            added.append(f"{zone} placement optimization")

    for term in tables.technical_terms.get("quality", ())[:2]:
        enhanced, changed = _append(enhanced, term)
        if changed:
            quality.append(term)

    normalized_style = style.strip().lower() if style else None
    if normalized_style not in _NO_OUTLINE_STYLES and "line" not in enhanced.lower():
        line_term = tables.technical_terms.get("line_work", ("bold outlines",))[0]
        enhanced, changed = _append(enhanced, line_term)
        if changed:
            technical.append(line_term)

    if preview_mode:
        enhanced, changed = _append(enhanced, PREVIEW_PHRASE)
        if changed:
            added.append("skin preview mode")
    else:
        enhanced, changed = _append(enhanced, STENCIL_PHRASE)
        if changed:
            added.append("stencil optimization")

    subject_phrase = subject_enhancement(subject, tables)
    if subject_phrase:
        enhanced, changed = _append(enhanced, subject_phrase)
        if changed:
            added.append(f"{subject} optimization")

    if "tattoo" not in enhanced.lower():
        enhanced = f"{enhanced}, professional tattoo design"
        quality.append("tattoo context")

    confidence = min(95, 60 + len(added) * 5 + len(technical) * 3)

    return StyleEnhancement(
        original_prompt=prompt,
        enhanced_prompt=enhanced,
        added_elements=added,
        technical_terms=technical,
        style_specific_terms=style_terms,
        quality_modifiers=quality,
        confidence=confidence,
    )


def analyze_prompt_quality(prompt: str, tables: RuleTables | None = None) -> PromptQualityReport:
    """Score a user prompt out of 100 and list what it is missing."""
    tables = tables or get_tables()
    lowered = prompt.lower()
    score = 50
    suggestions: list[str] = []
    missing: list[str] = []
    strengths: list[str] = []

    if "tattoo" in lowered:
        score += 10
        strengths.append("Includes tattoo context")
    else:
        missing.append("Tattoo context")
        suggestions.append('Add "tattoo" to clarify the design purpose')

    if any(style in lowered for style in tables.style_guides):
        score += 15
        strengths.append("Style specified")
    else:
        missing.append("Style specification")
        suggestions.append("Specify a tattoo style (traditional, realistic, etc.)")

    all_terms = (t for terms in tables.technical_terms.values() for t in terms)
    if any(t.lower() in lowered for t in all_terms):
        score += 10
        strengths.append("Technical terms included")
    else:
        missing.append("Technical specifications")
        suggestions.append('Add technical terms like "bold lines" or "detailed shading"')

    word_count = len(prompt.split())
    if 5 <= word_count <= 30:
        score += 10
        strengths.append("Good prompt length")
    elif word_count < 5:
        suggestions.append("Add more descriptive details")
        missing.append("Sufficient detail")
    else:
        suggestions.append("Consider shortening for clarity")

    if any(k in lowered for k in ("color", "colour", "black", "gray", "grey")):
        score += 5
        strengths.append("Color preference specified")
    else:
        suggestions.append("Specify color preference (color or black & gray)")

    return PromptQualityReport(
        score=min(100, score),
        suggestions=suggestions,
        missing_elements=missing,
        strengths=strengths,
    )


def get_style_templates(tables: RuleTables | None = None) -> dict[str, list[str]]:
    """Three starter prompts per known style."""
    tables = tables or get_tables()
    templates: dict[str, list[str]] = {}
    for name, g in tables.style_guides.items():
        templates[name] = [
            f"{g.common_elements[0]} in {name} style with {g.characteristics[0].lower()}",
            f"{g.common_elements[1]} featuring {g.techniques[0].lower()} and {g.color_palettes[0].lower()}",
            f"{name} tattoo design with {g.characteristics[1].lower()} and {g.common_elements[2].lower()}",
        ]
    return templates


def generate_prompt_suggestions(
    partial_prompt: str,
    count: int = 5,
    tables: RuleTables | None = None,
) -> list[str]:
    """Complete a partial prompt using the styles it already hints at."""
    tables = tables or get_tables()
    if count <= 0:
        return []
    lowered = partial_prompt.lower()
    suggestions: list[str] = []

    for name, g in tables.style_guides.items():
        hinted = any(k in lowered for k in g.prompt_keywords) or any(
            e.lower() in lowered for e in g.common_elements
        )
        if not hinted:
            continue
        for element in g.common_elements:
            if len(suggestions) >= count:
                break
            suggestions.append(
                f"{partial_prompt} {element.lower()} in {name} style with {g.characteristics[0].lower()}"
            )

    if not suggestions:
        suggestions = [t.format(prompt=partial_prompt) for t in GENERIC_SUGGESTION_TEMPLATES]

    logger.debug("Generated %d suggestions for %r", min(count, len(suggestions)), partial_prompt)
    return suggestions[:count]

"""Static rule and capability tables.

Tables are read from versioned JSON files once at startup and held as a single
immutable ``RuleTables`` snapshot. Reloading builds a complete new snapshot and
swaps the module-level reference; entries are never patched in place.

Usage:
    tables = get_tables()
    caps = tables.backend("realism-tier")
    rule = tables.transfer_rule("traditional", "realistic")
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from inkprompt.engine.errors import TableLoadError

logger = logging.getLogger(__name__)

_DEFAULT_DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class ModelCapabilities:
    """One generation backend row."""

    backend: str
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    best_for: tuple[str, ...]
    style_compatibility: tuple[str, ...]
    quality_score: float
    speed_score: float
    cost_score: float
    max_prompt_length: int
    supported_sizes: tuple[str, ...]
    # realism / ultra_detail / portrait / precision / typography
    traits: frozenset[str] = frozenset()
    base_generation_seconds: int = 10

    def has_trait(self, trait: str) -> bool:
        return trait in self.traits


@dataclass(frozen=True)
class StyleTransformation:
    type: str  # replace, add, remove, modify
    target: str
    replacement: str | None = None
    condition: str | None = None
    priority: int = 0


@dataclass(frozen=True)
class StyleTransferRule:
    from_style: str
    to_style: str
    compatibility: int
    transformations: tuple[StyleTransformation, ...]
    preserved_elements: tuple[str, ...] = ()
    modified_elements: tuple[str, ...] = ()
    added_elements: tuple[str, ...] = ()
    removed_elements: tuple[str, ...] = ()


@dataclass(frozen=True)
class StyleGuide:
    style: str
    characteristics: tuple[str, ...]
    common_elements: tuple[str, ...]
    color_palettes: tuple[str, ...]
    techniques: tuple[str, ...]
    prompt_keywords: tuple[str, ...]
    avoid_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleTables:
    """Immutable snapshot of every static table the engine reads."""

    version: str
    backends: tuple[ModelCapabilities, ...]
    transfer_rules: Mapping[tuple[str, str], StyleTransferRule]
    difficult_pairs: frozenset[tuple[str, str]]
    style_palettes: Mapping[str, str]
    optimal_backends: Mapping[str, str]
    style_guides: Mapping[str, StyleGuide]
    technical_terms: Mapping[str, tuple[str, ...]]
    body_zones: Mapping[str, tuple[str, ...]]
    subjects: Mapping[str, str]
    subject_categories: Mapping[str, str]
    common_subjects: tuple[str, ...] = field(default_factory=tuple)

    def backend(self, name: str | None) -> ModelCapabilities | None:
        if not name:
            return None
        for caps in self.backends:
            if caps.backend == name:
                return caps
        return None

    def transfer_rule(self, from_style: str, to_style: str) -> StyleTransferRule | None:
        return self.transfer_rules.get((from_style.strip().lower(), to_style.strip().lower()))

    def style_guide(self, style: str | None) -> StyleGuide | None:
        if not style:
            return None
        return self.style_guides.get(style.strip().lower())


# == Loading ==


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TableLoadError(f"Cannot read table file {path.name}: {e}") from e


def _backend_from_dict(data: dict[str, Any]) -> ModelCapabilities:
    return ModelCapabilities(
        backend=data["backend"],
        strengths=tuple(data["strengths"]),
        weaknesses=tuple(data["weaknesses"]),
        best_for=tuple(data["best_for"]),
        style_compatibility=tuple(s.lower() for s in data["style_compatibility"]),
        quality_score=float(data["quality_score"]),
        speed_score=float(data["speed_score"]),
        cost_score=float(data["cost_score"]),
        max_prompt_length=int(data["max_prompt_length"]),
        supported_sizes=tuple(data["supported_sizes"]),
        traits=frozenset(data.get("traits", [])),
        base_generation_seconds=int(data.get("base_generation_seconds", 10)),
    )


def _rule_from_dict(data: dict[str, Any]) -> StyleTransferRule:
    transformations = tuple(
        StyleTransformation(
            type=t["type"],
            target=t["target"],
            replacement=t.get("replacement"),
            condition=t.get("condition"),
            priority=int(t.get("priority", 0)),
        )
        for t in data["transformations"]
    )
    for t in transformations:
        if t.type not in ("replace", "add", "remove", "modify"):
            raise TableLoadError(f"Unknown transformation type: {t.type}")
    return StyleTransferRule(
        from_style=data["from_style"].lower(),
        to_style=data["to_style"].lower(),
        compatibility=int(data["compatibility"]),
        transformations=transformations,
        preserved_elements=tuple(data.get("preserved_elements", [])),
        modified_elements=tuple(data.get("modified_elements", [])),
        added_elements=tuple(data.get("added_elements", [])),
        removed_elements=tuple(data.get("removed_elements", [])),
    )


def _guide_from_dict(data: dict[str, Any]) -> StyleGuide:
    return StyleGuide(
        style=data["style"].lower(),
        characteristics=tuple(data["characteristics"]),
        common_elements=tuple(data["common_elements"]),
        color_palettes=tuple(data["color_palettes"]),
        techniques=tuple(data["techniques"]),
        prompt_keywords=tuple(data["prompt_keywords"]),
        avoid_keywords=tuple(data.get("avoid_keywords", [])),
    )


def load_tables(data_dir: Path | None = None) -> RuleTables:
    """Build a fresh RuleTables snapshot from the JSON files in ``data_dir``."""
    data_dir = data_dir or _DEFAULT_DATA_DIR
    backends_doc = _read_json(data_dir / "backends.json")
    rules_doc = _read_json(data_dir / "style_rules.json")
    guides_doc = _read_json(data_dir / "style_guides.json")

    try:
        backends = tuple(_backend_from_dict(b) for b in backends_doc["backends"])

        rules: dict[tuple[str, str], StyleTransferRule] = {}
        for raw in rules_doc["rules"]:
            rule = _rule_from_dict(raw)
            key = (rule.from_style, rule.to_style)
            if key in rules:
                raise TableLoadError(f"Duplicate transfer rule: {key[0]} -> {key[1]}")
            rules[key] = rule

        guides = {g.style: g for g in (_guide_from_dict(d) for d in guides_doc["guides"])}

        tables = RuleTables(
            version=str(backends_doc.get("version", "0")),
            backends=backends,
            transfer_rules=MappingProxyType(rules),
            difficult_pairs=frozenset(
                tuple(p) for p in rules_doc.get("difficult_pairs", [])
            ),
            style_palettes=MappingProxyType(dict(rules_doc.get("style_palettes", {}))),
            optimal_backends=MappingProxyType(dict(rules_doc.get("optimal_backends", {}))),
            style_guides=MappingProxyType(guides),
            technical_terms=MappingProxyType(
                {k: tuple(v) for k, v in guides_doc["technical_terms"].items()}
            ),
            body_zones=MappingProxyType(
                {k: tuple(v) for k, v in guides_doc["body_zones"].items()}
            ),
            subjects=MappingProxyType(dict(guides_doc["subjects"])),
            subject_categories=MappingProxyType(dict(guides_doc.get("subject_categories", {}))),
            common_subjects=tuple(guides_doc.get("common_subjects", [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise TableLoadError(f"Malformed table data in {data_dir}: {e}") from e

    if not tables.backends:
        raise TableLoadError("Capability table has no backends")

    logger.info(
        "Loaded rule tables v%s: %d backends, %d transfer rules, %d style guides",
        tables.version,
        len(tables.backends),
        len(tables.transfer_rules),
        len(tables.style_guides),
    )
    return tables


# Module-level snapshot, replaced whole by swap_tables()
_tables: RuleTables | None = None
_swap_lock = threading.Lock()


def get_tables() -> RuleTables:
    """Return the current snapshot, loading the packaged tables on first use."""
    global _tables
    current = _tables
    if current is not None:
        return current
    with _swap_lock:
        if _tables is None:
            from inkprompt.config import settings

            data_dir = Path(settings.rules_dir) if settings.rules_dir else None
            _tables = load_tables(data_dir)
        return _tables


def swap_tables(tables: RuleTables) -> RuleTables | None:
    """Atomically replace the active snapshot. Returns the previous one."""
    global _tables
    with _swap_lock:
        previous = _tables
        _tables = tables
    logger.info("Rule tables swapped to v%s", tables.version)
    return previous


def reload_tables(data_dir: Path | None = None) -> RuleTables:
    """Load a new snapshot from disk and swap it in."""
    tables = load_tables(data_dir)
    swap_tables(tables)
    return tables

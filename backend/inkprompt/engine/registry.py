"""Stage registry — every enhancement stage is a standalone function registered via decorator.

Usage:
    @stage(name="quality_enhancement", order=5, description="Add quality terms")
    def enhance_quality(prompt: str, ctx: EnhancementContext) -> str:
        return prompt + ", clean execution"

Adding a stage = creating one module under engine/stages with the decorator.
Execution order is the ``order`` field, never registration or import order.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from inkprompt.engine.context import EnhancementContext

logger = logging.getLogger(__name__)

StageFn = Callable[[str, "EnhancementContext"], str]


@dataclass(frozen=True)
class StageSpec:
    name: str
    order: int
    fn: StageFn
    description: str = ""


class StageRegistry:
    """Registry of enhancement stages, iterated in declaration order."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.name in self._stages:
            raise ValueError(f"Duplicate stage name: {spec.name}")
        for existing in self._stages.values():
            if existing.order == spec.order:
                raise ValueError(
                    f"Stage {spec.name} reuses order {spec.order} of {existing.name}"
                )
        self._stages[spec.name] = spec
        logger.debug("Registered stage %s (order %d)", spec.name, spec.order)

    def get(self, name: str) -> StageSpec:
        return self._stages[name]

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: s.order)

    def names(self) -> list[str]:
        return [s.name for s in self.all()]

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(*, name: str, order: int, description: str = ""):
    """Decorator to register a stage function."""

    def decorator(fn: StageFn) -> StageFn:
        _registry.register(StageSpec(name=name, order=order, fn=fn, description=description))
        return fn

    return decorator


def load_builtin_stages() -> StageRegistry:
    """Import every module in engine.stages so @stage decorators fire."""
    package = importlib.import_module("inkprompt.engine.stages")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"inkprompt.engine.stages.{module_name}")
    return _registry

"""Engine exceptions.

Only validation failures reach the caller. Missing rules and lookups fall back,
and stage failures are recorded as pipeline warnings.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine errors."""


class StyleTransferValidationError(EngineError, ValueError):
    """Rejected style transfer request (empty prompt or identical styles)."""


class UnknownStageError(EngineError, ValueError):
    """Stage configuration named a stage the pipeline does not have."""


class TableLoadError(EngineError):
    """A rule or capability table file is missing or malformed."""

"""History store: append-only JSONL record of enhancement and transfer results.

Each line is one HistoryRecord keyed by an opaque user id. The read path
returns a user's most recent records, newest first, for personalization and
performance summaries.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path

from inkprompt.models.pipeline import PipelineResult
from inkprompt.models.style_transfer import StyleTransferResult

logger = logging.getLogger(__name__)

# Default data directory
_DEFAULT_DATA_DIR = Path(__file__).parent / "data"


@dataclass
class HistoryRecord:
    """One persisted engine result."""

    kind: str  # pipeline or transfer
    user_id: str
    original_prompt: str
    final_prompt: str
    confidence: int = 0
    # Stage names for pipeline runs, "from->to" for transfers
    applied: list[str] = field(default_factory=list)
    processing_time_ms: float = 0.0
    warnings: list[str] = field(default_factory=list)
    backend: str | None = None
    stage_impacts: dict[str, int] = field(default_factory=dict)
    timestamp: float = 0.0


class HistoryStore:
    """JSONL-backed record store."""

    def __init__(self, data_dir: Path | None = None) -> None:
        self.data_dir = data_dir or _DEFAULT_DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.records_file = self.data_dir / "history.jsonl"
        self._lock = threading.Lock()

    def append(self, record: HistoryRecord) -> None:
        if not record.timestamp:
            record.timestamp = time.time()
        line = json.dumps(asdict(record), ensure_ascii=False) + "\n"
        with self._lock:
            with open(self.records_file, "a", encoding="utf-8") as f:
                f.write(line)
        logger.info("Recorded %s result for user %s", record.kind, record.user_id)

    def recent(self, user_id: str, limit: int = 20, kind: str | None = None) -> list[HistoryRecord]:
        """Most recent records for a user, newest first."""
        if limit <= 0:
            return []
        matches = [
            r for r in self._load()
            if r.user_id == user_id and (kind is None or r.kind == kind)
        ]
        matches.sort(key=lambda r: r.timestamp, reverse=True)
        return matches[:limit]

    def _load(self) -> list[HistoryRecord]:
        if not self.records_file.exists():
            return []
        records = []
        with open(self.records_file, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(HistoryRecord(**json.loads(line)))
                except (json.JSONDecodeError, TypeError) as e:
                    logger.warning("Skipping unreadable history line: %s", e)
        return records


# Singleton
_store: HistoryStore | None = None


def get_history_store() -> HistoryStore:
    """Get or create the global HistoryStore singleton."""
    global _store
    if _store is None:
        from inkprompt.config import settings

        _store = HistoryStore(Path(settings.history_dir) if settings.history_dir else None)
    return _store


def record_from_pipeline(user_id: str, result: PipelineResult, backend: str | None = None) -> HistoryRecord:
    return HistoryRecord(
        kind="pipeline",
        user_id=user_id,
        original_prompt=result.original_prompt,
        final_prompt=result.enhanced_prompt,
        confidence=result.confidence_score,
        applied=list(result.stages_applied),
        processing_time_ms=result.processing_time_ms,
        warnings=list(result.warnings),
        backend=backend,
        stage_impacts={i.stage: i.impact for i in result.improvements},
    )


def record_from_transfer(user_id: str, result: StyleTransferResult, backend: str | None = None) -> HistoryRecord:
    return HistoryRecord(
        kind="transfer",
        user_id=user_id,
        original_prompt=result.original_prompt,
        final_prompt=result.transferred_prompt,
        confidence=result.confidence,
        applied=[f"{result.from_style}->{result.to_style}"],
        processing_time_ms=result.processing_time_ms,
        warnings=list(result.warnings),
        backend=backend,
    )


def persist_record(store: HistoryStore, record: HistoryRecord) -> None:
    """Fire-and-forget append. Failures are logged, never raised."""
    try:
        store.append(record)
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to persist %s record: %s", record.kind, e)

"""FastAPI dependency injection."""

from __future__ import annotations

from inkprompt.config import settings
from inkprompt.history.store import HistoryStore, get_history_store as _get_history_store


def get_settings():
    return settings


def get_history_store() -> HistoryStore:
    return _get_history_store()

"""Shared test fixtures."""

from __future__ import annotations

import pytest

from inkprompt.engine.context import EnhancementContext
from inkprompt.engine.tables import get_tables, swap_tables
from inkprompt.history.store import HistoryStore


# Sample prompts

ROSE_PROMPT = "rose"

TRADITIONAL_ROSE_PROMPT = "A traditional rose tattoo with bold black outlines"

WATERCOLOR_PROMPT = "soft watercolor rose with vibrant colors"

LONG_PROMPT = " ".join(["ornate"] * 45)


@pytest.fixture
def tables():
    return get_tables()


@pytest.fixture
def restore_tables():
    """Put the original snapshot back after a test swaps tables."""
    original = get_tables()
    yield original
    swap_tables(original)


@pytest.fixture
def traditional_ctx() -> EnhancementContext:
    return EnhancementContext(
        target_backend="balanced-tier",
        style="traditional",
        technique="line_work",
    )


@pytest.fixture
def full_ctx() -> EnhancementContext:
    return EnhancementContext(
        target_backend="realism-tier",
        style="realistic",
        technique="shading",
        subject="wolf",
        color_palette="black_and_gray",
        body_zone="forearm",
    )


@pytest.fixture
def history_store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "history")


@pytest.fixture
def client(history_store):
    from fastapi.testclient import TestClient

    from inkprompt.dependencies import get_history_store
    from inkprompt.main import app

    app.dependency_overrides[get_history_store] = lambda: history_store
    yield TestClient(app)
    app.dependency_overrides.clear()

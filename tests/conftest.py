"""Pytest configuration and fixtures for Idea Diary tests."""

from datetime import datetime, timezone

import pytest

from ideadiary.db import MemoryStorage
from ideadiary.models import Category, Idea, LogEntry, Snapshot
from ideadiary.store import Store


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point data and config directories at a temp dir."""
    home = tmp_path / "home"
    monkeypatch.setenv("IDEADIARY_HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NO_COLOR", "1")
    return home


@pytest.fixture
def storage():
    """Empty in-memory key-value storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Store backed by in-memory storage."""
    return Store.in_memory(storage)


@pytest.fixture
def sample_snapshot():
    """Snapshot with one open idea, one done idea and one log entry."""
    created = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    return Snapshot(
        ideas=[
            Idea(
                id="idea-2",
                text="Buy milk",
                category=Category.PRIVATE,
                created_at=created,
                executed=True,
                executed_at=datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc),
                method="Go to the shop",
                outcome="Bought two",
            ),
            Idea(
                id="idea-1",
                text="Write a paper",
                category=Category.WORK,
                created_at=created,
            ),
        ],
        logs=[
            LogEntry(
                id="log-1",
                method="Ask a question",
                outcome="Got a useful answer",
                created_at=created,
            ),
        ],
    )

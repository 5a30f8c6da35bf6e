"""
Store aggregate for Idea Diary.

The Store is the single owner of all entities. It is built once from the
persistent store and writes through on every change.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any

from ideadiary.config import get_db_path
from ideadiary.db import KeyValueStorage, MemoryStorage, SQLiteStorage
from ideadiary.errors import PersistenceError
from ideadiary.models import Category, Idea, LogEntry, Snapshot
from ideadiary.persistence import PersistentStore
from ideadiary.repository import IdeaRepository, LogRepository

logger = logging.getLogger(__name__)


class Store:
    """Ideas and logs, loaded once and saved after every change."""

    def __init__(self, persistent: PersistentStore):
        self.persistent = persistent
        snapshot = persistent.load()
        self.ideas = IdeaRepository(snapshot.ideas, on_change=self.save)
        self.logs = LogRepository(snapshot.logs, on_change=self.save)

    @classmethod
    def open(cls, db_path: Path | None = None) -> "Store":
        """
        Open the durable SQLite-backed store.

        If the database can't be opened the session continues in memory.
        """
        try:
            return cls(PersistentStore(SQLiteStorage(db_path)))
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not open storage, continuing in memory: %s", e)
            store = cls.in_memory()
            store.diagnostics.append(PersistenceError(f"Could not open storage: {e}"))
            return store

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Store":
        """Open the store at the configured storage path."""
        return cls.open(get_db_path(config))

    @classmethod
    def in_memory(cls, storage: KeyValueStorage | None = None) -> "Store":
        """Open a store that never touches disk."""
        return cls(PersistentStore(storage or MemoryStorage()))

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def diagnostics(self) -> list[PersistenceError]:
        """Persistence problems seen this session."""
        return self.persistent.diagnostics

    def save(self) -> bool:
        """Write the current state through to storage."""
        return self.persistent.save(self.ideas.all(), self.logs.all())

    def close(self) -> None:
        """Final flush at shutdown."""
        self.save()

    def snapshot(self) -> Snapshot:
        """Current state as a Snapshot."""
        return Snapshot(ideas=self.ideas.all(), logs=self.logs.all())

    def restore(self, snapshot: Snapshot) -> None:
        """Replace both collections with a snapshot, saving once."""
        self.ideas.replace_all(snapshot.ideas, notify=False)
        self.logs.replace_all(snapshot.logs)
        logger.info(
            "Restored %d ideas, %d logs", len(snapshot.ideas), len(snapshot.logs)
        )

    # Convenience pass-throughs

    def add_idea(self, text: str, category: Category | str) -> Idea | None:
        return self.ideas.add(text, category)

    def update_field(self, idea_id: str, field: str, value: str) -> Idea | None:
        return self.ideas.update_field(idea_id, field, value)

    def toggle_executed(self, idea_id: str) -> Idea | None:
        return self.ideas.toggle_executed(idea_id)

    def delete_idea(self, idea_id: str) -> bool:
        return self.ideas.delete(idea_id)

    def add_log(self, method: str, outcome: str) -> LogEntry | None:
        return self.logs.add(method, outcome)

    def delete_log(self, log_id: str) -> bool:
        return self.logs.delete(log_id)

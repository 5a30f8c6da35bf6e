"""
Persistent store for Idea Diary.

Loads and saves the full snapshot under two keys. Failures never escape:
a corrupt snapshot is discarded, a rejected write is logged, and the
in-memory state stays authoritative for the rest of the session.
"""

import json
import logging
import sqlite3
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from ideadiary.db import KeyValueStorage
from ideadiary.errors import (
    PersistenceError,
    PersistenceReadCorrupt,
    PersistenceReadFailure,
    PersistenceWriteFailure,
)
from ideadiary.models import Idea, LogEntry, Snapshot

logger = logging.getLogger(__name__)

IDEAS_KEY = "idea_diary_ideas"
LOGS_KEY = "idea_diary_logs"

_ideas_adapter = TypeAdapter(list[Idea])
_logs_adapter = TypeAdapter(list[LogEntry])


def encode_collection(items: Sequence[Idea] | Sequence[LogEntry]) -> str:
    """Serialize a collection to the persisted JSON array form."""
    return json.dumps(
        [item.model_dump(mode="json", by_alias=True) for item in items],
        ensure_ascii=False,
    )


class PersistentStore:
    """Durable load/save of the ideas and logs collections."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.loaded = False
        self.diagnostics: list[PersistenceError] = []

    def load(self) -> Snapshot:
        """
        Read both collections.

        Missing keys load as empty collections. Anything unparseable
        resets both collections and clears both keys. If storage can't be
        read at all, the session starts empty and saving stays disabled so
        the unread data is never overwritten.
        """
        try:
            snapshot = self.peek()
        except PersistenceReadCorrupt as e:
            self._emit(e)
            self._clear()
            snapshot = Snapshot()
        except PersistenceReadFailure as e:
            self._emit(e)
            return Snapshot()

        self.loaded = True

        logger.debug(
            "Loaded %d ideas, %d logs", len(snapshot.ideas), len(snapshot.logs)
        )
        return snapshot

    def peek(self) -> Snapshot:
        """
        Read both collections without recovering.

        Raises PersistenceReadCorrupt or PersistenceReadFailure instead of
        clearing anything.
        """
        return Snapshot(
            ideas=self._read(IDEAS_KEY, _ideas_adapter),
            logs=self._read(LOGS_KEY, _logs_adapter),
        )

    def save(self, ideas: Sequence[Idea], logs: Sequence[LogEntry]) -> bool:
        """
        Write the full snapshot, overwriting prior content.

        Returns True on success. No retry and no rollback on failure.
        """
        if not self.loaded:
            self._emit(PersistenceWriteFailure(
                "Refusing to save without a successful load"
            ))
            return False

        try:
            self.storage.set(IDEAS_KEY, encode_collection(ideas))
            self.storage.set(LOGS_KEY, encode_collection(logs))
        except (sqlite3.Error, OSError) as e:
            self._emit(PersistenceWriteFailure(f"Save failed: {e}"))
            return False
        return True

    def _read(self, key: str, adapter: TypeAdapter) -> list:
        try:
            raw = self.storage.get(key)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceReadFailure(f"Could not read {key}: {e}") from e

        if raw is None:
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceReadCorrupt(f"Malformed {key}: {e}") from e

    def _clear(self) -> None:
        for key in (IDEAS_KEY, LOGS_KEY):
            try:
                self.storage.remove(key)
            except (sqlite3.Error, OSError) as e:
                self._emit(PersistenceWriteFailure(f"Could not clear {key}: {e}"))

    def _emit(self, error: PersistenceError) -> None:
        self.diagnostics.append(error)
        if isinstance(error, PersistenceReadCorrupt):
            logger.warning("Persisted data corrupt, resetting: %s", error)
        else:
            logger.warning("%s", error)

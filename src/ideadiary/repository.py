"""
Repositories for Idea Diary.

Each repository owns one ordered collection, most recent first. Every
operation that changes the collection calls on_change exactly once;
no-ops (blank input, unknown id) don't.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from ideadiary.errors import InvalidFieldError
from ideadiary.ids import generate_id
from ideadiary.models import Category, Idea, LogEntry

logger = logging.getLogger(__name__)

MUTABLE_IDEA_FIELDS = ("method", "outcome")

T = TypeVar("T", Idea, LogEntry)


def _noop() -> None:
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _Repository(Generic[T]):
    def __init__(
        self,
        items: Iterable[T] = (),
        on_change: Callable[[], None] | None = None,
    ):
        self._items: list[T] = list(items)
        self._on_change = on_change or _noop

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> list[T]:
        """Copy of the collection, most recent first."""
        return list(self._items)

    def get(self, item_id: str) -> T | None:
        """Get a single entity by ID."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def resolve(self, prefix: str) -> str | None:
        """Expand an ID prefix to a full ID. None if unknown or ambiguous."""
        if self.get(prefix) is not None:
            return prefix
        matches = [item.id for item in self._items if item.id.startswith(prefix)]
        return matches[0] if prefix and len(matches) == 1 else None

    def delete(self, item_id: str) -> bool:
        """Remove an entity. Returns False if the ID is unknown."""
        index = self._index(item_id)
        if index is None:
            return False
        del self._items[index]
        self._on_change()
        return True

    def replace_all(self, items: Iterable[T], notify: bool = True) -> None:
        """Swap in a whole collection (restore from backup)."""
        self._items = list(items)
        if notify:
            self._on_change()

    def _index(self, item_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _prepend(self, item: T) -> T:
        self._items.insert(0, item)
        self._on_change()
        return item


class IdeaRepository(_Repository[Idea]):
    """CRUD and state transitions over ideas."""

    def add(self, text: str, category: Category | str) -> Idea | None:
        """
        Capture a new idea.

        Blank text is skipped silently and returns None. The text is kept
        as typed, including surrounding whitespace. An unknown category
        raises ValueError.
        """
        if not text.strip():
            logger.debug("Skipped idea with blank text")
            return None

        idea = Idea(
            id=generate_id(),
            text=text,
            category=Category(category),
            created_at=_now(),
        )
        return self._prepend(idea)

    def update_field(self, idea_id: str, field: str, value: str) -> Idea | None:
        """
        Set an idea's method or outcome.

        Raises InvalidFieldError for any other field, even if the ID is
        unknown. Returns None if the ID is unknown.
        """
        if field not in MUTABLE_IDEA_FIELDS:
            raise InvalidFieldError(field)

        index = self._index(idea_id)
        if index is None:
            return None

        updated = self._items[index].model_copy(update={field: value})
        self._items[index] = updated
        self._on_change()
        return updated

    def toggle_executed(self, idea_id: str) -> Idea | None:
        """Flip the executed state, stamping or clearing executed_at."""
        index = self._index(idea_id)
        if index is None:
            return None

        idea = self._items[index]
        if idea.executed:
            update = {"executed": False, "executed_at": None}
        else:
            update = {"executed": True, "executed_at": _now()}

        updated = idea.model_copy(update=update)
        self._items[index] = updated
        self._on_change()
        return updated


class LogRepository(_Repository[LogEntry]):
    """CRUD over free-form log entries."""

    def add(self, method: str, outcome: str) -> LogEntry | None:
        """Record a log entry. Skipped when both fields are blank."""
        if not method.strip() and not outcome.strip():
            logger.debug("Skipped log entry with blank method and outcome")
            return None

        entry = LogEntry(
            id=generate_id(),
            method=method,
            outcome=outcome,
            created_at=_now(),
        )
        return self._prepend(entry)

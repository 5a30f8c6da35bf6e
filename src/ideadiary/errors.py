"""
Error taxonomy for Idea Diary.

Persistence errors are raised inside the storage layer and recovered at
its boundary; they never reach the caller of a Store operation.
"""


class DiaryError(Exception):
    """Base class for all Idea Diary errors."""


class PersistenceError(DiaryError):
    """Durable storage failed."""


class PersistenceReadCorrupt(PersistenceError):
    """Persisted snapshot could not be parsed or validated."""


class PersistenceReadFailure(PersistenceError):
    """Storage could not be read (locked database, unreadable file, ...)."""


class PersistenceWriteFailure(PersistenceError):
    """Storage rejected a write (disk full, read-only file, ...)."""


class InvalidFieldError(DiaryError, ValueError):
    """Only an idea's method and outcome may be updated."""

    def __init__(self, field: str):
        super().__init__(f"Invalid field: {field} (expected 'method' or 'outcome')")
        self.field = field


class SnapshotFormatError(DiaryError, ValueError):
    """An export document could not be imported."""

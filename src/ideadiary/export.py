"""
Export serializer for Idea Diary.

Produces the portable backup document {ideas, logs} and reads it back.
How the document reaches the user (file dialog, directory, mail) is up
to the caller.
"""

import json
from datetime import date
from pathlib import Path

from pydantic import BaseModel, ValidationError, model_validator

from ideadiary.errors import SnapshotFormatError
from ideadiary.models import Idea, LogEntry, Snapshot

FILENAME_TEMPLATE = "idea_diary_backup_{day}.json"


def export_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot: stable field order, 2-space indent."""
    data = snapshot.model_dump(mode="json", by_alias=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


def export_bytes(snapshot: Snapshot) -> bytes:
    """UTF-8 encoded export document."""
    return export_snapshot(snapshot).encode("utf-8")


def backup_filename(day: date | None = None) -> str:
    """Backup filename for a local calendar date (default: today)."""
    day = day or date.today()
    return FILENAME_TEMPLATE.format(day=day.isoformat())


class BackupDocument(BaseModel):
    """Import schema: both collections present, ids unique within each."""

    ideas: list[Idea]
    logs: list[LogEntry]

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "BackupDocument":
        for name, items in (("ideas", self.ideas), ("logs", self.logs)):
            seen = set()
            for item in items:
                if item.id in seen:
                    raise ValueError(f"duplicate id in {name}: {item.id}")
                seen.add(item.id)
        return self


def import_snapshot(document: str | bytes) -> Snapshot:
    """
    Parse an export document.

    Raises SnapshotFormatError if it is not a valid backup.
    """
    try:
        backup = BackupDocument.model_validate_json(document)
    except ValidationError as e:
        raise SnapshotFormatError(f"Not a valid backup: {e}") from e
    return Snapshot(ideas=backup.ideas, logs=backup.logs)


def write_backup(snapshot: Snapshot, directory: Path, day: date | None = None) -> Path:
    """Write the export document into directory. Returns the file path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / backup_filename(day)
    with open(path, "wb") as f:
        f.write(export_bytes(snapshot))
    return path


def read_backup(path: Path) -> Snapshot:
    """Read an export document from disk."""
    with open(path, "rb") as f:
        return import_snapshot(f.read())

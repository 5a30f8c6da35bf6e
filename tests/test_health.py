"""Tests for the health check."""

import sqlite3

from ideadiary.db import SQLiteStorage
from ideadiary.health import check_mail, check_storage, format_health_report
from ideadiary.persistence import IDEAS_KEY, LOGS_KEY


def make_legacy_db(path):
    """Database with the kv table but no schema_version table."""
    conn = sqlite3.connect(path)
    conn.execute(
        "CREATE TABLE kv (key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at TEXT NOT NULL)"
    )
    conn.execute(
        "INSERT INTO kv VALUES (?, '[]', '2024-05-01T10:00:00+00:00')", (IDEAS_KEY,)
    )
    conn.execute(
        "INSERT INTO kv VALUES (?, '[]', '2024-05-01T10:00:00+00:00')", (LOGS_KEY,)
    )
    conn.commit()
    conn.close()


def table_names(path):
    conn = sqlite3.connect(path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


class TestCheckStorage:
    """Test suite for check_storage."""

    def test_missing_database(self, tmp_path):
        """A database that doesn't exist yet is reported, not created."""
        db_path = tmp_path / "diary.db"
        status, message = check_storage({"storage": {"path": str(db_path)}})
        assert (status, message) == ("-", "Not created yet")
        assert not db_path.exists()

    def test_counts(self, tmp_path):
        """A healthy database reports its counts."""
        db_path = tmp_path / "diary.db"
        make_legacy_db(db_path)
        status, message = check_storage({"storage": {"path": str(db_path)}})
        assert status == "✓"
        assert message == "OK (0 ideas, 0 logs)"

    def test_does_not_write(self, tmp_path):
        """Checking never migrates or otherwise writes the database."""
        db_path = tmp_path / "diary.db"
        make_legacy_db(db_path)

        check_storage({"storage": {"path": str(db_path)}})

        assert table_names(db_path) == {"kv"}

    def test_corrupt_data_left_alone(self, tmp_path):
        """Corruption is reported and the stored value kept."""
        db_path = tmp_path / "diary.db"
        SQLiteStorage(db_path).set(IDEAS_KEY, "{broken")

        status, message = check_storage({"storage": {"path": str(db_path)}})

        assert status == "✗"
        assert SQLiteStorage(db_path).get(IDEAS_KEY) == "{broken"


class TestReport:
    """Test suite for the mail check and report."""

    def test_mail_unset(self):
        assert check_mail({"mail": {"recipient": ""}})[0] == "-"

    def test_format(self):
        report = format_health_report({"Mail": ("✓", "OK (me@example.com)")})
        assert report.splitlines()[-1] == "✓ Mail: OK (me@example.com)"

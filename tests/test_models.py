"""Tests for the entity model and identifier generation."""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from ideadiary.ids import fallback_id, generate_id
from ideadiary.models import CATEGORY_LABELS, Category, Idea, LogEntry


NOW = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


class TestCategory:
    """Test suite for the category taxonomy."""

    def test_closed_taxonomy(self):
        """Exactly four categories exist, each with a label."""
        assert [c.value for c in Category] == ["work", "private", "idea", "other"]
        assert set(CATEGORY_LABELS) == set(Category)

    def test_label(self):
        """Category exposes its display label."""
        assert Category.WORK.label == "Work"
        assert Category("private").label == "Private"

    def test_unknown_category(self):
        """Unknown category ids are rejected."""
        with pytest.raises(ValueError):
            Category("shopping")


class TestIdea:
    """Test suite for the Idea model."""

    def test_defaults(self):
        """New ideas are open with empty plan and outcome."""
        idea = Idea(id="a", text="x", category="work", created_at=NOW)
        assert idea.executed is False
        assert idea.executed_at is None
        assert idea.method == ""
        assert idea.outcome == ""

    def test_executed_requires_timestamp(self):
        """executed without executedAt violates the invariant."""
        with pytest.raises(ValidationError):
            Idea(id="a", text="x", category="work", created_at=NOW, executed=True)

    def test_timestamp_requires_executed(self):
        """executedAt without executed violates the invariant."""
        with pytest.raises(ValidationError):
            Idea(id="a", text="x", category="work", created_at=NOW, executed_at=NOW)

    def test_frozen(self):
        """Entities can't be mutated in place."""
        idea = Idea(id="a", text="x", category="work", created_at=NOW)
        with pytest.raises(ValidationError):
            idea.text = "y"

    def test_camel_case_aliases(self):
        """Dumped field names match the persisted schema, in order."""
        idea = Idea(id="a", text="x", category="idea", created_at=NOW)
        data = idea.model_dump(mode="json", by_alias=True)
        assert list(data) == [
            "id", "text", "category", "createdAt",
            "executed", "executedAt", "method", "outcome",
        ]
        assert data["category"] == "idea"
        assert data["executedAt"] is None

    def test_parses_persisted_form(self):
        """Browser-style ISO timestamps load."""
        idea = Idea.model_validate({
            "id": "a",
            "text": "x",
            "category": "other",
            "createdAt": "2024-05-01T10:00:00.000Z",
            "executed": True,
            "executedAt": "2024-05-02T10:00:00.000Z",
            "method": "m",
            "outcome": "o",
        })
        assert idea.created_at == NOW
        assert idea.executed_at.day == 2


class TestLogEntry:
    """Test suite for the LogEntry model."""

    def test_field_order(self):
        """Dumped field names match the persisted schema, in order."""
        entry = LogEntry(id="l", method="m", outcome="o", created_at=NOW)
        data = entry.model_dump(mode="json", by_alias=True)
        assert list(data) == ["id", "method", "outcome", "createdAt"]


class TestGenerateId:
    """Test suite for identifier generation."""

    def test_unique(self):
        """Ids don't repeat within a process."""
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_uuid_preferred(self):
        """The default id is a random UUID."""
        assert uuid.UUID(generate_id()).version == 4

    def test_fallback_without_randomness_source(self, monkeypatch):
        """Falls back to timestamp plus random suffix."""
        def no_urandom():
            raise NotImplementedError

        monkeypatch.setattr("ideadiary.ids.uuid.uuid4", no_urandom)
        entity_id = generate_id()
        timestamp, suffix = entity_id.split("_")
        assert timestamp.isdigit()
        assert int(suffix, 16) >= 0

    def test_fallback_unique(self):
        """Fallback ids are distinct too."""
        assert len({fallback_id() for _ in range(100)}) == 100

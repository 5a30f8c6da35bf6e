"""Tests for the idea and log repositories."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ideadiary.errors import InvalidFieldError
from ideadiary.models import Category
from ideadiary.repository import IdeaRepository, LogRepository


def assert_executed_invariant(ideas):
    for idea in ideas:
        assert idea.executed == (idea.executed_at is not None)


class TestIdeaRepository:
    """Test suite for IdeaRepository."""

    @pytest.fixture
    def on_change(self):
        return MagicMock()

    @pytest.fixture
    def ideas(self, on_change):
        return IdeaRepository(on_change=on_change)

    def test_add(self, ideas, on_change):
        """add builds an open idea and notifies once."""
        before = datetime.now(timezone.utc)
        idea = ideas.add("Write a paper", "work")

        assert idea.text == "Write a paper"
        assert idea.category is Category.WORK
        assert idea.executed is False
        assert idea.executed_at is None
        assert idea.method == ""
        assert idea.outcome == ""
        assert idea.created_at >= before
        assert ideas.all() == [idea]
        on_change.assert_called_once()

    def test_add_prepends(self, ideas):
        """Newest idea comes first."""
        first = ideas.add("first", Category.IDEA)
        second = ideas.add("second", Category.IDEA)
        assert [i.id for i in ideas] == [second.id, first.id]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_add_blank_is_skipped(self, ideas, on_change, text):
        """Blank text leaves the collection unchanged."""
        assert ideas.add(text, "work") is None
        assert len(ideas) == 0
        on_change.assert_not_called()

    def test_add_keeps_text_as_typed(self, ideas):
        """Text is not trimmed."""
        assert ideas.add("  spaced  ", "work").text == "  spaced  "

    def test_add_unknown_category(self, ideas):
        """Categories outside the taxonomy are rejected."""
        with pytest.raises(ValueError):
            ideas.add("x", "shopping")

    @pytest.mark.parametrize("field", ["method", "outcome"])
    def test_update_field(self, ideas, on_change, field):
        """method and outcome are mutable."""
        idea = ideas.add("x", "work")
        on_change.reset_mock()

        updated = ideas.update_field(idea.id, field, "new value")

        assert getattr(updated, field) == "new value"
        assert getattr(ideas.get(idea.id), field) == "new value"
        assert ideas.get(idea.id).text == "x"
        on_change.assert_called_once()

    def test_update_keeps_position(self, ideas):
        """Updating doesn't reorder."""
        older = ideas.add("older", "work")
        ideas.add("newer", "work")
        ideas.update_field(older.id, "method", "m")
        assert [i.text for i in ideas] == ["newer", "older"]

    @pytest.mark.parametrize("field", ["text", "category", "executed", "id", "bogus"])
    def test_update_invalid_field(self, ideas, field):
        """Only method and outcome may be updated."""
        idea = ideas.add("x", "work")
        with pytest.raises(InvalidFieldError):
            ideas.update_field(idea.id, field, "y")
        assert ideas.get(idea.id) == idea

    def test_update_invalid_field_unknown_id(self, ideas):
        """Field is checked even when the ID is unknown."""
        with pytest.raises(InvalidFieldError):
            ideas.update_field("missing", "text", "y")

    def test_update_unknown_id(self, ideas, on_change):
        """Unknown IDs are a no-op."""
        assert ideas.update_field("missing", "method", "y") is None
        on_change.assert_not_called()

    def test_toggle_executed(self, ideas, on_change):
        """Toggling stamps and clears executed_at."""
        idea = ideas.add("x", "work")
        on_change.reset_mock()

        done = ideas.toggle_executed(idea.id)
        assert done.executed is True
        assert done.executed_at is not None

        reopened = ideas.toggle_executed(idea.id)
        assert reopened.executed is False
        assert reopened.executed_at is None
        assert on_change.call_count == 2

    def test_toggle_unknown_id(self, ideas, on_change):
        """Unknown IDs are a no-op."""
        assert ideas.toggle_executed("missing") is None
        on_change.assert_not_called()

    def test_invariant_holds_across_operations(self, ideas):
        """executed iff executed_at, whatever happens."""
        a = ideas.add("a", "work")
        b = ideas.add("b", "private")
        for op in (
            lambda: ideas.toggle_executed(a.id),
            lambda: ideas.update_field(a.id, "outcome", "o"),
            lambda: ideas.toggle_executed(b.id),
            lambda: ideas.toggle_executed(a.id),
            lambda: ideas.delete(b.id),
            lambda: ideas.toggle_executed(a.id),
        ):
            op()
            assert_executed_invariant(ideas)

    def test_delete(self, ideas, on_change):
        """delete removes the idea."""
        idea = ideas.add("x", "work")
        on_change.reset_mock()
        assert ideas.delete(idea.id) is True
        assert len(ideas) == 0
        on_change.assert_called_once()

    def test_delete_unknown_id(self, ideas, on_change):
        """Deleting an unknown ID changes nothing and raises nothing."""
        ideas.add("x", "work")
        before = ideas.all()
        on_change.reset_mock()

        assert ideas.delete("missing") is False
        assert ideas.all() == before
        on_change.assert_not_called()

    def test_resolve_prefix(self, ideas):
        """Unique prefixes expand to full IDs."""
        idea = ideas.add("x", "work")
        assert ideas.resolve(idea.id) == idea.id
        assert ideas.resolve(idea.id[:8]) == idea.id
        assert ideas.resolve("") is None
        assert ideas.resolve("zzzz-not-there") is None

    def test_all_is_a_copy(self, ideas):
        """Callers can't reach into the collection."""
        ideas.add("x", "work")
        ideas.all().clear()
        assert len(ideas) == 1


class TestLogRepository:
    """Test suite for LogRepository."""

    @pytest.fixture
    def on_change(self):
        return MagicMock()

    @pytest.fixture
    def logs(self, on_change):
        return LogRepository(on_change=on_change)

    def test_add_both_blank(self, logs, on_change):
        """Two blank fields leave the collection unchanged."""
        assert logs.add("", "") is None
        assert logs.add("  ", "\n") is None
        assert len(logs) == 0
        on_change.assert_not_called()

    @pytest.mark.parametrize("method, outcome", [("x", ""), ("", "y"), ("x", "y")])
    def test_add_one_field_is_enough(self, logs, on_change, method, outcome):
        """One non-blank field creates an entry."""
        entry = logs.add(method, outcome)
        assert entry.method == method
        assert entry.outcome == outcome
        assert len(logs) == 1
        on_change.assert_called_once()

    def test_add_prepends(self, logs):
        """Newest entry comes first."""
        logs.add("first", "")
        logs.add("second", "")
        assert [e.method for e in logs] == ["second", "first"]

    def test_delete(self, logs):
        """delete removes the entry; unknown IDs are a no-op."""
        entry = logs.add("x", "y")
        assert logs.delete("missing") is False
        assert logs.delete(entry.id) is True
        assert len(logs) == 0

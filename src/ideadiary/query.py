"""
Query engine for Idea Diary.

Pure functions over a snapshot. Nothing here mutates state, and the
underlying most-recent-first order is never changed.
"""

from enum import Enum
from typing import Any, Sequence

from ideadiary.models import Category, Idea, LogEntry, Snapshot


class View(str, Enum):
    """Filter stage applied before search."""

    OPEN = "open"
    ACTION = "action"
    DONE = "done"
    ALL = "all"
    LOG = "log"


def _matches(term: str, *fields: str) -> bool:
    return any(term in (field or "").lower() for field in fields)


def query_ideas(
    ideas: Sequence[Idea],
    view: View | str = View.ALL,
    term: str = "",
) -> list[Idea]:
    """
    Filter ideas by view and search term.

    Search is a case-insensitive substring match on the text or a
    category label (English or the browser app's). open/action keep unexecuted ideas, done keeps
    executed ones, anything else keeps all.
    """
    view = View(view)
    needle = (term or "").lower()

    result = []
    for idea in ideas:
        if view in (View.OPEN, View.ACTION) and idea.executed:
            continue
        if view == View.DONE and not idea.executed:
            continue
        if _matches(needle, idea.text, *idea.category.search_labels):
            result.append(idea)
    return result


def query_logs(logs: Sequence[LogEntry], term: str = "") -> list[LogEntry]:
    """Filter log entries by a search term on method or outcome."""
    needle = (term or "").lower()
    return [log for log in logs if _matches(needle, log.method, log.outcome)]


def query(
    snapshot: Snapshot,
    view: View | str = View.ALL,
    term: str = "",
) -> list[Idea] | list[LogEntry]:
    """Run a view over a snapshot. The log view selects log entries."""
    if View(view) == View.LOG:
        return query_logs(snapshot.logs, term)
    return query_ideas(snapshot.ideas, view, term)


def summarize(snapshot: Snapshot) -> dict[str, Any]:
    """Get collection statistics."""
    done = sum(1 for idea in snapshot.ideas if idea.executed)
    by_category = {category.value: 0 for category in Category}
    for idea in snapshot.ideas:
        by_category[idea.category.value] += 1

    return {
        "total_ideas": len(snapshot.ideas),
        "open_ideas": len(snapshot.ideas) - done,
        "done_ideas": done,
        "by_category": by_category,
        "total_logs": len(snapshot.logs),
    }

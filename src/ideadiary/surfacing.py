"""
Surfacing module for Idea Diary.

Renders query results as terminal text.
"""

import os
from datetime import datetime
from typing import Any, Sequence

from ideadiary.models import Category, Idea, LogEntry

SHORT_ID_LENGTH = 8


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Foreground colors
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"

    # Bright foreground colors
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLACK = "\033[90m"  # Gray

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


CATEGORY_COLORS = {
    Category.WORK: Colors.BRIGHT_BLUE,
    Category.PRIVATE: Colors.BRIGHT_MAGENTA,
    Category.IDEA: Colors.BRIGHT_YELLOW,
    Category.OTHER: Colors.BRIGHT_BLACK,
}


def short_id(entity_id: str) -> str:
    """Shorten an ID for display. Any unique prefix resolves back."""
    return entity_id[:SHORT_ID_LENGTH]


def format_timestamp(value: datetime | None) -> str:
    """Month/day hour:minute in local time."""
    if value is None:
        return ""
    return value.astimezone().strftime("%m/%d %H:%M")


def format_ideas(ideas: Sequence[Idea], title: str = "IDEAS") -> str:
    """Format ideas as a colored table."""
    if not ideas:
        return c("No ideas found.", Colors.DIM)

    lines = [c(f"━━━ {title} ━━━", Colors.BOLD, Colors.BLUE), ""]
    lines.append(c(f"{'ID':8}  {'CREATED':11}  {'CATEGORY':8}  TEXT", Colors.DIM))
    lines.append(c("─" * 70, Colors.DIM))

    for idea in ideas:
        text = idea.text.strip().replace("\n", " ")[:40]
        category = c(f"{idea.category.label:8}", CATEGORY_COLORS[idea.category])
        extra = ""
        if idea.executed:
            extra = c(f" [done {format_timestamp(idea.executed_at)}]", Colors.GREEN)
        elif idea.method:
            extra = c(" [plan]", Colors.YELLOW)

        lines.append(
            f"{c(short_id(idea.id), Colors.DIM)}  "
            f"{format_timestamp(idea.created_at):11}  {category}  {text}{extra}"
        )

    return "\n".join(lines)


def format_logs(logs: Sequence[LogEntry], title: str = "LOG") -> str:
    """Format log entries, one block per entry."""
    if not logs:
        return c("No log entries found.", Colors.DIM)

    lines = [c(f"━━━ {title} ━━━", Colors.BOLD, Colors.BLUE), ""]
    for entry in logs:
        header = f"{short_id(entry.id)}  {format_timestamp(entry.created_at)}"
        lines.append(c(header, Colors.DIM))
        if entry.method:
            lines.append(f"  A: {entry.method}")
        if entry.outcome:
            lines.append(f"  B: {entry.outcome}")
        lines.append("")

    return "\n".join(lines).rstrip()


def format_idea_detail(idea: Idea) -> str:
    """Format a single idea with its plan and outcome."""
    state = c("done", Colors.GREEN) if idea.executed else c("open", Colors.YELLOW)
    lines = [
        c(idea.text, Colors.BOLD),
        f"id:       {idea.id}",
        f"category: {idea.category.label}",
        f"created:  {format_timestamp(idea.created_at)}",
        f"state:    {state}",
    ]
    if idea.executed:
        lines.append(f"executed: {format_timestamp(idea.executed_at)}")
    if idea.method:
        lines.append(f"method:   {idea.method}")
    if idea.outcome:
        lines.append(f"outcome:  {idea.outcome}")
    return "\n".join(lines)


def format_stats(stats: dict[str, Any]) -> str:
    """Format collection statistics."""
    lines = ["Idea Diary Statistics", "-" * 30]
    lines.append(f"Ideas: {stats['total_ideas']} "
                 f"({stats['open_ideas']} open, {stats['done_ideas']} done)")
    lines.append("\nBy category:")
    for category in Category:
        lines.append(f"  {category.label}: {stats['by_category'][category.value]}")
    lines.append(f"\nLog entries: {stats['total_logs']}")
    return "\n".join(lines)

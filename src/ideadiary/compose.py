"""
Outbound message hand-off for Idea Diary.

Builds a mailto: URL and hands it to the desktop mail client. Whether the
message is ever sent is out of our hands.
"""

import logging
import webbrowser
from typing import Callable
from urllib.parse import quote

from ideadiary.models import Idea, LogEntry

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides alphanumerics and -_.~
URI_COMPONENT_SAFE = "!*'()"


def encode_component(value: str | None) -> str:
    """Percent-encode a mailto: header value."""
    return quote(value or "", safe=URI_COMPONENT_SAFE)


def build_mailto(subject: str | None, body: str | None, recipient: str = "") -> str:
    """Build a mailto: URL with encoded subject and body."""
    return (
        f"mailto:{recipient}"
        f"?subject={encode_component(subject)}"
        f"&body={encode_component(body)}"
    )


def compose_message(
    subject: str | None,
    body: str | None,
    recipient: str = "",
    opener: Callable[[str], bool] | None = None,
) -> str:
    """
    Open a pre-filled message in the mail client.

    The opener defaults to the desktop's URL handler. Returns the
    mailto: URL that was handed off.
    """
    opener = opener or webbrowser.open
    url = build_mailto(subject, body, recipient)
    if not opener(url):
        logger.info("No mail client accepted the message")
    return url


# Message templates

def idea_notification(idea: Idea) -> tuple[str, str]:
    """Share a freshly captured idea."""
    return "Idea", idea.text


def action_plan(idea: Idea) -> tuple[str, str]:
    """Share an open idea with its plan."""
    return "Action plan", f"Idea: {idea.text}\nMethod: {idea.method}"


def completion_report(idea: Idea) -> tuple[str, str]:
    """Report on an executed idea."""
    return (
        "Completion report",
        f"Idea: {idea.text}\nMethod: {idea.method}\nOutcome: {idea.outcome}",
    )


def free_log(entry: LogEntry) -> tuple[str, str]:
    """Share a log entry."""
    return "Free log", f"A: {entry.method}\nB: {entry.outcome}"


def message_for_idea(idea: Idea) -> tuple[str, str]:
    """Pick the template matching the idea's state."""
    if idea.executed:
        return completion_report(idea)
    if idea.method:
        return action_plan(idea)
    return idea_notification(idea)

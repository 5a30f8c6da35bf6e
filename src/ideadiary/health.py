"""
Health check module for Idea Diary.

Reports system status across all components.
"""

from typing import Any

from ideadiary.config import get_config_path, get_db_path, load_config


def check_config() -> tuple[str, str]:
    """Check the config file parses."""
    config_path = get_config_path()
    if not config_path.exists():
        return "-", "Using defaults"

    try:
        load_config()
        return "✓", f"OK ({config_path})"
    except Exception as e:
        return "✗", f"Error: {e}"


def check_storage(config: dict[str, Any]) -> tuple[str, str]:
    """Check the database opens and the snapshot loads cleanly."""
    db_path = get_db_path(config)
    if not db_path.exists():
        return "-", "Not created yet"

    from ideadiary.db import SQLiteStorage
    from ideadiary.persistence import PersistentStore
    from ideadiary.query import summarize

    try:
        snapshot = PersistentStore(SQLiteStorage(db_path, read_only=True)).peek()
    except Exception as e:
        return "✗", f"Error: {e}"

    stats = summarize(snapshot)
    return "✓", f"OK ({stats['total_ideas']} ideas, {stats['total_logs']} logs)"


def check_mail(config: dict[str, Any]) -> tuple[str, str]:
    """Check a mail recipient is configured."""
    recipient = config.get("mail", {}).get("recipient", "")
    if not recipient:
        return "-", "No recipient (mail client will ask)"
    return "✓", f"OK ({recipient})"


def run_health_check() -> dict[str, tuple[str, str]]:
    """Run all health checks."""
    config_status = check_config()
    config = load_config() if config_status[0] != "✗" else {}
    return {
        "Config": config_status,
        "Storage": check_storage(config),
        "Mail": check_mail(config),
    }


def format_health_report(checks: dict[str, tuple[str, str]]) -> str:
    """Format health check results."""
    lines = ["Idea Diary Health Check", "-" * 40]

    for name, (status, message) in checks.items():
        lines.append(f"{status} {name}: {message}")

    return "\n".join(lines)

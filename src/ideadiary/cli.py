"""
CLI for Idea Diary.

Minimal CLI using stdlib for fast startup on the capture path.
Subcommands are imported lazily to avoid startup overhead.

Usage:
    ideadiary "your idea here"      # Capture (primary interface)
    ideadiary list                  # Show open ideas
    ideadiary --help                # Show help
"""

import sys

DEFAULT_CATEGORY = "work"


def print_help() -> None:
    """Print help message."""
    print("""ideadiary - local-only idea journal

Usage:
    ideadiary "your idea here"        Capture an idea (category: work)

Commands:
    ideadiary add [-c CAT] <text>     Capture an idea (work, private, idea, other)
    ideadiary log -m <A> -o <B>       Record a cause/effect log entry
    ideadiary list [-v VIEW] [-s T]   List ideas (open, action, done, all)
    ideadiary logs [-s T]             List log entries
    ideadiary find <term>             Search ideas and logs
    ideadiary show <id>               Show an idea in full
    ideadiary done <id>               Toggle an idea executed/open
    ideadiary plan <id> <text>        Set an idea's method (how)
    ideadiary outcome <id> <text>     Set an idea's outcome (result)
    ideadiary delete idea|log <id>    Delete (asks first, -y to skip)
    ideadiary export [dir]            Write idea_diary_backup_<date>.json
    ideadiary import <file> [-y]      Replace everything with a backup
    ideadiary mail <id>               Hand an idea or log to the mail client
    ideadiary stats                   Show statistics
    ideadiary health                  Show health check

Options:
    ideadiary --help, -h              Show this help
    ideadiary --version, -v           Show version

IDs may be shortened to any unique prefix.""")


def print_version() -> None:
    """Print version."""
    from ideadiary import __version__
    print(f"ideadiary {__version__}")


def setup_logging(config: dict) -> None:
    """Configure stderr logging at the configured level."""
    import logging

    level = config.get("logging", {}).get("level", "WARNING")
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, str(level).upper(), logging.WARNING),
    )


def open_store():
    """Load config, set up logging and open the store."""
    from ideadiary.config import ensure_dirs, load_config
    from ideadiary.store import Store

    config = load_config()
    setup_logging(config)
    ensure_dirs()
    return Store.from_config(config), config


def pop_option(args: list[str], *names: str) -> tuple[str | None, list[str]]:
    """Remove `--name value` from args. Returns (value, remaining args)."""
    rest = []
    value = None
    i = 0
    while i < len(args):
        if args[i] in names and i + 1 < len(args):
            value = args[i + 1]
            i += 2
        else:
            rest.append(args[i])
            i += 1
    return value, rest


def pop_flag(args: list[str], *names: str) -> tuple[bool, list[str]]:
    """Remove a boolean flag from args."""
    rest = [arg for arg in args if arg not in names]
    return len(rest) != len(args), rest


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on the terminal."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def resolve_idea(store, prefix: str) -> str | None:
    """Expand an idea ID prefix, reporting failures."""
    idea_id = store.ideas.resolve(prefix)
    if idea_id is None:
        print(f"Idea not found (or ambiguous): {prefix}", file=sys.stderr)
    return idea_id


def capture(text: str, category: str = DEFAULT_CATEGORY) -> int:
    """Capture an idea and print its ID."""
    store, _ = open_store()
    with store:
        idea = store.add_idea(text, category)
    if idea is None:
        print("Error: Empty idea", file=sys.stderr)
        return 1
    print(idea.id)
    return 0


def cmd_add(args: list[str]) -> int:
    """Capture an idea with an explicit category."""
    from ideadiary.models import Category

    category, rest = pop_option(args, "--category", "-c")
    category = category or DEFAULT_CATEGORY
    if category not in {c.value for c in Category}:
        choices = ", ".join(c.value for c in Category)
        print(f"Error: Invalid category '{category}' (one of: {choices})", file=sys.stderr)
        return 1

    return capture(" ".join(rest), category)


def cmd_log(args: list[str]) -> int:
    """Record a log entry."""
    method, rest = pop_option(args, "--method", "-m")
    outcome, rest = pop_option(rest, "--outcome", "-o")
    if method is None and rest:
        method = " ".join(rest)

    store, _ = open_store()
    with store:
        entry = store.add_log(method or "", outcome or "")
    if entry is None:
        print("Usage: ideadiary log -m <what you did> -o <what happened>", file=sys.stderr)
        return 1
    print(entry.id)
    return 0


def cmd_list(args: list[str]) -> int:
    """List ideas in a view."""
    from ideadiary.query import View, query_ideas
    from ideadiary.surfacing import format_ideas

    view, rest = pop_option(args, "--view", "-v")
    term, rest = pop_option(rest, "--search", "-s")
    view = view or View.OPEN.value
    if view not in (View.OPEN, View.ACTION, View.DONE, View.ALL):
        print(f"Error: Invalid view '{view}' (open, action, done, all)", file=sys.stderr)
        return 1

    store, _ = open_store()
    ideas = query_ideas(store.ideas.all(), view, term or "")
    print(format_ideas(ideas, title=f"{view.upper()} IDEAS"))
    return 0


def cmd_logs(args: list[str]) -> int:
    """List log entries."""
    from ideadiary.query import query_logs
    from ideadiary.surfacing import format_logs

    term, _ = pop_option(args, "--search", "-s")
    store, _ = open_store()
    print(format_logs(query_logs(store.logs.all(), term or "")))
    return 0


def cmd_find(args: list[str]) -> int:
    """Search ideas and logs."""
    from ideadiary.query import View, query
    from ideadiary.surfacing import format_ideas, format_logs

    if not args:
        print("Usage: ideadiary find <term>", file=sys.stderr)
        return 1

    term = " ".join(args)
    store, _ = open_store()
    snapshot = store.snapshot()
    print(format_ideas(query(snapshot, View.ALL, term), title=f"SEARCH: {term}"))
    print()
    print(format_logs(query(snapshot, View.LOG, term), title=f"LOG SEARCH: {term}"))
    return 0


def cmd_show(args: list[str]) -> int:
    """Show one idea."""
    from ideadiary.surfacing import format_idea_detail

    if not args:
        print("Usage: ideadiary show <id>", file=sys.stderr)
        return 1

    store, _ = open_store()
    idea_id = resolve_idea(store, args[0])
    if idea_id is None:
        return 1
    print(format_idea_detail(store.ideas.get(idea_id)))
    return 0


def cmd_done(args: list[str]) -> int:
    """Toggle an idea's executed state."""
    if not args:
        print("Usage: ideadiary done <id>", file=sys.stderr)
        return 1

    store, _ = open_store()
    idea_id = resolve_idea(store, args[0])
    if idea_id is None:
        return 1
    with store:
        idea = store.toggle_executed(idea_id)
    print(f"{'Done' if idea.executed else 'Reopened'}: {idea.text}")
    return 0


def cmd_update(field: str, args: list[str]) -> int:
    """Set an idea's method or outcome."""
    if len(args) < 2:
        print(f"Usage: ideadiary {'plan' if field == 'method' else field} <id> <text>",
              file=sys.stderr)
        return 1

    store, _ = open_store()
    idea_id = resolve_idea(store, args[0])
    if idea_id is None:
        return 1
    with store:
        store.update_field(idea_id, field, " ".join(args[1:]))
    print(f"Updated {field}: {idea_id}")
    return 0


def cmd_delete(args: list[str]) -> int:
    """Delete an idea or log entry after confirmation."""
    yes, args = pop_flag(args, "--yes", "-y")
    if len(args) < 2 or args[0] not in ("idea", "log"):
        print("Usage: ideadiary delete idea|log <id> [--yes]", file=sys.stderr)
        return 1

    kind, prefix = args[0], args[1]
    store, _ = open_store()
    repo = store.ideas if kind == "idea" else store.logs
    entity_id = repo.resolve(prefix)
    if entity_id is None:
        print(f"Not found (or ambiguous): {prefix}", file=sys.stderr)
        return 1

    if not yes and not confirm(f"Delete {kind} {entity_id}?"):
        print("Cancelled.")
        return 0

    with store:
        repo.delete(entity_id)
    print(f"Deleted: {entity_id}")
    return 0


def cmd_export(args: list[str]) -> int:
    """Write a backup document."""
    from pathlib import Path

    from ideadiary.export import write_backup

    directory = Path(args[0]) if args else Path.cwd()
    store, _ = open_store()
    try:
        path = write_backup(store.snapshot(), directory)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Exported: {path}")
    return 0


def cmd_import(args: list[str]) -> int:
    """Replace all data with a backup document."""
    from pathlib import Path

    from ideadiary.errors import SnapshotFormatError
    from ideadiary.export import read_backup

    yes, args = pop_flag(args, "--yes", "-y")
    if not args:
        print("Usage: ideadiary import <file> [--yes]", file=sys.stderr)
        return 1

    try:
        snapshot = read_backup(Path(args[0]))
    except (OSError, SnapshotFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not yes and not confirm(
        f"Replace all data with {len(snapshot.ideas)} ideas and {len(snapshot.logs)} logs?"
    ):
        print("Cancelled.")
        return 0

    store, _ = open_store()
    with store:
        store.restore(snapshot)
    print(f"Imported: {len(snapshot.ideas)} ideas, {len(snapshot.logs)} logs")
    return 0


def cmd_mail(args: list[str]) -> int:
    """Hand an idea or log entry to the mail client."""
    from ideadiary.compose import compose_message, free_log, message_for_idea

    if not args:
        print("Usage: ideadiary mail <id>", file=sys.stderr)
        return 1

    store, config = open_store()
    recipient = config.get("mail", {}).get("recipient", "")

    if idea_id := store.ideas.resolve(args[0]):
        subject, body = message_for_idea(store.ideas.get(idea_id))
    elif log_id := store.logs.resolve(args[0]):
        subject, body = free_log(store.logs.get(log_id))
    else:
        print(f"Not found (or ambiguous): {args[0]}", file=sys.stderr)
        return 1

    print(compose_message(subject, body, recipient))
    return 0


def cmd_stats() -> int:
    """Show statistics."""
    from ideadiary.query import summarize
    from ideadiary.surfacing import format_stats

    store, _ = open_store()
    print(format_stats(summarize(store.snapshot())))
    return 0


def cmd_health() -> int:
    """Show health check."""
    from ideadiary.health import format_health_report, run_health_check

    print(format_health_report(run_health_check()))
    return 0


def dispatch(args: list[str]) -> int:
    """Route a command line to its handler."""
    first_arg = args[0]
    rest = args[1:]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    commands = {
        "add": lambda: cmd_add(rest),
        "log": lambda: cmd_log(rest),
        "list": lambda: cmd_list(rest),
        "logs": lambda: cmd_logs(rest),
        "find": lambda: cmd_find(rest),
        "show": lambda: cmd_show(rest),
        "done": lambda: cmd_done(rest),
        "plan": lambda: cmd_update("method", rest),
        "outcome": lambda: cmd_update("outcome", rest),
        "delete": lambda: cmd_delete(rest),
        "export": lambda: cmd_export(rest),
        "import": lambda: cmd_import(rest),
        "mail": lambda: cmd_mail(rest),
        "stats": cmd_stats,
        "health": cmd_health,
    }
    if handler := commands.get(first_arg):
        return handler()

    # Everything else is an idea to capture
    text = " ".join(args)
    if not text.strip():
        print("Error: Empty idea", file=sys.stderr)
        return 1
    return capture(text)


def main() -> int:
    """
    Main entry point.

    Optimized for minimal startup time on the capture path.
    """
    args = sys.argv[1:]

    # No args - check for piped input
    if not args:
        if not sys.stdin.isatty():
            text = sys.stdin.read().strip()
            if text:
                return capture(text)
        print_help()
        return 0

    try:
        return dispatch(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

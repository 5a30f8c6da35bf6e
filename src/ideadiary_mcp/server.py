"""
MCP Server for Idea Diary.

Exposes the diary as tools for MCP clients.
"""

import logging
import os

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ideadiary.config import ensure_dirs, load_config
from ideadiary.errors import DiaryError
from ideadiary.export import export_snapshot
from ideadiary.models import Category
from ideadiary.query import View, query_ideas, query_logs, summarize
from ideadiary.store import Store
from ideadiary.surfacing import format_ideas, format_logs, format_stats

logger = logging.getLogger(__name__)

CATEGORY_IDS = [category.value for category in Category]

# Create MCP server
server = Server("ideadiary")


def open_store() -> Store:
    """Open the configured store."""
    ensure_dirs()
    return Store.from_config(load_config())


def text(message: str) -> list[TextContent]:
    return [TextContent(type="text", text=message)]


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="diary_add_idea",
            description="Capture an idea in the diary.",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "The idea to capture",
                    },
                    "category": {
                        "type": "string",
                        "description": "Category (default: work)",
                        "enum": CATEGORY_IDS,
                        "default": "work",
                    },
                },
                "required": ["text"],
            },
        ),
        Tool(
            name="diary_add_log",
            description="Record a free-form cause/effect log entry: what was done (method) and what happened (outcome).",
            inputSchema={
                "type": "object",
                "properties": {
                    "method": {"type": "string", "description": "What was done"},
                    "outcome": {"type": "string", "description": "What happened"},
                },
            },
        ),
        Tool(
            name="diary_list",
            description="List ideas in a view, optionally filtered by a search term.",
            inputSchema={
                "type": "object",
                "properties": {
                    "view": {
                        "type": "string",
                        "description": "open, action, done or all (default: open)",
                        "enum": ["open", "action", "done", "all"],
                        "default": "open",
                    },
                    "search": {
                        "type": "string",
                        "description": "Case-insensitive search on text or category",
                    },
                },
            },
        ),
        Tool(
            name="diary_logs",
            description="List log entries, optionally filtered by a search term.",
            inputSchema={
                "type": "object",
                "properties": {
                    "search": {"type": "string", "description": "Search term"},
                },
            },
        ),
        Tool(
            name="diary_toggle",
            description="Mark an idea executed, or reopen an executed one.",
            inputSchema={
                "type": "object",
                "properties": {
                    "idea_id": {"type": "string", "description": "Idea ID or unique prefix"},
                },
                "required": ["idea_id"],
            },
        ),
        Tool(
            name="diary_update",
            description="Set an idea's method (action plan) or outcome (result).",
            inputSchema={
                "type": "object",
                "properties": {
                    "idea_id": {"type": "string", "description": "Idea ID or unique prefix"},
                    "field": {
                        "type": "string",
                        "enum": ["method", "outcome"],
                    },
                    "value": {"type": "string"},
                },
                "required": ["idea_id", "field", "value"],
            },
        ),
        Tool(
            name="diary_delete",
            description="Delete an idea or log entry. Confirm with the user before calling.",
            inputSchema={
                "type": "object",
                "properties": {
                    "kind": {"type": "string", "enum": ["idea", "log"]},
                    "entry_id": {"type": "string", "description": "ID or unique prefix"},
                },
                "required": ["kind", "entry_id"],
            },
        ),
        Tool(
            name="diary_export",
            description="Get the full diary as a JSON backup document.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="diary_stats",
            description="Get idea and log counts.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    handlers = {
        "diary_add_idea": tool_add_idea,
        "diary_add_log": tool_add_log,
        "diary_list": tool_list,
        "diary_logs": tool_logs,
        "diary_toggle": tool_toggle,
        "diary_update": tool_update,
        "diary_delete": tool_delete,
        "diary_export": tool_export,
        "diary_stats": tool_stats,
    }
    logger.info("Tool call: %s", name)
    handler = handlers.get(name)
    if handler is None:
        return text(f"Unknown tool: {name}")

    try:
        return await handler(arguments or {})
    except (DiaryError, ValueError) as e:
        return text(f"Error: {e}")


async def tool_add_idea(args: dict, store: Store | None = None) -> list[TextContent]:
    """Capture an idea."""
    store = store or open_store()
    idea = store.add_idea(args.get("text", ""), args.get("category") or "work")
    if idea is None:
        return text("Error: Empty idea")
    return text(f"Captured: {idea.id}")


async def tool_add_log(args: dict, store: Store | None = None) -> list[TextContent]:
    """Record a log entry."""
    store = store or open_store()
    entry = store.add_log(args.get("method", ""), args.get("outcome", ""))
    if entry is None:
        return text("Error: Method and outcome are both empty")
    return text(f"Logged: {entry.id}")


async def tool_list(args: dict, store: Store | None = None) -> list[TextContent]:
    """List ideas."""
    store = store or open_store()
    view = args.get("view") or View.OPEN.value
    ideas = query_ideas(store.ideas.all(), view, args.get("search", ""))
    return text(format_ideas(ideas, title=f"{view.upper()} IDEAS"))


async def tool_logs(args: dict, store: Store | None = None) -> list[TextContent]:
    """List log entries."""
    store = store or open_store()
    return text(format_logs(query_logs(store.logs.all(), args.get("search", ""))))


async def tool_toggle(args: dict, store: Store | None = None) -> list[TextContent]:
    """Toggle executed state."""
    store = store or open_store()
    idea_id = store.ideas.resolve(args.get("idea_id", "").strip())
    if idea_id is None:
        return text(f"Idea not found: {args.get('idea_id', '')}")

    idea = store.toggle_executed(idea_id)
    return text(f"{'Done' if idea.executed else 'Reopened'}: {idea.text}")


async def tool_update(args: dict, store: Store | None = None) -> list[TextContent]:
    """Set method or outcome."""
    store = store or open_store()
    idea_id = store.ideas.resolve(args.get("idea_id", "").strip())
    if idea_id is None:
        return text(f"Idea not found: {args.get('idea_id', '')}")

    store.update_field(idea_id, args.get("field", ""), args.get("value", ""))
    return text(f"Updated {args['field']}: {idea_id}")


async def tool_delete(args: dict, store: Store | None = None) -> list[TextContent]:
    """Delete an idea or log entry."""
    store = store or open_store()
    kind = args.get("kind")
    if kind not in ("idea", "log"):
        return text(f"Error: Invalid kind '{kind}'")

    repo = store.ideas if kind == "idea" else store.logs
    entity_id = repo.resolve(args.get("entry_id", "").strip())
    if entity_id is None:
        return text(f"Not found: {args.get('entry_id', '')}")

    repo.delete(entity_id)
    return text(f"Deleted: {entity_id}")


async def tool_export(args: dict, store: Store | None = None) -> list[TextContent]:
    """Export the diary."""
    store = store or open_store()
    return text(export_snapshot(store.snapshot()))


async def tool_stats(args: dict, store: Store | None = None) -> list[TextContent]:
    """Get statistics."""
    store = store or open_store()
    return text(format_stats(summarize(store.snapshot())))


async def main():
    """Run the MCP server."""
    os.environ["NO_COLOR"] = "1"  # tool output is plain text
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    run()

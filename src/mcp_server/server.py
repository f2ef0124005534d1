"""
NexaWiki MCP Server Implementation

Provides MCP tools for encyclopedia search with an AI-generated summary.
"""

import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Redirect print statements to stderr to avoid breaking MCP JSON protocol
import builtins

original_print = builtins.print


def mcp_safe_print(*args, **kwargs):
    kwargs["file"] = kwargs.get("file", sys.stderr)
    original_print(*args, **kwargs)


builtins.print = mcp_safe_print

from nexawiki import QueryOrchestrator, create_orchestrator  # type: ignore  # noqa: E402
from nexawiki.preferences import PreferenceStore  # noqa: E402
from nexawiki.presentation import ResultFormatter  # noqa: E402
from nexawiki.settings import get_settings  # noqa: E402

# Create the FastMCP server instance
mcp = FastMCP("NexaWiki")

# One orchestrator per server process; a new query supersedes the last one
_orchestrator: QueryOrchestrator | None = None


def get_orchestrator() -> QueryOrchestrator:
    """Create the orchestrator on first use."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = create_orchestrator(get_settings())
    return _orchestrator


def get_formatter() -> ResultFormatter:
    return ResultFormatter(get_settings().app_name)


def get_preferences() -> PreferenceStore:
    return PreferenceStore(get_settings().preferences_file)


@mcp.tool()
async def search_knowledge(query: str) -> str:
    """
    <tool_description>
    Search the encyclopedia and generate a short AI summary for a topic.

    Runs the article search and the summary generation concurrently and
    returns both once they have settled. Either part may fail independently;
    the other is still returned.
    </tool_description>

    <tool_usage_guidelines>
    Use this tool for quick factual lookups about people, places, events or
    concepts. Each result includes a "Read more" link to the full article.
    </tool_usage_guidelines>

    Args:
        query: The topic to look up (e.g., "Alan Turing")

    Returns:
        Markdown view with the AI summary and ranked article matches
    """
    if not query.strip():
        return "Please provide a non-empty query."

    try:
        state = await get_orchestrator().run(query)
        return get_formatter().render(state)
    except Exception as e:
        return f"Error running search: {str(e)}"


@mcp.tool()
async def submit_query(query: str) -> str:
    """
    <tool_description>
    Start a search in the background and return immediately.

    Any previous query still in flight is superseded; its late results are
    discarded. Use get_query_state to read the results as they arrive.
    </tool_description>

    Args:
        query: The topic to look up

    Returns:
        Round identifier and instructions for polling
    """
    try:
        round_id = get_orchestrator().submit(query)
        if round_id is None:
            return "Please provide a non-empty query."

        return f"""Search started 🚀

Round: {round_id}
Query: {query.strip()}

Next step: Call get_query_state() to see the summary and results as they arrive."""

    except Exception as e:
        return f"Error starting search: {str(e)}"


@mcp.tool()
async def get_query_state() -> str:
    """
    <tool_description>
    Show the current view of the most recent query.

    Search results and the AI summary are reported separately; either may still
    be loading while the other is complete.
    </tool_description>

    Returns:
        Markdown view of the current round
    """
    try:
        orchestrator = get_orchestrator()
        view = get_formatter().render(orchestrator.state)
        if orchestrator.state.is_pending:
            view += "\n\n(Still loading. Call get_query_state() again shortly.)"
        return view
    except Exception as e:
        return f"Error retrieving query state: {str(e)}"


@mcp.tool()
async def toggle_display_mode() -> str:
    """
    <tool_description>
    Switch between dark and light display mode. The choice is remembered
    across sessions.
    </tool_description>

    Returns:
        The new display mode
    """
    try:
        dark = get_preferences().toggle()
        return f"Display mode is now {'dark' if dark else 'light'}."
    except OSError as e:
        return f"Error saving display mode: {str(e)}"


if __name__ == "__main__":
    mcp.run()

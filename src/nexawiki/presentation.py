"""
Presentation helpers.

Derives view signals from a RoundState snapshot and renders it as markdown for
the text front ends (CLI and MCP server). Snippets arrive as markup-bearing
text and are only sanitized here, never in the core.
"""

import re

from bs4 import BeautifulSoup

from .state import Phase, RoundState


class ViewSignal:
    """What the search region of the view should show."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    RESULTS = "results"


class SummarySignal:
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


def search_signal(state: RoundState) -> str:
    """Map the search phase to a view signal; zero matches is not an error."""
    if state.search_phase == Phase.PENDING:
        return ViewSignal.LOADING
    if state.search_phase == Phase.FAILED:
        return ViewSignal.ERROR
    if state.search_phase == Phase.DONE:
        if state.search_outcome is None or state.search_outcome.is_empty:
            return ViewSignal.EMPTY
        return ViewSignal.RESULTS
    return ViewSignal.IDLE


def summary_signal(state: RoundState) -> str:
    if state.summary_phase == Phase.PENDING:
        return SummarySignal.LOADING
    if state.summary_phase == Phase.DONE and state.summary_outcome:
        return SummarySignal.READY
    if state.summary_phase in (Phase.DONE, Phase.FAILED):
        return SummarySignal.UNAVAILABLE
    return SummarySignal.IDLE


_WHITESPACE = re.compile(r"\s+")


def snippet_to_text(snippet: str) -> str:
    """Strip search-highlight markup and entities from a snippet."""
    if not snippet:
        return ""
    text = BeautifulSoup(snippet, "html.parser").get_text()
    return _WHITESPACE.sub(" ", text).strip()


def format_total_matches(total: int) -> str:
    return f"{total:,} results found"


class ResultFormatter:
    """Renders RoundState snapshots as markdown."""

    def __init__(self, app_name: str = "NexaWiki"):
        self.app_name = app_name

    def render(self, state: RoundState) -> str:
        """
        Render the full view for a snapshot.

        The error banner, search region and summary region are independent:
        a failure in one never hides the content of the other.
        """
        if state.round_id == 0:
            return f"# {self.app_name}\n\nWhat would you like to know about?"

        sections = [f"# {self.app_name}: {state.query}"]

        if state.error_message:
            sections.append(f"> ⚠️ {state.error_message}")

        summary = self.render_summary(state)
        if summary:
            sections.append(summary)

        results = self.render_results(state)
        if results:
            sections.append(results)

        return "\n\n".join(sections)

    def render_summary(self, state: RoundState) -> str:
        signal = summary_signal(state)
        if signal == SummarySignal.LOADING:
            return "## ⚡ AI Summary\n\nGenerating AI summary..."
        if signal == SummarySignal.READY:
            return f"## ⚡ AI Summary\n\n{state.summary_outcome}"
        if signal == SummarySignal.UNAVAILABLE:
            return "## ⚡ AI Summary\n\n_No summary available._"
        return ""

    def render_results(self, state: RoundState) -> str:
        signal = search_signal(state)

        if signal == ViewSignal.LOADING:
            return "Searching for results..."

        if signal == ViewSignal.EMPTY:
            lines = [
                "### No results found",
                "Try searching for something else or check your spelling.",
            ]
            outcome = state.search_outcome
            if outcome is not None and outcome.suggestion:
                lines.append(f"Did you mean: {outcome.suggestion}?")
            return "\n\n".join(lines)

        if signal != ViewSignal.RESULTS:
            return ""

        outcome = state.search_outcome
        header = "## Search Results"
        if outcome.total_matches:
            header += f" ({format_total_matches(outcome.total_matches)})"

        entries = [header]
        for i, result in enumerate(outcome.items, 1):
            entries.append(
                f"### {i}. {result.title}\n\n"
                f"{snippet_to_text(result.snippet)}\n\n"
                f"[Read more]({result.url})"
            )
        return "\n\n".join(entries)

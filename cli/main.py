"""
NexaWiki - Command Line Entry Point

Searches the encyclopedia and generates an AI summary for a query, either once
from the command line or interactively, one query per line.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nexawiki import QueryOrchestrator, RoundState, create_orchestrator  # noqa: E402
from nexawiki.preferences import PreferenceStore  # noqa: E402
from nexawiki.presentation import ResultFormatter  # noqa: E402
from nexawiki.settings import get_settings  # noqa: E402

QUIT_COMMANDS = {"quit", "exit", ":q"}
THEME_COMMAND = ":theme"


def print_theme(dark: bool) -> None:
    print(f"{'🌙' if dark else '☀️'} Display mode: {'dark' if dark else 'light'}")


async def run_once(
    orchestrator: QueryOrchestrator, formatter: ResultFormatter, query: str
) -> int:
    state = await orchestrator.run(query)
    if state.round_id == 0:
        print("❌ Please enter a non-empty query.")
        return 1

    print(formatter.render(state))
    return 0


async def run_interactive(
    orchestrator: QueryOrchestrator,
    formatter: ResultFormatter,
    preferences: PreferenceStore,
) -> int:
    """Read queries line by line; a new line supersedes a query still loading."""

    def on_change(state: RoundState) -> None:
        if not state.is_pending:
            print("\n" + formatter.render(state) + "\n")

    orchestrator.add_listener(on_change)
    print(f"Type a query, '{THEME_COMMAND}' to switch display mode, or 'quit'.")

    try:
        while True:
            try:
                line = await asyncio.to_thread(input, "🔎 > ")
            except EOFError:
                break

            line = line.strip()
            if line in QUIT_COMMANDS:
                break
            if line == THEME_COMMAND:
                print_theme(preferences.toggle())
                continue
            if orchestrator.submit(line) is not None:
                print("Searching for results...")
    finally:
        orchestrator.remove_listener(on_change)
        await orchestrator.aclose()

    return 0


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="AI-Powered Knowledge Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/main.py "Alan Turing"
  python cli/main.py --limit 5 "Byzantine Empire"
  python cli/main.py              (interactive mode)
        """,
    )
    parser.add_argument("query", nargs="?", help="Topic to search for")
    parser.add_argument(
        "--limit", type=int, help="Maximum number of article matches to show"
    )
    parser.add_argument(
        "--toggle-theme",
        action="store_true",
        help="Switch between dark and light display mode and exit",
    )

    args = parser.parse_args()

    settings = get_settings()
    preferences = PreferenceStore(settings.preferences_file)

    if args.toggle_theme:
        print_theme(preferences.toggle())
        return 0

    if args.limit is not None:
        if args.limit <= 0:
            parser.error("--limit must be a positive integer")
        settings = settings.model_copy(update={"max_search_results": args.limit})

    orchestrator = create_orchestrator(settings)
    formatter = ResultFormatter(settings.app_name)

    print(f"🚀 {settings.page_title}")
    print_theme(preferences.is_dark_mode())
    print("=" * 50)

    if args.query is None:
        return await run_interactive(orchestrator, formatter, preferences)
    return await run_once(orchestrator, formatter, args.query)


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

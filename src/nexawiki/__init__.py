"""
NexaWiki Package

AI-assisted encyclopedia search: every query fans out to a search index and a
generative summary service, and the results are reconciled into one view.
"""

from nexawiki.logger import setup_logging
from nexawiki.orchestrator import QueryOrchestrator, create_orchestrator
from nexawiki.state import Phase, RoundState, SearchOutcome, SearchResult

__version__ = "1.0.0"
__all__ = [
    "QueryOrchestrator",
    "create_orchestrator",
    "Phase",
    "RoundState",
    "SearchOutcome",
    "SearchResult",
    "setup_logging",
]

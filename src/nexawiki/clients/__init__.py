"""
External service clients.

Search index and generative summary clients used by the query orchestrator.
"""

from .search_index import SearchIndexClient
from .summary import PROMPT_TEMPLATE, GenerationConfig, SummaryClient

__all__ = ["SearchIndexClient", "SummaryClient", "GenerationConfig", "PROMPT_TEMPLATE"]

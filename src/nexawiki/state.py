"""
Round state model.

Immutable snapshots of the orchestrator's working state. Every update produces
a new RoundState, so observers never see a partially applied change.
"""

from dataclasses import dataclass


class Phase:
    """Per-request lifecycle marker, tracked separately for search and summary."""

    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class ErrorSource:
    SEARCH = "search"
    SUMMARY = "summary"


@dataclass(frozen=True)
class SearchResult:
    """A single matched article.

    ``snippet`` carries lightweight markup from the search service and is
    passed through unmodified; front ends must sanitize it before display.
    """

    title: str
    snippet: str
    page_id: int
    url: str


@dataclass(frozen=True)
class SearchOutcome:
    """Matches in relevance order plus optional match-count metadata."""

    items: tuple[SearchResult, ...] = ()
    total_matches: int | None = None
    suggestion: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class RoundState:
    """Snapshot of one query round."""

    round_id: int = 0
    query: str = ""
    search_phase: str = Phase.IDLE
    summary_phase: str = Phase.IDLE
    search_outcome: SearchOutcome | None = None
    summary_outcome: str | None = None
    error_message: str | None = None
    error_source: str | None = None

    @classmethod
    def pending(cls, round_id: int, query: str) -> "RoundState":
        """Fresh state for a newly submitted round."""
        return cls(
            round_id=round_id,
            query=query,
            search_phase=Phase.PENDING,
            summary_phase=Phase.PENDING,
        )

    @property
    def is_pending(self) -> bool:
        return Phase.PENDING in (self.search_phase, self.summary_phase)

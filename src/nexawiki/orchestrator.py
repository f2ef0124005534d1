"""
Query Orchestration Logic

Drives the search and summary clients concurrently for each submitted query
and reconciles their settlements into a single RoundState.

Every round carries an identifier captured at dispatch time. A settling call
only mutates state if its identifier still matches the current round, so late
responses from a superseded round are dropped instead of cancelled.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from .clients import SearchIndexClient, SummaryClient
from .errors import ClientError, MalformedResponseError
from .logger import setup_logging
from .settings import Settings, get_settings
from .state import ErrorSource, Phase, RoundState, SearchOutcome

logger = logging.getLogger(__name__)

StateListener = Callable[[RoundState], None]


@dataclass(frozen=True)
class ErrorMessages:
    """User-facing failure messages, one per client and failure kind."""

    search_failed: str = "Failed to fetch search results. Please try again."
    search_malformed: str = "No results found for your search."
    summary_failed: str = "AI summary service is temporarily unavailable."
    summary_malformed: str = "Unable to generate AI summary at this time."

    def for_search(self, error: BaseException) -> str:
        if isinstance(error, MalformedResponseError):
            return self.search_malformed
        return self.search_failed

    def for_summary(self, error: BaseException) -> str:
        if isinstance(error, MalformedResponseError):
            return self.summary_malformed
        return self.summary_failed


class QueryOrchestrator:
    """
    Runs one query round at a time against the search and summary services.

    A new submission supersedes the previous round immediately. The two
    client calls run as independent tasks; either may fail without affecting
    the other.
    """

    def __init__(
        self,
        search_client: SearchIndexClient,
        summary_client: SummaryClient,
        *,
        search_limit: int = 10,
        messages: ErrorMessages | None = None,
    ):
        if search_limit <= 0:
            raise ValueError(f"search_limit must be positive, got {search_limit}")

        self.search_client = search_client
        self.summary_client = summary_client
        self.search_limit = search_limit
        self.messages = messages or ErrorMessages()

        # Set up logging
        self.round_logger = setup_logging()

        self._state = RoundState()
        self._round_id = 0
        self._listeners: list[StateListener] = []
        self._round_tasks: dict[int, tuple[asyncio.Task, ...]] = {}

    @property
    def state(self) -> RoundState:
        """Current snapshot. Snapshots are immutable and safe to hold on to."""
        return self._state

    @property
    def current_round(self) -> int:
        return self._round_id

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every published snapshot."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit(self, query: str) -> int | None:
        """
        Start a new round for ``query`` and return its identifier.

        Both phases are reset to pending before any I/O is scheduled. The call
        returns as soon as the two client tasks are created; it must be made
        from within a running event loop.

        Returns:
            The new round id, or None if the query was blank (no state change)
        """
        text = (query or "").strip()
        if not text:
            logger.debug("Ignoring blank query submission")
            return None

        loop = asyncio.get_running_loop()

        if self._state.is_pending:
            self.round_logger.info(
                f"⏭️ [{self._round_id}] Superseded while pending: {self._state.query}"
            )

        self._round_id += 1
        round_id = self._round_id
        self._publish(RoundState.pending(round_id, text))
        self.round_logger.info(f"🚀 [{round_id}] Submitted query: {text}")

        tasks = (
            loop.create_task(self._run_search(round_id, text), name=f"search-{round_id}"),
            loop.create_task(
                self._run_summary(round_id, text), name=f"summary-{round_id}"
            ),
        )
        self._round_tasks[round_id] = tasks
        for task in tasks:
            task.add_done_callback(lambda _task, rid=round_id: self._forget(rid))

        return round_id

    async def settle(self, round_id: int | None = None) -> RoundState:
        """
        Wait until both calls of a round have settled.

        Args:
            round_id: Round to wait for (default: the current round)

        Returns:
            The current snapshot once that round's calls have finished
        """
        rid = self._round_id if round_id is None else round_id
        tasks = self._round_tasks.get(rid)
        if tasks:
            await asyncio.wait(tasks)
        return self._state

    async def run(self, query: str) -> RoundState:
        """Submit ``query`` and wait for both of its calls to settle."""
        round_id = self.submit(query)
        if round_id is None:
            return self._state
        return await self.settle(round_id)

    async def aclose(self) -> None:
        """Wait for every outstanding call, including superseded rounds."""
        pending = [task for tasks in self._round_tasks.values() for task in tasks]
        if pending:
            await asyncio.wait(pending)

    def _forget(self, round_id: int) -> None:
        tasks = self._round_tasks.get(round_id)
        if tasks and all(task.done() for task in tasks):
            del self._round_tasks[round_id]

    def _is_stale(self, round_id: int, kind: str) -> bool:
        if round_id == self._round_id:
            return False
        self.round_logger.info(
            f"🗑️ [{round_id}] Discarding stale {kind} result "
            f"(current round is {self._round_id})"
        )
        return True

    async def _run_search(self, round_id: int, query: str) -> None:
        started = time.time()
        try:
            outcome: SearchOutcome = await self.search_client.search(
                query, self.search_limit
            )
        except Exception as e:
            if self._is_stale(round_id, "search"):
                return
            logger.warning(
                f"Search failed for round {round_id}: {e}",
                exc_info=not isinstance(e, ClientError),
            )
            self.round_logger.info(
                f"❌ [{round_id}] Search failed after {time.time() - started:.2f} seconds"
            )
            # Search failure always owns the displayed message
            self._update(
                search_phase=Phase.FAILED,
                error_message=self.messages.for_search(e),
                error_source=ErrorSource.SEARCH,
            )
            return

        if self._is_stale(round_id, "search"):
            return
        self.round_logger.info(
            f"✅ [{round_id}] Search returned {len(outcome.items)} items "
            f"in {time.time() - started:.2f} seconds"
        )
        self._update(search_phase=Phase.DONE, search_outcome=outcome)

    async def _run_summary(self, round_id: int, query: str) -> None:
        started = time.time()
        try:
            summary = await self.summary_client.summarize(query)
        except Exception as e:
            if self._is_stale(round_id, "summary"):
                return
            logger.warning(
                f"Summary failed for round {round_id}: {e}",
                exc_info=not isinstance(e, ClientError),
            )
            self.round_logger.info(
                f"⚠️ [{round_id}] Summary failed after {time.time() - started:.2f} seconds"
            )
            changes = {"summary_phase": Phase.FAILED}
            # Never overwrite a search failure message
            if self._state.error_message is None:
                changes["error_message"] = self.messages.for_summary(e)
                changes["error_source"] = ErrorSource.SUMMARY
            self._update(**changes)
            return

        if self._is_stale(round_id, "summary"):
            return
        self.round_logger.info(
            f"✅ [{round_id}] Summary generated in {time.time() - started:.2f} seconds"
        )
        self._update(summary_phase=Phase.DONE, summary_outcome=summary)

    def _update(self, **changes) -> None:
        self._publish(replace(self._state, **changes))

    def _publish(self, state: RoundState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener raised; continuing")


def create_orchestrator(settings: Settings | None = None) -> QueryOrchestrator:
    """Convenience function to wire an orchestrator from settings."""
    settings = settings or get_settings()
    setup_logging(settings.log_dir)

    search_client = SearchIndexClient(
        settings.wikipedia_api_url,
        settings.wikipedia_article_url,
        timeout=settings.request_timeout,
    )
    summary_client = SummaryClient(
        settings.gemini_api_key,
        settings.gemini_api_url,
        timeout=settings.request_timeout,
    )
    return QueryOrchestrator(
        search_client,
        summary_client,
        search_limit=settings.max_search_results,
    )

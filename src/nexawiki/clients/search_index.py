"""
Encyclopedia search client.

Queries a MediaWiki ``api.php`` endpoint and parses the response into an
ordered SearchOutcome.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from ..errors import ConfigError, EmptyQueryError, MalformedResponseError, NetworkError
from ..state import SearchOutcome, SearchResult
from ..types import WikiSearchInfo, WikiSearchRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"
DEFAULT_ARTICLE_URL = "https://en.wikipedia.org/?curid={page_id}"


class SearchIndexClient:
    """Translates a query into a MediaWiki full-text search request."""

    HEADERS = {
        "Accept": "application/json",
        "User-Agent": "NexaWiki/1.0 (knowledge search)",
    }

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        article_url: str = DEFAULT_ARTICLE_URL,
        *,
        timeout: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        """
        Initialize the search client.

        Args:
            api_url: MediaWiki API endpoint
            article_url: Canonical article link template containing ``{page_id}``
            timeout: Transport timeout in seconds
            client_factory: Returns the AsyncClient used for each request
        """
        if "{page_id}" not in article_url:
            raise ConfigError(
                f"Article URL template must contain '{{page_id}}': {article_url}"
            )

        self.api_url = api_url
        self.article_url_template = article_url
        self.timeout = httpx.Timeout(timeout)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(headers=self.HEADERS, timeout=self.timeout)

    def article_url(self, page_id: int) -> str:
        """Build the canonical article link for a page identifier."""
        return self.article_url_template.format(page_id=page_id)

    def build_params(self, query: str, limit: int) -> dict[str, Any]:
        """Query parameters for a full-text search request."""
        return {
            "action": "query",
            "list": "search",
            "prop": "info",
            "inprop": "url",
            "utf8": "",
            "format": "json",
            "origin": "*",
            "srlimit": limit,
            "srsearch": query,
        }

    async def search(self, query: str, limit: int) -> SearchOutcome:
        """
        Search the encyclopedia index.

        Args:
            query: Non-empty search text
            limit: Maximum number of matches to return

        Returns:
            SearchOutcome with matches in relevance order

        Raises:
            EmptyQueryError: If the query is blank
            NetworkError: On transport failure or non-success status
            MalformedResponseError: If the response lacks the match list
        """
        if not query or not query.strip():
            raise EmptyQueryError()
        if limit <= 0:
            raise ValueError(f"Result limit must be positive, got {limit}")

        params = self.build_params(query.strip(), limit)

        try:
            async with self._client_factory() as client:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Search API returned status {status} for {query!r}")
            raise NetworkError(
                f"Search API returned status {status}", status_code=status
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"Search request timed out for {query!r}")
            raise NetworkError("Search request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Search request failed for {query!r}: {e}")
            raise NetworkError(f"Search request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Search API returned a non-JSON body") from e

        return self.parse_response(data, limit)

    def parse_response(self, data: Any, limit: int) -> SearchOutcome:
        """
        Parse a MediaWiki search payload.

        An empty match list is a valid outcome; a payload without the
        ``query.search`` list at all is not.
        """
        query_block = data.get("query") if isinstance(data, dict) else None
        if not isinstance(query_block, dict):
            raise MalformedResponseError("Search response has no 'query' block")

        records = query_block.get("search")
        if not isinstance(records, list):
            raise MalformedResponseError("Search response has no 'query.search' list")

        items: list[SearchResult] = []
        for record in records:
            result = self._parse_record(record)
            if result is None:
                continue
            items.append(result)
            if len(items) >= limit:
                break

        info: WikiSearchInfo = query_block.get("searchinfo") or {}
        total = info.get("totalhits") if isinstance(info, dict) else None
        suggestion = info.get("suggestion") if isinstance(info, dict) else None

        return SearchOutcome(
            items=tuple(items),
            # bool is an int subclass
            total_matches=total
            if isinstance(total, int) and not isinstance(total, bool) and total >= 0
            else None,
            suggestion=suggestion or None,
        )

    def _parse_record(self, record: WikiSearchRecord) -> SearchResult | None:
        if not isinstance(record, dict):
            logger.debug(f"Skipping non-object search record: {record!r}")
            return None

        title = record.get("title")
        page_id = record.get("pageid")
        if not title or page_id is None:
            logger.debug(f"Skipping search record without title/pageid: {record!r}")
            return None

        return SearchResult(
            title=str(title),
            snippet=str(record.get("snippet", "")),
            page_id=page_id,
            url=self.article_url(page_id),
        )

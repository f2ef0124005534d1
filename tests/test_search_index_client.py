"""
Unit tests for SearchIndexClient.

HTTP traffic is served by httpx.MockTransport, so no network access is needed.
"""

import httpx
import pytest

from nexawiki.clients.search_index import SearchIndexClient
from nexawiki.errors import (
    ConfigError,
    EmptyQueryError,
    MalformedResponseError,
    NetworkError,
)

API_URL = "https://en.wikipedia.org/w/api.php"


def wiki_payload(count: int, totalhits: int | None = None) -> dict:
    records = [
        {
            "ns": 0,
            "title": f"Article {i}",
            "pageid": 1000 + i,
            "snippet": f'Match <span class="searchmatch">{i}</span>',
        }
        for i in range(count)
    ]
    query: dict = {"search": records}
    if totalhits is not None:
        query["searchinfo"] = {"totalhits": totalhits}
    return {"batchcomplete": "", "query": query}


def make_client(handler, **kwargs) -> SearchIndexClient:
    transport = httpx.MockTransport(handler)
    return SearchIndexClient(
        API_URL,
        client_factory=lambda: httpx.AsyncClient(transport=transport),
        **kwargs,
    )


class TestSearchRequest:
    """Test cases for the outgoing search request."""

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        """Test the request carries the search action, limit and encoded query."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=wiki_payload(0))

        client = make_client(handler)
        await client.search("  Alan Turing & co  ", 10)

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        params = request.url.params
        assert params["action"] == "query"
        assert params["list"] == "search"
        assert params["format"] == "json"
        assert params["srlimit"] == "10"
        assert params["srsearch"] == "Alan Turing & co"
        assert "%26" in str(request.url)

    @pytest.mark.asyncio
    async def test_blank_query_makes_no_request(self):
        """Test that a whitespace-only query fails before any network call."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=wiki_payload(1))

        client = make_client(handler)
        with pytest.raises(EmptyQueryError):
            await client.search("   ", 10)
        assert calls == []

    @pytest.mark.asyncio
    async def test_non_positive_limit_rejected(self):
        """Test that a zero limit is rejected."""
        client = make_client(lambda request: httpx.Response(200, json=wiki_payload(1)))
        with pytest.raises(ValueError, match="positive"):
            await client.search("Turing", 0)


class TestSearchResponse:
    """Test cases for response parsing and failure mapping."""

    @pytest.mark.asyncio
    async def test_results_preserve_order_and_build_links(self):
        """Test items keep service order and carry canonical article links."""
        client = make_client(
            lambda request: httpx.Response(200, json=wiki_payload(3, totalhits=4521))
        )

        outcome = await client.search("Alan Turing", 10)

        assert [item.title for item in outcome.items] == [
            "Article 0",
            "Article 1",
            "Article 2",
        ]
        assert outcome.items[0].page_id == 1000
        assert outcome.items[0].url == "https://en.wikipedia.org/?curid=1000"
        assert outcome.total_matches == 4521

    @pytest.mark.asyncio
    async def test_snippet_markup_passed_through(self):
        """Test snippets are returned unmodified, markup included."""
        client = make_client(lambda request: httpx.Response(200, json=wiki_payload(1)))

        outcome = await client.search("Turing", 5)

        assert outcome.items[0].snippet == 'Match <span class="searchmatch">0</span>'

    @pytest.mark.asyncio
    async def test_results_capped_at_limit(self):
        """Test that no more than ``limit`` items are kept."""
        client = make_client(lambda request: httpx.Response(200, json=wiki_payload(15)))

        outcome = await client.search("Turing", 10)

        assert len(outcome.items) == 10
        assert outcome.items[-1].title == "Article 9"

    @pytest.mark.asyncio
    async def test_empty_result_list_is_not_an_error(self):
        """Test that zero matches is a valid, empty outcome."""
        client = make_client(
            lambda request: httpx.Response(200, json=wiki_payload(0, totalhits=0))
        )

        outcome = await client.search("qwxzv", 10)

        assert outcome.is_empty
        assert outcome.total_matches == 0

    @pytest.mark.asyncio
    async def test_missing_total_hits(self):
        """Test that absent match-count metadata yields None."""
        client = make_client(lambda request: httpx.Response(200, json=wiki_payload(2)))

        outcome = await client.search("Turing", 10)

        assert outcome.total_matches is None

    @pytest.mark.asyncio
    async def test_suggestion_is_exposed(self):
        """Test that a spelling suggestion is carried on the outcome."""
        payload = {
            "query": {
                "searchinfo": {"totalhits": 0, "suggestion": "alan turing"},
                "search": [],
            }
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))

        outcome = await client.search("alan turnig", 10)

        assert outcome.suggestion == "alan turing"

    @pytest.mark.asyncio
    async def test_incomplete_records_are_skipped(self):
        """Test that records without title or pageid are dropped."""
        payload = {
            "query": {
                "search": [
                    {"title": "Kept", "pageid": 1, "snippet": "a"},
                    {"title": "No id", "snippet": "b"},
                    "not a record",
                    {"pageid": 3, "snippet": "c"},
                    {"title": "Also kept", "pageid": 4},
                ]
            }
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))

        outcome = await client.search("Turing", 10)

        assert [item.title for item in outcome.items] == ["Kept", "Also kept"]
        assert outcome.items[1].snippet == ""

    @pytest.mark.asyncio
    async def test_missing_search_list_is_malformed(self):
        """Test that a payload without query.search fails distinctly from no results."""
        client = make_client(
            lambda request: httpx.Response(200, json={"batchcomplete": ""})
        )

        with pytest.raises(MalformedResponseError):
            await client.search("Turing", 10)

    @pytest.mark.asyncio
    async def test_non_list_search_is_malformed(self):
        """Test that a query.search value that is not a list is rejected."""
        client = make_client(
            lambda request: httpx.Response(200, json={"query": {"search": {}}})
        )

        with pytest.raises(MalformedResponseError):
            await client.search("Turing", 10)

    @pytest.mark.asyncio
    async def test_non_json_body_is_malformed(self):
        """Test that an HTML error page with 200 status is rejected."""
        client = make_client(
            lambda request: httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(MalformedResponseError):
            await client.search("Turing", 10)

    @pytest.mark.asyncio
    async def test_http_error_status_raises_network_error(self):
        """Test that a non-success status carries the status code."""
        client = make_client(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(NetworkError) as exc_info:
            await client.search("Turing", 10)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self):
        """Test that connection errors are mapped to NetworkError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError) as exc_info:
            await client.search("Turing", 10)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_raises_network_error(self):
        """Test that timeouts are mapped to NetworkError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError, match="timed out"):
            await client.search("Turing", 10)


class TestArticleUrl:
    """Test cases for canonical link construction."""

    def test_custom_template(self):
        """Test a custom article URL template."""
        client = SearchIndexClient(
            API_URL, article_url="https://de.wikipedia.org/?curid={page_id}"
        )
        assert client.article_url(42) == "https://de.wikipedia.org/?curid=42"

    def test_template_without_placeholder_rejected(self):
        """Test that a template missing {page_id} is a configuration error."""
        with pytest.raises(ConfigError):
            SearchIndexClient(API_URL, article_url="https://en.wikipedia.org/")

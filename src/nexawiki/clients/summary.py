"""
Generative summary client.

Sends a fixed summarization prompt to a Gemini ``generateContent`` endpoint
and extracts the first candidate's text.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from ..errors import EmptyQueryError, MalformedResponseError, NetworkError
from ..types import GeminiGenerationConfig, GeminiRequest

logger = logging.getLogger(__name__)

DEFAULT_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-1.5-flash:generateContent"
)

PROMPT_TEMPLATE = (
    'Provide a concise, conversational summary about "{query}". '
    "Focus on the most important and interesting aspects. "
    "Keep it under 200 words and make it engaging like you're providing "
    "the first time information on the subject"
)


@dataclass(frozen=True)
class GenerationConfig:
    """Fixed sampling parameters for summary generation."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 300

    def to_payload(self) -> GeminiGenerationConfig:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


class SummaryClient:
    """Produces a short plain-text summary for a query."""

    HEADERS = {"Content-Type": "application/json"}

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        *,
        generation_config: GenerationConfig | None = None,
        timeout: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.generation_config = generation_config or GenerationConfig()
        self.timeout = httpx.Timeout(timeout)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(headers=self.HEADERS, timeout=self.timeout)

    def build_prompt(self, query: str) -> str:
        return PROMPT_TEMPLATE.format(query=query)

    def build_request(self, query: str) -> GeminiRequest:
        """JSON body for a generateContent call."""
        return {
            "contents": [{"parts": [{"text": self.build_prompt(query)}]}],
            "generationConfig": self.generation_config.to_payload(),
        }

    async def summarize(self, query: str) -> str:
        """
        Generate a summary for the query.

        Args:
            query: Non-empty query text

        Returns:
            Summary text, never empty

        Raises:
            EmptyQueryError: If the query is blank (no request is made)
            NetworkError: On transport failure or non-success status
            MalformedResponseError: If no candidate text can be extracted
        """
        if not query or not query.strip():
            raise EmptyQueryError()

        body = self.build_request(query.strip())

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self.api_url, params={"key": self.api_key}, json=body
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            # The request URL carries the API key; keep it out of the log line
            logger.warning(f"Summary API returned status {status} for {query!r}")
            raise NetworkError(
                f"Summary API returned status {status}", status_code=status
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"Summary request timed out for {query!r}")
            raise NetworkError("Summary request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(
                f"Summary request failed for {query!r}: {type(e).__name__}"
            )
            raise NetworkError(f"Summary request failed: {type(e).__name__}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Summary API returned a non-JSON body") from e

        return self.parse_response(data)

    def parse_response(self, data: Any) -> str:
        """Extract the first candidate's text from a generateContent payload."""
        if not isinstance(data, dict):
            raise MalformedResponseError("Summary response is not an object")

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = data.get("promptFeedback")
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if reason:
                raise MalformedResponseError(f"Summary prompt was blocked: {reason}")
            raise MalformedResponseError("Summary response has no candidates")

        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise MalformedResponseError("Summary candidate has no content parts")

        text = "".join(
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ).strip()
        if not text:
            raise MalformedResponseError("Summary candidate contains no text")

        return text

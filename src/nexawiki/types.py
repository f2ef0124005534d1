"""
Wire payload type definitions.

TypedDict definitions for the raw JSON exchanged with the external services.
"""

from typing import TypedDict


class WikiSearchRecord(TypedDict, total=False):
    """One entry of ``query.search`` in a MediaWiki search response."""

    ns: int
    title: str
    pageid: int
    size: int
    wordcount: int
    snippet: str
    timestamp: str


class WikiSearchInfo(TypedDict, total=False):
    """``query.searchinfo`` block of a MediaWiki search response."""

    totalhits: int
    suggestion: str


class GeminiPart(TypedDict, total=False):
    text: str


class GeminiContent(TypedDict, total=False):
    parts: list[GeminiPart]
    role: str


class GeminiGenerationConfig(TypedDict):
    """Generation parameters in the casing the API expects."""

    temperature: float
    topK: int
    topP: float
    maxOutputTokens: int


class GeminiRequest(TypedDict):
    """Body of a generateContent request."""

    contents: list[GeminiContent]
    generationConfig: GeminiGenerationConfig

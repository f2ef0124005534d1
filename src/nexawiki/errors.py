"""
NexaWiki error taxonomy.

Client failures are raised as ClientError subclasses and converted into
failed phases by the orchestrator.
"""


class NexaWikiError(Exception):
    """Base class for all NexaWiki errors."""


class EmptyQueryError(NexaWikiError, ValueError):
    """Query was blank or whitespace-only; no request was made."""

    def __init__(self, message: str = "Query must not be empty"):
        super().__init__(message)


class ClientError(NexaWikiError):
    """An external service call failed."""


class NetworkError(ClientError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(ClientError):
    """Success status, but the payload violates the expected shape."""


class ConfigError(NexaWikiError):
    """Invalid or missing configuration."""

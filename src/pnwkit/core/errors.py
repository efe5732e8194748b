"""
Custom exceptions for pnwkit.

Every error carries a ``retryable`` flag read by the execution service's
retry loop, so callers never need to inspect message text.
"""

from __future__ import annotations

from typing import Optional


class PnwKitError(Exception):
    """Base exception for all pnwkit errors."""

    retryable: bool = False


# =============================================================================
# Configuration errors (raised while building a query)
# =============================================================================


class QueryValidationError(PnwKitError):
    """Raised when a builder is misused or a value cannot be serialized safely."""
    pass


class SecurityGuardError(QueryValidationError):
    """Raised by defence checks: forbidden keys, null bytes, non-finite numbers, depth overflow."""
    pass


# =============================================================================
# Transport errors (raised while executing a query)
# =============================================================================


class TransportError(PnwKitError):
    """Raised when the HTTP round trip fails in a way worth retrying."""

    retryable = True


class RequestTimeoutError(TransportError):
    """Raised when a single attempt exceeds the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Request timeout after {int(timeout * 1000)}ms")


class RateLimitExceededError(TransportError):
    """Raised on HTTP 429."""

    def __init__(self):
        super().__init__("Rate limit exceeded, try again later")


class ServerError(TransportError):
    """Raised on HTTP 5xx. The upstream status and body are not echoed."""

    def __init__(self):
        super().__init__("API server error, try again later")


class RequestFailedError(PnwKitError):
    """Raised on any other non-2xx status; usually a bad API key."""

    def __init__(self):
        super().__init__("Request failed, check API key")


class ResponseFormatError(PnwKitError):
    """Raised when the response body does not have the expected shape."""

    def __init__(self, message: str = "Invalid response format", retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


class GraphQLResponseError(PnwKitError):
    """Raised when the API answers with a GraphQL ``errors`` array."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(", ".join(messages))


# =============================================================================
# Domain errors
# =============================================================================


class NoDataReturnedError(PnwKitError):
    """Raised when the response lacks the root field of the query."""

    def __init__(self, query_name: str):
        self.query_name = query_name
        super().__init__(f"No data returned from {query_name} query")


class QueryExecutionError(PnwKitError):
    """Raised by ``QueryBuilder.execute``; wraps the underlying error with the query name."""

    def __init__(self, query_name: str, message: str, retryable: Optional[bool] = None):
        self.query_name = query_name
        if retryable is not None:
            self.retryable = retryable
        super().__init__(f"Failed to execute {query_name} query: {message}")

"""
HTTP execution service for GraphQL queries.

Sends assembled query text to the API with input validation, request pacing,
per-attempt timeouts, retries with exponential backoff and an optional
response cache.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import (
    GraphQLResponseError,
    PnwKitError,
    QueryValidationError,
    RateLimitExceededError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
    TransportError,
)
from ..core.query_types import CacheOptions, CacheStats, GraphQLRequest, GraphQLResponse
from .cache import ResponseCache, build_cache_key
from .config import ServiceConfig

logger = logging.getLogger(__name__)


class GraphQLService:
    """
    Executes GraphQL queries against the API.

    One instance holds the request pacing state and the response cache, so
    every client sharing it shares both. Pass one instance to each client, or
    use ``GraphQLService.get_instance()`` for the process-wide default.

    Usage:
        service = GraphQLService()
        service.initialize_cache(CacheOptions(enabled=True, ttl=120))
        data = await service.query_call(api_key, "query { me { key } }")
        await service.close()
    """

    _instance: Optional[GraphQLService] = None

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize service.

        Args:
            config: Endpoint, timeout and retry settings
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.config = config or ServiceConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._cache: ResponseCache | None = None
        self._last_request_time: Optional[float] = None

    @classmethod
    def get_instance(cls) -> GraphQLService:
        """Get the process-wide default service, creating it on first call."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # === HTTP client lifecycle ===

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GraphQLService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # === Cache administration ===

    def initialize_cache(self, options: Optional[CacheOptions]) -> None:
        """
        Create the response cache.

        Only the first call that enables caching takes effect; later calls
        are ignored so clients sharing this service cannot resize the cache.
        """
        if self._cache is not None:
            logger.debug("Cache already initialized, ignoring new options")
            return
        if options is None or not options.enabled:
            return

        self._cache = ResponseCache(max_size=options.max_size, ttl=options.ttl)
        logger.info(f"Response cache initialized (max_size={options.max_size}, ttl={options.ttl}s)")

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    def clear_cache(self) -> None:
        """Empty the response cache, if any."""
        if self._cache is not None:
            self._cache.clear()

    def get_cache_stats(self) -> Optional[CacheStats]:
        """Return cache size and capacity, or None when caching is disabled."""
        return self._cache.stats() if self._cache is not None else None

    def get_cache_key(self, api_key: str, query: str) -> str:
        """Cache key for an (API key, query) pair."""
        return build_cache_key(api_key, query)

    # === Execution ===

    async def query_call(self, api_key: str, query: str) -> dict[str, Any]:
        """
        Execute a query and return the ``data`` object of the response.

        Args:
            api_key: API key, sent URL-encoded as the ``api_key`` parameter
            query: Complete GraphQL query text

        Returns:
            The response's ``data`` mapping

        Raises:
            QueryValidationError: If the API key or query is empty or too large
            PnwKitError: The last error once retries are exhausted, or the
                first non-retryable error
        """
        self._validate_input(api_key, query)

        cache_key = None
        if self._cache is not None:
            cache_key = build_cache_key(api_key, query)
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache HIT: {cache_key}")
                return cached
            logger.debug(f"Cache MISS: {cache_key}")

        attempts = self.config.max_retries + 1
        for attempt in range(attempts):
            try:
                data = await self._send(api_key, query)
            except PnwKitError as e:
                if not e.retryable or attempt == attempts - 1:
                    raise
                delay = self.config.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Request attempt {attempt + 1}/{attempts} failed: {e}; "
                    f"retrying in {delay}s"
                )
                await self._sleep(delay)
                continue

            if cache_key is not None and self._cache is not None:
                self._cache.set(cache_key, data)
            return data

        # Unreachable: the last attempt either returns or raises
        raise AssertionError("retry loop exited without a result")

    def _validate_input(self, api_key: str, query: str) -> None:
        """Reject empty or oversized input before anything is sent."""
        if not isinstance(api_key, str) or not api_key:
            raise QueryValidationError("Invalid API key: must be a non-empty string")

        if not isinstance(query, str) or not query:
            raise QueryValidationError("Invalid query: must be a non-empty string")

        if len(query) > self.config.max_query_size:
            raise QueryValidationError(
                f"Invalid query: exceeds maximum size of {self.config.max_query_size} characters"
            )

    async def _wait_for_rate_limit(self) -> None:
        """
        Keep request starts at least ``min_request_interval`` apart.

        Advisory only: concurrent callers may both pass the check before
        either records its timestamp.
        """
        if self._last_request_time is not None:
            elapsed = time.monotonic() - self._last_request_time
            wait = self.config.min_request_interval - elapsed
            if wait > 0:
                await self._sleep(wait)
        self._last_request_time = time.monotonic()

    async def _sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def _send(self, api_key: str, query: str) -> dict[str, Any]:
        """Perform one HTTP attempt."""
        client = await self._get_client()
        await self._wait_for_rate_limit()

        try:
            response = await asyncio.wait_for(
                client.post(
                    self.config.endpoint,
                    params={"api_key": api_key},
                    json=GraphQLRequest(query=query).model_dump(),
                ),
                timeout=self.config.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise RequestTimeoutError(self.config.timeout) from None
        except httpx.RequestError as e:
            # The exception text may embed the request URL, which carries the key
            raise TransportError(f"Network error: {type(e).__name__}") from None

        if response.status_code == 429:
            raise RateLimitExceededError()
        if response.status_code >= 500:
            raise ServerError()
        if not response.is_success:
            raise RequestFailedError()

        try:
            payload = response.json()
        except ValueError:
            raise ResponseFormatError() from None

        if not isinstance(payload, dict):
            raise ResponseFormatError()

        try:
            parsed = GraphQLResponse.model_validate(payload)
        except PydanticValidationError:
            raise ResponseFormatError() from None

        if parsed.errors:
            raise GraphQLResponseError(parsed.error_messages)

        if not parsed.has_data or parsed.data is None:
            raise ResponseFormatError("No data field in response", retryable=True)

        return parsed.data

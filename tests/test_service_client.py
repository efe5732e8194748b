"""Tests for GraphQLService execution, retries and caching."""

import asyncio

import httpx
import pytest

from pnwkit.core.errors import (
    GraphQLResponseError,
    QueryValidationError,
    RateLimitExceededError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
    TransportError,
)
from pnwkit.core.query_types import CacheOptions, CacheStats
from pnwkit.runtime.service_client import GraphQLService

from .conftest import graphql_response, request_query

QUERY = "query { me { key } }"
DATA = {"me": {"key": "abc"}}


def responses(*items):
    """Handler returning the given responses (or raising exceptions) in order."""
    queue = list(items)

    def handler(request):
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return handler


# =============================================================================
# Request shape and success
# =============================================================================


@pytest.mark.asyncio
async def test_returns_data_and_posts_query(make_service):
    service, recorder, requests = make_service(responses(graphql_response(DATA)))

    assert await service.query_call("key", QUERY) == DATA

    (request,) = requests
    assert request.method == "POST"
    assert request.url.host == "api.politicsandwar.com"
    assert request.url.path == "/graphql"
    assert request.headers["content-type"] == "application/json"
    assert request_query(request) == QUERY
    assert recorder.delays == []
    await service.close()


@pytest.mark.asyncio
async def test_api_key_is_url_encoded(make_service):
    api_key = "key with/slash&more=1"
    service, _, requests = make_service(responses(graphql_response(DATA)))

    await service.query_call(api_key, QUERY)

    url = requests[0].url
    assert url.params["api_key"] == api_key
    assert b"&" not in url.query
    await service.close()


@pytest.mark.asyncio
async def test_custom_endpoint(make_service):
    service, _, requests = make_service(
        responses(graphql_response(DATA)), endpoint="https://example.test/gql"
    )
    await service.query_call("key", QUERY)
    assert requests[0].url.host == "example.test"
    await service.close()


# =============================================================================
# Input validation
# =============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", None, 123])
async def test_rejects_invalid_api_key(make_service, api_key):
    service, _, requests = make_service(responses())
    with pytest.raises(QueryValidationError, match="Invalid API key"):
        await service.query_call(api_key, QUERY)
    assert requests == []


@pytest.mark.asyncio
async def test_rejects_empty_and_oversized_query(make_service):
    service, _, requests = make_service(responses(), max_query_size=100)

    with pytest.raises(QueryValidationError, match="must be a non-empty string"):
        await service.query_call("key", "")
    with pytest.raises(QueryValidationError, match="exceeds maximum size of 100"):
        await service.query_call("key", "q" * 101)
    assert requests == []


# =============================================================================
# Retries
# =============================================================================


@pytest.mark.asyncio
async def test_retries_server_errors_with_backoff(make_service):
    service, recorder, requests = make_service(
        responses(httpx.Response(500), httpx.Response(503), graphql_response(DATA))
    )

    assert await service.query_call("key", QUERY) == DATA
    assert len(requests) == 3
    assert recorder.delays == [1.0, 2.0]
    await service.close()


@pytest.mark.asyncio
async def test_rate_limit_exhausts_retries(make_service):
    service, recorder, requests = make_service(responses(*(httpx.Response(429) for _ in range(4))))

    with pytest.raises(RateLimitExceededError, match="Rate limit exceeded"):
        await service.query_call("key", QUERY)

    assert len(requests) == 4
    assert recorder.delays == [1.0, 2.0, 4.0]
    await service.close()


@pytest.mark.asyncio
async def test_graphql_errors_are_not_retried(make_service):
    service, recorder, requests = make_service(
        responses(graphql_response(errors=["Field 'x' not found", "Bad input"]))
    )

    with pytest.raises(GraphQLResponseError) as exc_info:
        await service.query_call("key", QUERY)

    assert str(exc_info.value) == "Field 'x' not found, Bad input"
    assert exc_info.value.messages == ["Field 'x' not found", "Bad input"]
    assert len(requests) == 1
    assert recorder.delays == []
    await service.close()


@pytest.mark.asyncio
async def test_client_error_is_not_retried(make_service):
    service, recorder, requests = make_service(responses(httpx.Response(401)))

    with pytest.raises(RequestFailedError, match="check API key"):
        await service.query_call("key", QUERY)
    assert len(requests) == 1
    await service.close()


@pytest.mark.asyncio
async def test_server_error_after_retries(make_service):
    service, recorder, _ = make_service(responses(*(httpx.Response(502) for _ in range(2))), max_retries=1)

    with pytest.raises(ServerError):
        await service.query_call("key", QUERY)
    assert recorder.delays == [1.0]
    await service.close()


@pytest.mark.asyncio
async def test_network_error_is_retried_without_leaking_url(make_service):
    def handler(request):
        raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

    service, recorder, requests = make_service(handler, max_retries=1, retry_delay=0.5)

    with pytest.raises(TransportError) as exc_info:
        await service.query_call("secret-key", QUERY)

    assert str(exc_info.value) == "Network error: ConnectError"
    assert "secret-key" not in str(exc_info.value)
    assert len(requests) == 2
    assert recorder.delays == [0.5]
    await service.close()


# =============================================================================
# Response format
# =============================================================================


@pytest.mark.asyncio
async def test_invalid_json(make_service):
    service, _, _ = make_service(responses(httpx.Response(200, content=b"<html>")))
    with pytest.raises(ResponseFormatError, match="Invalid response format"):
        await service.query_call("key", QUERY)
    await service.close()


@pytest.mark.asyncio
async def test_non_object_payload(make_service):
    service, _, requests = make_service(responses(httpx.Response(200, json=[1, 2])))
    with pytest.raises(ResponseFormatError):
        await service.query_call("key", QUERY)
    assert len(requests) == 1
    await service.close()


@pytest.mark.asyncio
async def test_missing_data_is_retried(make_service):
    service, recorder, _ = make_service(
        responses(httpx.Response(200, json={}), graphql_response(DATA))
    )
    assert await service.query_call("key", QUERY) == DATA
    assert recorder.delays == [1.0]
    await service.close()


@pytest.mark.asyncio
async def test_missing_data_error_message(make_service):
    service, _, _ = make_service(responses(httpx.Response(200, json={"data": None})), max_retries=0)
    with pytest.raises(ResponseFormatError, match="No data field in response"):
        await service.query_call("key", QUERY)
    await service.close()


# =============================================================================
# Timeouts
# =============================================================================


@pytest.mark.asyncio
async def test_transport_timeout(make_service):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service, _, requests = make_service(handler, max_retries=2)

    with pytest.raises(RequestTimeoutError, match="Request timeout after 30000ms"):
        await service.query_call("key", QUERY)
    assert len(requests) == 3
    await service.close()


@pytest.mark.asyncio
async def test_attempt_timeout(make_service):
    async def slow_handler(request):
        await asyncio.sleep(1)
        return graphql_response(DATA)

    service, _, _ = make_service(slow_handler, timeout=0.05, max_retries=0)

    with pytest.raises(RequestTimeoutError, match="Request timeout after 50ms"):
        await service.query_call("key", QUERY)
    await service.close()


# =============================================================================
# Pacing
# =============================================================================


@pytest.mark.asyncio
async def test_requests_are_spaced(make_service):
    service, recorder, _ = make_service(
        responses(graphql_response(DATA), graphql_response(DATA)), min_request_interval=0.1
    )

    await service.query_call("key", QUERY)
    assert recorder.delays == []

    await service.query_call("key", QUERY)
    (wait,) = recorder.delays
    assert 0 < wait <= 0.1
    await service.close()


# =============================================================================
# Cache
# =============================================================================


@pytest.mark.asyncio
async def test_cache_hit_ignores_whitespace(make_service):
    service, _, requests = make_service(responses(graphql_response(DATA)))
    service.initialize_cache(CacheOptions(enabled=True))

    first = await service.query_call("key", "query {\n    me { key }\n}")
    second = await service.query_call("key", "  query { me   { key } }  ")

    assert first == second == DATA
    assert len(requests) == 1
    assert service.get_cache_stats() == CacheStats(size=1, max=100)
    await service.close()


@pytest.mark.asyncio
async def test_cache_is_keyed_by_api_key(make_service):
    service, _, requests = make_service(responses(graphql_response(DATA), graphql_response(DATA)))
    service.initialize_cache(CacheOptions(enabled=True))

    await service.query_call("key-a", QUERY)
    await service.query_call("key-b", QUERY)

    assert len(requests) == 2
    assert service.get_cache_key("key-a", QUERY) != service.get_cache_key("key-b", QUERY)
    await service.close()


@pytest.mark.asyncio
async def test_failures_are_not_cached(make_service):
    service, _, requests = make_service(
        responses(graphql_response(errors=["boom"]), graphql_response(DATA))
    )
    service.initialize_cache(CacheOptions(enabled=True))

    with pytest.raises(GraphQLResponseError):
        await service.query_call("key", QUERY)
    assert await service.query_call("key", QUERY) == DATA
    assert len(requests) == 2
    await service.close()


@pytest.mark.asyncio
async def test_clear_cache(make_service):
    service, _, requests = make_service(responses(graphql_response(DATA), graphql_response(DATA)))
    service.initialize_cache(CacheOptions(enabled=True))

    await service.query_call("key", QUERY)
    service.clear_cache()
    assert service.get_cache_stats().size == 0

    await service.query_call("key", QUERY)
    assert len(requests) == 2
    await service.close()


def test_first_cache_configuration_wins():
    service = GraphQLService()
    service.initialize_cache(CacheOptions(enabled=True, max_size=10))
    service.initialize_cache(CacheOptions(enabled=True, max_size=500))
    assert service.get_cache_stats() == CacheStats(size=0, max=10)


def test_cache_disabled_by_default():
    service = GraphQLService()
    service.initialize_cache(None)
    service.initialize_cache(CacheOptions(enabled=False))

    assert not service.cache_enabled
    assert service.get_cache_stats() is None
    service.clear_cache()


def test_get_instance_is_shared():
    assert GraphQLService.get_instance() is GraphQLService.get_instance()

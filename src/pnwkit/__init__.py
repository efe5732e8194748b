"""
pnwkit - typed query builder and client for the Politics & War GraphQL API.

Builds filtered, paginated, arbitrarily nested queries with injection-safe
value serialization, and executes them with rate limiting, retries and an
optional response cache.

Usage:
    from pnwkit import PnWKit

    kit = PnWKit("your-api-key")
    alliances = await kit.queries.alliances() \\
        .select("id", "name", "score") \\
        .include("nations", lambda b: b.select("id", "nation_name").where({"vmode": False})) \\
        .first(5) \\
        .execute()
"""

from __future__ import annotations

from .client import PnWKit, Queries
from .core import (
    CacheOptions,
    CacheStats,
    GraphQLResponseError,
    NoDataReturnedError,
    PaginatedResult,
    PaginatorInfo,
    PnwKitError,
    QueryExecutionError,
    QueryValidationError,
    RateLimitExceededError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    SecurityGuardError,
    ServerError,
    SubqueryBuilder,
    SubqueryConfig,
    TransportError,
)
from .queries import QueryBuilder
from .runtime import GraphQLService, PnwKitConfig, ServiceConfig, load_config
from .utilities import Utilities

__version__ = "0.1.0"

__all__ = [
    "PnWKit",
    "Queries",
    "QueryBuilder",
    "Utilities",
    "SubqueryBuilder",
    "SubqueryConfig",
    "GraphQLService",
    "ServiceConfig",
    "PnwKitConfig",
    "load_config",
    "CacheOptions",
    "CacheStats",
    "PaginatedResult",
    "PaginatorInfo",
    "PnwKitError",
    "QueryValidationError",
    "SecurityGuardError",
    "TransportError",
    "RequestTimeoutError",
    "RateLimitExceededError",
    "ServerError",
    "RequestFailedError",
    "ResponseFormatError",
    "GraphQLResponseError",
    "NoDataReturnedError",
    "QueryExecutionError",
]

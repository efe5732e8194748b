"""
Core module - sanitization, subquery resolution and query assembly.

Everything here is synchronous and free of I/O.
"""

from __future__ import annotations

from .assembler import MAX_PAGE_SIZE, MAX_QUERY_SIZE, PAGINATOR_FIELDS, QueryAssembler
from .defs import QUERIES_WITHOUT_DATA_WRAPPER, EntityDef, RelationDef
from .errors import (
    GraphQLResponseError,
    NoDataReturnedError,
    PnwKitError,
    QueryExecutionError,
    QueryValidationError,
    RateLimitExceededError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    SecurityGuardError,
    ServerError,
    TransportError,
)
from .query_types import (
    CacheOptions,
    CacheStats,
    GraphQLRequest,
    GraphQLResponse,
    PaginatedResult,
    PaginatorInfo,
)
from .registry import EntityRegistry
from .sanitizer import (
    MAX_ARRAY_SIZE,
    MAX_FIELD_NAME_LENGTH,
    MAX_STRING_LENGTH,
    is_enum_value,
    sanitize_string,
    serialize_arguments,
    serialize_filter_value,
    serialize_object,
    validate_field_name,
)
from .subquery import (
    MAX_FIELDS_PER_LEVEL,
    MAX_NESTING_DEPTH,
    NestedRelation,
    ResolvedSubquery,
    SubqueryBuilder,
    SubqueryConfig,
    resolve_subquery,
)

__all__ = [
    # Definitions
    "EntityDef",
    "RelationDef",
    "QUERIES_WITHOUT_DATA_WRAPPER",
    "EntityRegistry",
    # Errors
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
    # Types
    "CacheOptions",
    "CacheStats",
    "GraphQLRequest",
    "GraphQLResponse",
    "PaginatedResult",
    "PaginatorInfo",
    # Sanitizer
    "MAX_STRING_LENGTH",
    "MAX_ARRAY_SIZE",
    "MAX_FIELD_NAME_LENGTH",
    "sanitize_string",
    "serialize_object",
    "serialize_filter_value",
    "serialize_arguments",
    "validate_field_name",
    "is_enum_value",
    # Subqueries
    "MAX_NESTING_DEPTH",
    "MAX_FIELDS_PER_LEVEL",
    "SubqueryBuilder",
    "SubqueryConfig",
    "NestedRelation",
    "ResolvedSubquery",
    "resolve_subquery",
    # Assembler
    "QueryAssembler",
    "MAX_QUERY_SIZE",
    "MAX_PAGE_SIZE",
    "PAGINATOR_FIELDS",
]

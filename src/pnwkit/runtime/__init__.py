"""
Runtime module - query execution, caching and configuration.
"""

from __future__ import annotations

from .cache import ResponseCache, build_cache_key, fnv1a_32, normalize_query, to_base36
from .config import PnwKitConfig, ServiceConfig, load_config
from .service_client import GraphQLService

__all__ = [
    "GraphQLService",
    "ResponseCache",
    "build_cache_key",
    "fnv1a_32",
    "normalize_query",
    "to_base36",
    "ServiceConfig",
    "PnwKitConfig",
    "load_config",
]

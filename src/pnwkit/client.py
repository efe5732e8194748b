"""
PnWKit client - entry point for building and executing queries.

Usage:
    from pnwkit import PnWKit, CacheOptions

    kit = PnWKit("your-api-key", cache=CacheOptions(enabled=True, ttl=300))

    nations = await kit.queries.nations() \\
        .select("id", "nation_name", "score") \\
        .where({"min_score": 1000}) \\
        .first(10) \\
        .execute()
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .core.errors import QueryValidationError
from .core.query_types import CacheOptions, CacheStats
from .core.registry import EntityRegistry
from .queries.base import QueryBuilder
from .queries.catalogue import build_registry
from .queries.entities import QUERY_CLASSES
from .runtime.config import PnwKitConfig
from .runtime.service_client import GraphQLService
from .utilities import Utilities

logger = logging.getLogger(__name__)


class Queries:
    """
    Factory namespace: ``kit.queries.<name>()`` returns a fresh builder.

    Builders are never reused, so filters set on one query cannot leak
    into the next.
    """

    def __init__(self, kit: PnWKit):
        self._kit = kit

    def __getattr__(self, name: str):
        query_cls = QUERY_CLASSES.get(name)
        if query_cls is None:
            raise AttributeError(f"Unknown query '{name}'. Available: {sorted(QUERY_CLASSES)}")

        def factory() -> QueryBuilder:
            return self._kit.query(name)

        factory.__name__ = name
        return factory

    def __dir__(self) -> list[str]:
        return sorted(QUERY_CLASSES)


class PnWKit:
    """
    Client for the Politics & War GraphQL API.

    All clients created without an explicit ``service`` share the
    process-wide default GraphQLService, and with it one rate limiter and one
    cache. The first client that enables caching decides the cache options.
    """

    def __init__(
        self,
        api_key: str,
        *,
        service: Optional[GraphQLService] = None,
        cache: Union[CacheOptions, dict[str, Any], None] = None,
        config: Optional[PnwKitConfig] = None,
        registry: Optional[EntityRegistry] = None,
    ):
        """
        Initialize client.

        Args:
            api_key: API key for authentication
            service: Execution service to use (default: shared instance, or a
                new one built from ``config`` when config is given)
            cache: Cache options; overrides ``config.cache``
            config: Settings loaded with ``load_config`` or built by hand
            registry: Entity catalogue (default: the built-in one)
        """
        if not isinstance(api_key, str) or not api_key:
            raise QueryValidationError("Invalid API key: must be a non-empty string")

        self._api_key = api_key

        if service is None:
            if config is not None:
                service = GraphQLService(config.service)
            else:
                service = GraphQLService.get_instance()
        self.service = service

        if isinstance(cache, dict):
            cache = CacheOptions(**cache)
        if cache is None and config is not None:
            cache = config.cache
        self.service.initialize_cache(cache)

        self.registry = registry or build_registry()
        self.queries = Queries(self)
        self.utilities = Utilities()

    def query(self, name: str) -> QueryBuilder:
        """Create a fresh builder for a query by factory name (e.g. "nations")."""
        query_cls = QUERY_CLASSES.get(name)
        if query_cls is None:
            raise QueryValidationError(f"Unknown query '{name}'")
        logger.debug(f"Creating {query_cls.__name__}")
        return query_cls(self.service, self._api_key, registry=self.registry)

    def clear_cache(self) -> None:
        """Empty the response cache of this client's service."""
        self.service.clear_cache()

    def get_cache_stats(self) -> Optional[CacheStats]:
        """Cache size and capacity, or None when caching is disabled."""
        return self.service.get_cache_stats()

    async def close(self) -> None:
        """
        Close the service's HTTP client.

        Safe on a shared service: the next query on it opens a new client.
        """
        await self.service.close()

    async def __aenter__(self) -> PnWKit:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

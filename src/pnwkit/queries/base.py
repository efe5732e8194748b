"""
Base query builder.

Each root query of the API is a thin subclass naming its ``query_name`` and
entity. A builder is created fresh per query, configured with the fluent
methods and consumed once by ``execute()``:

    nations = await kit.queries.nations() \\
        .select("id", "nation_name", "score") \\
        .where({"min_score": 1000, "orderBy": [{"column": "SCORE", "order": "DESC"}]}) \\
        .include("alliance", lambda b: b.select("id", "name")) \\
        .first(10) \\
        .execute()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional

from ..core.assembler import MAX_PAGE_SIZE, QueryAssembler
from ..core.defs import QUERIES_WITHOUT_DATA_WRAPPER, EntityDef
from ..core.errors import NoDataReturnedError, PnwKitError, QueryExecutionError, QueryValidationError
from ..core.query_types import PaginatedResult, PaginatorInfo
from ..core.registry import EntityRegistry
from ..core.sanitizer import validate_field_name
from ..core.subquery import MAX_FIELDS_PER_LEVEL, SubqueryConfigLike

if TYPE_CHECKING:
    from ..runtime.service_client import GraphQLService

logger = logging.getLogger(__name__)


class QueryBuilder:
    """
    Fluent builder for one root query.

    Subclasses set:
        query_name: Root field name (e.g. "nations")
        entity_name: Entity in the registry, used to check ``include`` names
    """

    query_name: ClassVar[str] = ""
    entity_name: ClassVar[Optional[str]] = None

    def __init__(
        self,
        service: GraphQLService,
        api_key: str,
        registry: Optional[EntityRegistry] = None,
    ):
        """
        Initialize builder.

        Args:
            service: Execution service the query is sent through
            api_key: API key used for this query
            registry: Entity catalogue for relation checks
        """
        if not self.query_name:
            raise TypeError(f"{type(self).__name__} must define query_name")

        self._service = service
        self._api_key = api_key
        self._registry = registry
        self._entity: Optional[EntityDef] = None
        if registry is not None and self.entity_name:
            self._entity = registry.get(self.entity_name)

        self._selected_fields: list[str] = []
        self._filters: dict[str, Any] = {}
        self._subqueries: dict[str, SubqueryConfigLike] = {}
        self._limit: Optional[int] = None
        self._page: Optional[int] = None

    # === Fluent configuration ===

    def select(self, *fields: str) -> QueryBuilder:
        """
        Select root fields, replacing any previous selection.

        Raises:
            QueryValidationError: If no field is given, too many are given or a
                name is not a valid identifier
        """
        if not fields:
            raise QueryValidationError("At least one field must be selected")

        unique = list(dict.fromkeys(fields))
        if len(unique) > MAX_FIELDS_PER_LEVEL:
            raise QueryValidationError(f"Maximum {MAX_FIELDS_PER_LEVEL} fields exceeded")
        for name in unique:
            validate_field_name(name)

        self._selected_fields = unique
        return self

    def where(self, filters: Mapping[str, Any]) -> QueryBuilder:
        """Set the filter arguments, replacing previous ones."""
        self._filters = dict(filters)
        return self

    def include(self, relation: str, config: SubqueryConfigLike) -> QueryBuilder:
        """
        Include a relation with its own selection.

        ``config`` is a callback receiving a SubqueryBuilder, or a
        SubqueryConfig. It is evaluated when the query is built.
        """
        validate_field_name(relation)
        if self._registry is not None:
            self._registry.relation_target(self._entity, relation)
        self._subqueries[relation] = config
        return self

    def first(self, count: int) -> QueryBuilder:
        """Set the page size; values above 500 are clamped to 500."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise QueryValidationError(f"first() expects a positive integer, got {count!r}")
        self._limit = min(count, MAX_PAGE_SIZE)
        return self

    def page(self, number: int) -> QueryBuilder:
        """Set the 1-based page number."""
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise QueryValidationError(f"page() expects a positive integer, got {number!r}")
        self._page = number
        return self

    # === Read-back ===

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    @property
    def page_number(self) -> Optional[int]:
        return self._page

    @property
    def selected_fields(self) -> list[str]:
        return list(self._selected_fields)

    @property
    def filters(self) -> dict[str, Any]:
        return dict(self._filters)

    @property
    def data_wrapper(self) -> bool:
        """Whether the root response nests rows under ``data``."""
        if self._entity is not None:
            return self._entity.data_wrapper
        return self.query_name not in QUERIES_WITHOUT_DATA_WRAPPER

    # === Build and execute ===

    def build_query(self, include_paginator: bool = False) -> str:
        """Render the query text."""
        if not self._selected_fields and not self._subqueries:
            raise QueryValidationError("At least one field must be selected")

        if include_paginator and self._entity is not None and not self._entity.paginated:
            raise QueryValidationError(f"{self.query_name} query does not support pagination")

        assembler = QueryAssembler(
            self.query_name,
            entity=self._entity,
            registry=self._registry,
            data_wrapper=self.data_wrapper,
        )
        return assembler.assemble(
            fields=self._selected_fields,
            filters=self._filters,
            subqueries=self._subqueries,
            limit=self._limit,
            page=self._page,
            include_paginator=include_paginator,
        )

    async def execute(self, with_paginator: bool = False) -> Any:
        """
        Build and send the query.

        Args:
            with_paginator: Also request and return paginator info

        Returns:
            The rows (or object) under the root field, or a PaginatedResult
            when with_paginator is True

        Raises:
            QueryExecutionError: Wrapping any build, transport or response error
        """
        try:
            query = self.build_query(with_paginator)
            logger.debug(f"Executing {self.query_name} query")
            result = await self._service.query_call(self._api_key, query)
            return self._unwrap(result, with_paginator)
        except QueryExecutionError:
            raise
        except PnwKitError as e:
            raise QueryExecutionError(self.query_name, str(e), retryable=e.retryable) from e
        except Exception as e:
            raise QueryExecutionError(self.query_name, str(e)) from e

    def _unwrap(self, result: Mapping[str, Any], with_paginator: bool) -> Any:
        """Extract the root field's rows from the response data."""
        query_data = result.get(self.query_name)
        if query_data is None:
            raise NoDataReturnedError(self.query_name)

        if isinstance(query_data, Mapping) and "data" in query_data:
            rows = query_data["data"]
        else:
            rows = query_data

        if not with_paginator:
            return rows

        paginator = query_data.get("paginatorInfo") if isinstance(query_data, Mapping) else None
        return PaginatedResult(
            data=rows,
            paginator_info=PaginatorInfo.model_validate(paginator) if paginator else None,
        )

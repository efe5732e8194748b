"""
Query assembler - renders builder state into GraphQL query text.

Handles:
- Field name and count validation for the root selection
- Recursive rendering of included relations with their filter arguments
- Pagination and filter arguments of the root field
- The optional ``paginatorInfo`` block and the ``data { }`` envelope
- The final query size bound
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .defs import QUERIES_WITHOUT_DATA_WRAPPER, EntityDef
from .errors import QueryValidationError
from .registry import EntityRegistry
from .sanitizer import serialize_arguments, validate_field_name
from .subquery import MAX_FIELDS_PER_LEVEL, SubqueryConfigLike, resolve_subquery

logger = logging.getLogger(__name__)


MAX_QUERY_SIZE = 50_000
MAX_PAGE_SIZE = 500
INDENT_UNIT = "    "

PAGINATOR_FIELDS = (
    "count",
    "currentPage",
    "firstItem",
    "hasMorePages",
    "lastItem",
    "lastPage",
    "perPage",
    "total",
)


class QueryAssembler:
    """
    Renders the query for one root field.

    Usage:
        assembler = QueryAssembler("nations")
        text = assembler.assemble(
            fields=["id", "nation_name"],
            filters={"min_score": 1000},
            subqueries={"alliance": lambda b: b.select("id", "name")},
            limit=10,
        )
    """

    def __init__(
        self,
        query_name: str,
        entity: Optional[EntityDef] = None,
        registry: Optional[EntityRegistry] = None,
        data_wrapper: Optional[bool] = None,
    ):
        """
        Initialize assembler.

        Args:
            query_name: Root field of the query (e.g. "nations")
            entity: Entity served by the root field, used to check relations
            registry: Registry resolving relation targets
            data_wrapper: Force the ``data { }`` envelope on or off; by default
                it is used unless query_name is in QUERIES_WITHOUT_DATA_WRAPPER
        """
        self.query_name = validate_field_name(query_name)
        self.entity = entity
        self.registry = registry
        if data_wrapper is None:
            data_wrapper = query_name not in QUERIES_WITHOUT_DATA_WRAPPER
        self.data_wrapper = data_wrapper

    def assemble(
        self,
        fields: list[str],
        filters: Mapping[str, Any],
        subqueries: Mapping[str, SubqueryConfigLike],
        limit: Optional[int] = None,
        page: Optional[int] = None,
        include_paginator: bool = False,
    ) -> str:
        """
        Build the final query string.

        Args:
            fields: Selected root fields
            filters: Root filter arguments, rendered after pagination
            subqueries: Relation name -> subquery configuration
            limit: Value of the ``first`` argument
            page: Value of the ``page`` argument
            include_paginator: Append the ``paginatorInfo`` block

        Returns:
            Complete GraphQL query text

        Raises:
            QueryValidationError: On invalid fields, filters or an oversized query
        """
        if len(fields) > MAX_FIELDS_PER_LEVEL:
            raise QueryValidationError(f"Maximum {MAX_FIELDS_PER_LEVEL} fields exceeded")
        for name in fields:
            validate_field_name(name)

        # Relations with a subquery are rendered as blocks, not leaves
        body_depth = 3 if self.data_wrapper else 2
        lines = [self._indent(body_depth) + f for f in fields if f not in subqueries]

        for relation, config in subqueries.items():
            validate_field_name(relation)
            target = None
            if self.registry is not None:
                target = self.registry.relation_target(self.entity, relation)
            lines.extend(self._render_relation(relation, config, body_depth, 0, target))

        arguments: dict[str, Any] = {}
        if limit:
            arguments["first"] = min(limit, MAX_PAGE_SIZE)
        if page:
            arguments["page"] = page
        rendered_args = serialize_arguments(arguments)
        rendered_args.extend(serialize_arguments(filters))
        args_string = f"({', '.join(rendered_args)})" if rendered_args else ""

        out = ["query {", f"{self._indent(1)}{self.query_name}{args_string} {{"]
        if self.data_wrapper:
            out.append(f"{self._indent(2)}data {{")
            out.extend(lines)
            out.append(f"{self._indent(2)}}}")
        else:
            out.extend(lines)
        if include_paginator:
            out.append(f"{self._indent(2)}paginatorInfo {{")
            out.extend(self._indent(3) + name for name in PAGINATOR_FIELDS)
            out.append(f"{self._indent(2)}}}")
        out.append(f"{self._indent(1)}}}")
        out.append("}")

        query = "\n".join(out)
        if len(query) > MAX_QUERY_SIZE:
            raise QueryValidationError(
                f"Query size exceeds maximum of {MAX_QUERY_SIZE} characters"
            )

        logger.debug(f"Assembled {self.query_name} query ({len(query)} chars)")
        return query

    def _render_relation(
        self,
        relation: str,
        config: SubqueryConfigLike,
        indent: int,
        depth: int,
        entity: Optional[EntityDef],
    ) -> list[str]:
        """Render ``relation(args) { ... }`` and everything nested below it."""
        resolved = resolve_subquery(config, depth, entity=entity, registry=self.registry)

        params = serialize_arguments(resolved.filter_params)
        param_string = f"({', '.join(params)})" if params else ""

        lines = [f"{self._indent(indent)}{relation}{param_string} {{"]
        lines.extend(self._indent(indent + 1) + name for name in resolved.scalar_fields)
        for nested in resolved.nested_relations:
            lines.extend(
                self._render_relation(nested.name, nested.config, indent + 1, depth + 1, nested.entity)
            )
        lines.append(f"{self._indent(indent)}}}")
        return lines

    @staticmethod
    def _indent(level: int) -> str:
        return INDENT_UNIT * level

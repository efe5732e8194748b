"""
Subquery configuration and resolution.

A subquery describes the nested selection of an included relation. It can be
given in two forms, which resolve identically:

    # Callback receiving a fresh SubqueryBuilder
    lambda b: b.select("id", "name").where({"min_score": 1000}).include(
        "nations", lambda n: n.select("id")
    )

    # Declarative
    SubqueryConfig(
        fields=["id", "name"],
        filters={"min_score": 1000},
        nested={"nations": SubqueryConfig(fields=["id"])},
    )

Configurations are stored unevaluated and resolved one level at a time by the
assembler; resolution enforces the nesting depth and per-level field caps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from .defs import EntityDef
from .errors import QueryValidationError, SecurityGuardError
from .registry import EntityRegistry
from .sanitizer import validate_field_name


MAX_NESTING_DEPTH = 10
MAX_FIELDS_PER_LEVEL = 100


class SubqueryBuilder:
    """
    Fluent builder handed to subquery callbacks.

    ``select`` replaces the selection, ``where`` merges filters across calls and
    ``include`` registers nested relations without evaluating them.
    """

    def __init__(
        self,
        entity: Optional[EntityDef] = None,
        registry: Optional[EntityRegistry] = None,
    ):
        self.entity = entity
        self.registry = registry
        self._fields: list[str] = []
        self._filters: dict[str, Any] = {}
        self._nested: dict[str, SubqueryConfigLike] = {}

    def select(self, *fields: str) -> SubqueryBuilder:
        """Select fields of the related entity (duplicates dropped, order kept)."""
        unique = list(dict.fromkeys(fields))
        if len(unique) > MAX_FIELDS_PER_LEVEL:
            raise QueryValidationError(
                f"Maximum {MAX_FIELDS_PER_LEVEL} fields per level exceeded"
            )
        for name in unique:
            validate_field_name(name)
        self._fields = unique
        return self

    def where(self, filters: Mapping[str, Any]) -> SubqueryBuilder:
        """Merge filter arguments for the relation."""
        self._filters = {**self._filters, **dict(filters)}
        return self

    def include(self, relation: str, config: SubqueryConfigLike) -> SubqueryBuilder:
        """Register a nested relation; ``config`` is evaluated at build time."""
        validate_field_name(relation)
        if self.registry is not None:
            self.registry.relation_target(self.entity, relation)
        self._nested[relation] = config
        return self

    @property
    def fields(self) -> list[str]:
        """Selected fields."""
        return list(self._fields)

    @property
    def filters(self) -> dict[str, Any]:
        """Accumulated filters."""
        return dict(self._filters)

    @property
    def nested(self) -> dict[str, SubqueryConfigLike]:
        """Nested relation name -> configuration."""
        return dict(self._nested)


@dataclass
class SubqueryConfig:
    """Declarative subquery: selected fields, filters and nested relations."""
    fields: list[str] = field(default_factory=list)
    filters: dict[str, Any] = field(default_factory=dict)
    nested: dict[str, SubqueryConfigLike] = field(default_factory=dict)

    def __call__(self, builder: SubqueryBuilder) -> SubqueryBuilder:
        """Apply this configuration to a builder, like a callback would."""
        if self.fields:
            builder.select(*self.fields)
        if self.filters:
            builder.where(self.filters)
        for relation, config in self.nested.items():
            builder.include(relation, config)
        return builder


SubqueryConfigLike = Union[SubqueryConfig, Callable[[SubqueryBuilder], SubqueryBuilder]]


@dataclass
class NestedRelation:
    """A nested relation awaiting resolution at the next depth."""
    name: str
    config: SubqueryConfigLike
    entity: Optional[EntityDef] = None


@dataclass
class ResolvedSubquery:
    """One evaluated level of a subquery."""
    scalar_fields: list[str]
    nested_relations: list[NestedRelation]
    filter_params: dict[str, Any]


def resolve_subquery(
    config: SubqueryConfigLike,
    depth: int = 0,
    entity: Optional[EntityDef] = None,
    registry: Optional[EntityRegistry] = None,
) -> ResolvedSubquery:
    """
    Evaluate one level of a subquery configuration.

    Nested relations are returned unresolved; the caller recurses into them
    with ``depth + 1``.

    Args:
        config: Callback or SubqueryConfig
        depth: Current nesting depth (0 for a relation of the root query)
        entity: Entity the relation points to, if known
        registry: Registry used to resolve nested relation targets

    Returns:
        ResolvedSubquery with scalar fields, nested relations and filters

    Raises:
        QueryValidationError: If config is not callable, does not return a
            SubqueryBuilder or selects too many fields
        SecurityGuardError: If depth exceeds MAX_NESTING_DEPTH
    """
    if not callable(config):
        raise QueryValidationError("Invalid subquery config: expected function")

    if depth > MAX_NESTING_DEPTH:
        raise SecurityGuardError(f"Maximum nesting depth of {MAX_NESTING_DEPTH} exceeded")

    builder = SubqueryBuilder(entity=entity, registry=registry)
    configured = config(builder)
    if not isinstance(configured, SubqueryBuilder):
        raise QueryValidationError(
            "Invalid subquery config: function must return the builder it was given"
        )

    fields = configured.fields
    nested = configured.nested

    if len(fields) > MAX_FIELDS_PER_LEVEL:
        raise QueryValidationError(f"Maximum {MAX_FIELDS_PER_LEVEL} fields per level exceeded")

    nested_relations = []
    for relation, nested_config in nested.items():
        target = registry.relation_target(entity, relation) if registry is not None else None
        nested_relations.append(NestedRelation(name=relation, config=nested_config, entity=target))

    return ResolvedSubquery(
        scalar_fields=[f for f in fields if f not in nested],
        nested_relations=nested_relations,
        filter_params=configured.filters,
    )

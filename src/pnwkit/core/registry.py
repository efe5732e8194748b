"""
Entity registry - lookup table for entity definitions.

The builder uses it to resolve an included relation to its target entity, so
nested sub-builders can check relation names at every level.

Usage:
    registry = EntityRegistry()
    registry.register(EntityDef(name="Nation", query_name="nations", relations={...}))

    registry.get("Nation")
    registry.get_by_query_name("nations")
"""

from __future__ import annotations

from typing import Iterator, Optional

from .defs import EntityDef, RelationDef
from .errors import QueryValidationError


class EntityRegistry:
    """Collects entity definitions by entity name."""

    def __init__(self, entities: Optional[list[EntityDef]] = None):
        self._entities: dict[str, EntityDef] = {}
        for entity in entities or []:
            self.register(entity)

    def register(self, entity: EntityDef) -> EntityDef:
        """Register an entity, replacing any previous definition with the same name."""
        self._entities[entity.name] = entity
        return entity

    def get(self, name: str) -> Optional[EntityDef]:
        """Get entity definition by name."""
        return self._entities.get(name)

    def get_by_query_name(self, query_name: str) -> Optional[EntityDef]:
        """Get the entity served by a root query field."""
        for entity in self._entities.values():
            if entity.query_name == query_name:
                return entity
        return None

    def relation_target(self, entity: Optional[EntityDef], relation: str) -> Optional[EntityDef]:
        """
        Resolve a relation of ``entity`` to the target entity definition.

        Returns None when the entity is unknown (relations are then unchecked).

        Raises:
            QueryValidationError: If the entity declares relations and this is not one
        """
        if entity is None or not entity.relations:
            return None

        rel: Optional[RelationDef] = entity.get_relation(relation)
        if rel is None:
            raise QueryValidationError(
                f"Entity {entity.name} has no relation '{relation}'. "
                f"Available: {sorted(entity.relations)}"
            )
        return self._entities.get(rel.target)

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[EntityDef]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

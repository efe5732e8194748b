"""
Core dataclass definitions for the API's entity catalogue.

An entity is one root resource of the external schema (nations, alliances, ...).
Only what the builder needs at runtime is modelled here: the root query name,
the relation table and the response envelope shape. Field lists live in the
external schema and are not duplicated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional


# Root fields whose response is not wrapped in a ``data { }`` envelope
QUERIES_WITHOUT_DATA_WRAPPER = frozenset({
    "me",
    "treasures",
    "colors",
    "game_info",
    "top_trade_info",
})


@dataclass(frozen=True)
class RelationDef:
    """Definition of a relation between entities."""
    name: str
    target: str  # target entity name
    cardinality: Literal["one", "many"] = "many"


@dataclass
class EntityDef:
    """Definition of one entity of the external schema."""
    name: str
    query_name: Optional[str] = None  # root field, None if only reachable as a relation
    relations: dict[str, RelationDef] = field(default_factory=dict)
    paginated: bool = True  # root supports first/page and paginatorInfo

    @property
    def data_wrapper(self) -> bool:
        """Whether the root response nests its rows under ``data``."""
        return self.query_name is not None and self.query_name not in QUERIES_WITHOUT_DATA_WRAPPER

    def get_relation(self, name: str) -> Optional[RelationDef]:
        """Get a relation definition by name."""
        return self.relations.get(name)

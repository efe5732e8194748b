"""
Queries module - per-entity builders and the entity catalogue.
"""

from __future__ import annotations

from .base import QueryBuilder
from .catalogue import ENTITIES, build_registry
from .entities import (
    QUERY_CLASSES,
    ActivityStatsQuery,
    AlliancesQuery,
    ApiKeyDetailsQuery,
    BankrecsQuery,
    BannedNationsQuery,
    BountiesQuery,
    BulletinRepliesQuery,
    BulletinsQuery,
    CitiesQuery,
    ColorsQuery,
    EmbargoesQuery,
    GameInfoQuery,
    NationResourceStatsQuery,
    NationsQuery,
    ResourceStatsQuery,
    TopTradeInfoQuery,
    TradePricesQuery,
    TradesQuery,
    TreasuresQuery,
    TreasureTradesQuery,
    TreatiesQuery,
    WarAttacksQuery,
    WarsQuery,
)

__all__ = [
    "QueryBuilder",
    "ENTITIES",
    "build_registry",
    "QUERY_CLASSES",
    "ActivityStatsQuery",
    "AlliancesQuery",
    "ApiKeyDetailsQuery",
    "BankrecsQuery",
    "BannedNationsQuery",
    "BountiesQuery",
    "BulletinRepliesQuery",
    "BulletinsQuery",
    "CitiesQuery",
    "ColorsQuery",
    "EmbargoesQuery",
    "GameInfoQuery",
    "NationResourceStatsQuery",
    "NationsQuery",
    "ResourceStatsQuery",
    "TopTradeInfoQuery",
    "TradePricesQuery",
    "TradesQuery",
    "TreasuresQuery",
    "TreasureTradesQuery",
    "TreatiesQuery",
    "WarAttacksQuery",
    "WarsQuery",
]

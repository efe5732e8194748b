"""
Per-entity query builders.

Each class only names its root field and entity; all behaviour lives in
QueryBuilder.
"""

from __future__ import annotations

from .base import QueryBuilder


class NationsQuery(QueryBuilder):
    query_name = "nations"
    entity_name = "Nation"


class AlliancesQuery(QueryBuilder):
    query_name = "alliances"
    entity_name = "Alliance"


class CitiesQuery(QueryBuilder):
    query_name = "cities"
    entity_name = "City"


class WarsQuery(QueryBuilder):
    query_name = "wars"
    entity_name = "War"


class WarAttacksQuery(QueryBuilder):
    query_name = "war_attacks"
    entity_name = "WarAttack"


class TradesQuery(QueryBuilder):
    query_name = "trades"
    entity_name = "Trade"


class TreatiesQuery(QueryBuilder):
    query_name = "treaties"
    entity_name = "Treaty"


class BountiesQuery(QueryBuilder):
    query_name = "bounties"
    entity_name = "Bounty"


class BankrecsQuery(QueryBuilder):
    query_name = "bankrecs"
    entity_name = "Bankrec"


class BulletinsQuery(QueryBuilder):
    query_name = "bulletins"
    entity_name = "Bulletin"


class BulletinRepliesQuery(QueryBuilder):
    query_name = "bulletin_replies"
    entity_name = "BulletinReply"


class EmbargoesQuery(QueryBuilder):
    query_name = "embargoes"
    entity_name = "Embargo"


class BannedNationsQuery(QueryBuilder):
    query_name = "banned_nations"
    entity_name = "BannedNation"


class TreasuresQuery(QueryBuilder):
    query_name = "treasures"
    entity_name = "Treasure"


class TreasureTradesQuery(QueryBuilder):
    query_name = "treasure_trades"
    entity_name = "TreasureTrade"


class ColorsQuery(QueryBuilder):
    query_name = "colors"
    entity_name = "Color"


class TradePricesQuery(QueryBuilder):
    query_name = "tradeprices"
    entity_name = "Tradeprice"


class TopTradeInfoQuery(QueryBuilder):
    query_name = "top_trade_info"
    entity_name = "TopTradeInfo"


class GameInfoQuery(QueryBuilder):
    query_name = "game_info"
    entity_name = "GameInfo"


class ApiKeyDetailsQuery(QueryBuilder):
    query_name = "me"
    entity_name = "ApiKeyDetails"


class ActivityStatsQuery(QueryBuilder):
    query_name = "activity_stats"
    entity_name = "ActivityStat"


class ResourceStatsQuery(QueryBuilder):
    query_name = "resource_stats"
    entity_name = "ResourceStat"


class NationResourceStatsQuery(QueryBuilder):
    query_name = "nation_resource_stats"
    entity_name = "NationResourceStat"


# Factory name on ``PnWKit.queries`` -> builder class
QUERY_CLASSES: dict[str, type[QueryBuilder]] = {
    "nations": NationsQuery,
    "alliances": AlliancesQuery,
    "cities": CitiesQuery,
    "wars": WarsQuery,
    "war_attacks": WarAttacksQuery,
    "trades": TradesQuery,
    "treaties": TreatiesQuery,
    "bounties": BountiesQuery,
    "bankrecs": BankrecsQuery,
    "bulletins": BulletinsQuery,
    "bulletin_replies": BulletinRepliesQuery,
    "embargoes": EmbargoesQuery,
    "banned_nations": BannedNationsQuery,
    "treasures": TreasuresQuery,
    "treasure_trades": TreasureTradesQuery,
    "colors": ColorsQuery,
    "trade_prices": TradePricesQuery,
    "top_trade_info": TopTradeInfoQuery,
    "game_info": GameInfoQuery,
    "api_key_details": ApiKeyDetailsQuery,
    "activity_stats": ActivityStatsQuery,
    "resource_stats": ResourceStatsQuery,
    "nation_resource_stats": NationResourceStatsQuery,
}

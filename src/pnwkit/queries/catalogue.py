"""
Entity catalogue of the Politics & War GraphQL API.

Relation tables mirror the external schema; field lists are not modelled.
Relation cardinality decides whether the API returns one object or a list
under the relation; the builder only uses the names.
"""

from __future__ import annotations

from ..core.defs import EntityDef, RelationDef
from ..core.registry import EntityRegistry


def _one(name: str, target: str) -> RelationDef:
    return RelationDef(name=name, target=target, cardinality="one")


def _many(name: str, target: str) -> RelationDef:
    return RelationDef(name=name, target=target, cardinality="many")


def _relations(*relations: RelationDef) -> dict[str, RelationDef]:
    return {r.name: r for r in relations}


ENTITIES: list[EntityDef] = [
    EntityDef(
        name="Nation",
        query_name="nations",
        relations=_relations(
            _one("alliance", "Alliance"),
            _one("alliance_position_info", "AlliancePosition"),
            _many("awards", "Award"),
            _many("bankrecs", "Bankrec"),
            _many("bounties", "Bounty"),
            _many("bulletins", "Bulletin"),
            _many("bulletin_replies", "BulletinReply"),
            _many("cities", "City"),
            _many("trades", "Trade"),
            _many("taxrecs", "Bankrec"),
            _many("treasures", "Treasure"),
            _many("wars", "War"),
        ),
    ),
    EntityDef(
        name="Alliance",
        query_name="alliances",
        relations=_relations(
            _many("nations", "Nation"),
            _many("bankrecs", "Bankrec"),
            _many("taxrecs", "Bankrec"),
            _many("treaties", "Treaty"),
            _many("wars", "War"),
            _many("alliance_positions", "AlliancePosition"),
        ),
    ),
    EntityDef(name="City", query_name="cities", relations=_relations(_one("nation", "Nation"))),
    EntityDef(
        name="War",
        query_name="wars",
        relations=_relations(
            _one("attacker", "Nation"),
            _one("defender", "Nation"),
            _one("att_alliance", "Alliance"),
            _one("def_alliance", "Alliance"),
            _many("attacks", "WarAttack"),
        ),
    ),
    EntityDef(
        name="WarAttack",
        query_name="war_attacks",
        relations=_relations(
            _one("attacker", "Nation"),
            _one("defender", "Nation"),
            _one("war", "War"),
        ),
    ),
    EntityDef(
        name="Trade",
        query_name="trades",
        relations=_relations(_one("sender", "Nation"), _one("receiver", "Nation")),
    ),
    EntityDef(
        name="Treaty",
        query_name="treaties",
        relations=_relations(_one("alliance1", "Alliance"), _one("alliance2", "Alliance")),
    ),
    EntityDef(name="Bounty", query_name="bounties", relations=_relations(_one("nation", "Nation"))),
    EntityDef(name="Bankrec", query_name="bankrecs"),
    EntityDef(name="Bulletin", query_name="bulletins", relations=_relations(_one("nation", "Nation"))),
    EntityDef(
        name="BulletinReply",
        query_name="bulletin_replies",
        relations=_relations(_one("nation", "Nation"), _one("bulletin", "Bulletin")),
    ),
    EntityDef(
        name="Embargo",
        query_name="embargoes",
        relations=_relations(_one("sender", "Nation"), _one("receiver", "Nation")),
    ),
    EntityDef(name="BannedNation", query_name="banned_nations"),
    EntityDef(
        name="Treasure",
        query_name="treasures",
        relations=_relations(_one("nation", "Nation")),
        paginated=False,
    ),
    EntityDef(
        name="TreasureTrade",
        query_name="treasure_trades",
        relations=_relations(_one("sender", "Nation"), _one("receiver", "Nation")),
    ),
    EntityDef(name="Color", query_name="colors", paginated=False),
    EntityDef(name="Tradeprice", query_name="tradeprices"),
    EntityDef(name="TopTradeInfo", query_name="top_trade_info", paginated=False),
    EntityDef(name="GameInfo", query_name="game_info", paginated=False),
    EntityDef(
        name="ApiKeyDetails",
        query_name="me",
        relations=_relations(_one("nation", "Nation")),
        paginated=False,
    ),
    EntityDef(name="ActivityStat", query_name="activity_stats"),
    EntityDef(name="ResourceStat", query_name="resource_stats"),
    EntityDef(name="NationResourceStat", query_name="nation_resource_stats"),
    # Reachable only through relations
    EntityDef(name="AlliancePosition"),
    EntityDef(name="Award"),
]


def build_registry() -> EntityRegistry:
    """Create a registry holding the whole catalogue."""
    return EntityRegistry(ENTITIES)

"""
Cross-reference resolver facade.

Wraps the relation functions of this package around one DatasetStore.
List methods return plain rows and raise on a hard failure; `resolve`
and the `*_relations` methods return RelationResult objects so callers
can tell omitted rows from failures.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..game_data.models import GameMap, Npc
from ..game_data.store import DatasetStore
from . import items, maps, npcs, quests
from .results import RelationResult
from .rows import (
    BuyOfferRow,
    ChestRow,
    ChestSpawnRow,
    CraftableRow,
    CraftOfferRow,
    GatherSpotRow,
    ItemDropRow,
    MapGatherRow,
    MapSpawnRow,
    NamedRef,
    NpcDropRow,
    NpcSpawnRow,
    QuestRewardRow,
    RewardItemRow,
    SignRow,
    SoldByRow,
    WarpRow,
)

RelationFn = Callable[[DatasetStore, int], RelationResult]

RELATIONS: Dict[str, Dict[str, RelationFn]] = {
    "item": items.ITEM_RELATIONS,
    "npc": npcs.NPC_RELATIONS,
    "map": maps.MAP_RELATIONS,
    "quest": quests.QUEST_RELATIONS,
}


class CrossReferenceResolver:
    """Read-only joins across the collections of a DatasetStore."""

    def __init__(self, store: DatasetStore):
        self.store = store
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(self, entity: str, relation: str, entity_id: int) -> RelationResult:
        """Resolve one named relation of an entity.

        Args:
            entity: "item", "npc", "map" or "quest"
            relation: Relation name, e.g. "drops" or "chests"
            entity_id: Id of the entity

        Raises:
            KeyError: For an unknown entity kind or relation name
        """
        return RELATIONS[entity][relation](self.store, entity_id)

    def relations(self, entity: str, entity_id: int) -> Dict[str, RelationResult]:
        """Resolve every relation of an entity, keyed by relation name."""
        return {
            name: fn(self.store, entity_id) for name, fn in RELATIONS[entity].items()
        }

    # === ITEMS ===

    def item_drops(self, item_id: int) -> List[ItemDropRow]:
        return items.item_drops(self.store, item_id).unwrap()

    def item_ingredient_for(self, item_id: int) -> List[NamedRef]:
        return items.item_ingredient_for(self.store, item_id).unwrap()

    def item_craftables(self, item_id: int) -> List[CraftableRow]:
        """Recipes of an item.

        Raises:
            ShopNotFoundError: If a recipe names an unknown shop
        """
        return items.item_craftables(self.store, item_id).unwrap()

    def item_sold_by(self, item_id: int) -> List[SoldByRow]:
        return items.item_sold_by(self.store, item_id).unwrap()

    def item_quest_rewards(self, item_id: int) -> List[QuestRewardRow]:
        return items.item_quest_rewards(self.store, item_id).unwrap()

    def item_gather_spots(self, item_id: int) -> List[GatherSpotRow]:
        return items.item_gather_spots(self.store, item_id).unwrap()

    def item_chest_spawns(self, item_id: int) -> List[ChestSpawnRow]:
        return items.item_chest_spawns(self.store, item_id).unwrap()

    # === NPCS ===

    def npc_drops(self, npc_id: int) -> List[NpcDropRow]:
        return npcs.npc_drops(self.store, npc_id).unwrap()

    def npc_spawns(self, npc_id: int) -> List[NpcSpawnRow]:
        return npcs.npc_spawns(self.store, npc_id).unwrap()

    def npc_buy_offers(self, npc_id: int) -> List[BuyOfferRow]:
        return npcs.npc_buy_offers(self.store, npc_id).unwrap()

    def npc_craft_offers(self, npc_id: int) -> List[CraftOfferRow]:
        return npcs.npc_craft_offers(self.store, npc_id).unwrap()

    # === MAPS ===

    def map_npc_spawns(self, map_id: int) -> List[MapSpawnRow]:
        return maps.map_npc_spawns(self.store, map_id).unwrap()

    def map_gather_spots(self, map_id: int) -> List[MapGatherRow]:
        return maps.map_gather_spots(self.store, map_id).unwrap()

    def map_chests(self, map_id: int) -> List[ChestRow]:
        return maps.map_chests(self.store, map_id).unwrap()

    def map_signs(self, map_id: int) -> List[SignRow]:
        return maps.map_signs(self.store, map_id).unwrap()

    def map_warps(self, map_id: int) -> List[WarpRow]:
        return maps.map_warps(self.store, map_id).unwrap()

    # === QUESTS ===

    def quest_rewards(self, quest_id: int) -> List[RewardItemRow]:
        return quests.quest_rewards(self.store, quest_id).unwrap()

    def quest_start_npc(self, quest_id: int) -> Optional[Npc]:
        return quests.quest_start_npc(self.store, quest_id)

    def quest_start_map(self, quest_id: int) -> Optional[GameMap]:
        return quests.quest_start_map(self.store, quest_id)

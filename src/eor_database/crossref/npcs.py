"""
NPC relations: drops, spawn locations and shop offerings.
"""

from typing import Callable, Dict

from ..game_data.models import MapNpcSpawn, Npc, Number
from ..game_data.store import DatasetStore
from .items import resolve_ingredients
from .results import RelationBuilder, RelationResult
from .rows import BuyOfferRow, CraftOfferRow, NpcDropRow, NpcSpawnRow


def effective_speed(spawn: MapNpcSpawn, npc: Npc) -> Number:
    """Spawn speed override when set, else the NPC default."""
    return spawn.speed or npc.default_speed


def effective_respawn(spawn: MapNpcSpawn, npc: Npc) -> Number:
    """Spawn respawn time when positive, else the NPC default."""
    return spawn.time if spawn.time > 0 else npc.respawn_secs


def npc_drops(store: DatasetStore, npc_id: int) -> RelationResult[NpcDropRow]:
    """Items dropped by an NPC: the drop table followed by the shared table."""
    builder: RelationBuilder[NpcDropRow] = RelationBuilder("npc_drops", npc_id)
    npc = store.get_npc(npc_id)
    if npc is None:
        return builder.result()

    for drop in npc.drops + npc.shared:
        item = store.get_item(drop.item_id)
        if item is None:
            builder.omit(f"item {drop.item_id}")
            continue
        builder.add(NpcDropRow(item_id=item.id, item_name=item.name, percent=drop.percent))
    return builder.result()


def npc_spawns(store: DatasetStore, npc_id: int) -> RelationResult[NpcSpawnRow]:
    """Every spawn of an NPC over all maps, in map order."""
    builder: RelationBuilder[NpcSpawnRow] = RelationBuilder("npc_spawns", npc_id)
    npc = store.get_npc(npc_id)
    if npc is None:
        return builder.result()

    for game_map in store.maps.maps_with_spawn(npc.id):
        for spawn in game_map.npcs:
            if spawn.npc_id != npc.id:
                continue
            builder.add(
                NpcSpawnRow(
                    map_id=game_map.id,
                    map_name=game_map.name,
                    x=spawn.x,
                    y=spawn.y,
                    amount=spawn.amount,
                    speed=effective_speed(spawn, npc),
                    time=effective_respawn(spawn, npc),
                )
            )
    return builder.result()


def npc_buy_offers(store: DatasetStore, npc_id: int) -> RelationResult[BuyOfferRow]:
    """Items sold by the shop this NPC staffs (matched by NPC name)."""
    builder: RelationBuilder[BuyOfferRow] = RelationBuilder("npc_buy_offers", npc_id)
    npc = store.get_npc(npc_id)
    if npc is None:
        return builder.result()

    shop = store.get_shop_by_npc_name(npc.name)
    if shop is None:
        return builder.result()

    for buy in shop.buys:
        item = store.get_item(buy.item_id)
        if item is None:
            builder.omit(f"item {buy.item_id}")
            continue
        builder.add(BuyOfferRow(item_id=item.id, item_name=item.name, price=buy.price))
    return builder.result()


def npc_craft_offers(store: DatasetStore, npc_id: int) -> RelationResult[CraftOfferRow]:
    """Items crafted at the shop this NPC staffs.

    The shop lists item ids and each item lists its recipes by shop name;
    an item without a recipe for this shop is omitted.
    """
    builder: RelationBuilder[CraftOfferRow] = RelationBuilder("npc_craft_offers", npc_id)
    npc = store.get_npc(npc_id)
    if npc is None:
        return builder.result()

    shop = store.get_shop_by_npc_name(npc.name)
    if shop is None:
        return builder.result()

    for item_id in shop.crafts:
        item = store.get_item(item_id)
        if item is None:
            builder.omit(f"item {item_id}")
            continue
        recipe = next((c for c in item.craftables if c.shop_name == shop.name), None)
        if recipe is None:
            builder.omit(f"recipe of item {item_id} at shop {shop.name!r}")
            continue
        builder.add(
            CraftOfferRow(
                item_id=item.id,
                item_name=item.name,
                eons=recipe.eons,
                gold=recipe.gold,
                ingredients=resolve_ingredients(store, recipe.ingredients, builder),
            )
        )
    return builder.result()


NPC_RELATIONS: Dict[str, Callable[[DatasetStore, int], RelationResult]] = {
    "drops": npc_drops,
    "spawns": npc_spawns,
    "buy_offers": npc_buy_offers,
    "craft_offers": npc_craft_offers,
}

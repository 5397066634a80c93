"""
Item relations: where an item drops, how it is crafted, who sells it,
which quests reward it, and where it can be gathered or found in chests.

Each function takes the store and an item id and returns a
RelationResult. An unknown item id yields an empty OK result.
"""

from typing import Callable, Dict, Iterable, Tuple

from ..errors import ShopNotFoundError
from ..game_data.labels import MapTileSpec
from ..game_data.models import CraftIngredient, Shop
from ..game_data.store import DatasetStore
from .results import RelationBuilder, RelationResult
from .rows import (
    ChestSpawnRow,
    CraftableRow,
    GatherSpotRow,
    IngredientRow,
    ItemDropRow,
    NamedRef,
    QuestRewardRow,
    SoldByRow,
    VendorRow,
)

# Gather-node artwork lives this many graphic ids after the resource graphic
GATHER_GRAPHIC_OFFSET = 100


def resolve_ingredients(
    store: DatasetStore,
    ingredients: Iterable[CraftIngredient],
    builder: RelationBuilder,
) -> Tuple[IngredientRow, ...]:
    """Resolve recipe ingredients into rows, omitting unknown items."""
    rows = []
    for ingredient in ingredients:
        item = store.get_item(ingredient.item_id)
        if item is None:
            builder.omit(f"ingredient item {ingredient.item_id}")
            continue
        rows.append(IngredientRow(item.id, item.name, ingredient.quantity))
    return tuple(rows)


def resolve_vendors(store: DatasetStore, shop: Shop, builder: RelationBuilder) -> Tuple[VendorRow, ...]:
    """Resolve a shop's NPC presence list by NPC name (case-insensitive)."""
    rows = []
    for presence in shop.npcs:
        npc = store.get_npc_by_name(presence.npc_name)
        if npc is None:
            builder.omit(f"shop npc {presence.npc_name!r}")
            continue
        rows.append(
            VendorRow(
                npc_id=npc.id,
                npc_name=npc.name,
                graphic=npc.graphic,
                map_id=presence.map_id,
                map_name=presence.map_name,
                x=presence.x,
                y=presence.y,
            )
        )
    return tuple(rows)


def item_drops(store: DatasetStore, item_id: int) -> RelationResult[ItemDropRow]:
    """NPCs dropping an item: the drop table followed by the shared table."""
    builder: RelationBuilder[ItemDropRow] = RelationBuilder("item_drops", item_id)
    item = store.get_item(item_id)
    if item is None:
        return builder.result()

    for drop in item.drops + item.shared:
        npc = store.get_npc(drop.npc_id)
        if npc is None:
            builder.omit(f"npc {drop.npc_id}")
            continue
        builder.add(ItemDropRow(npc_id=npc.id, npc_name=npc.name, percent=drop.percent))
    return builder.result()


def item_ingredient_for(store: DatasetStore, item_id: int) -> RelationResult[NamedRef]:
    """Items whose recipes consume this item."""
    builder: RelationBuilder[NamedRef] = RelationBuilder("item_ingredient_for", item_id)
    item = store.get_item(item_id)
    if item is None:
        return builder.result()

    for other_id in item.ingredient_for:
        other = store.get_item(other_id)
        if other is None:
            builder.omit(f"item {other_id}")
            continue
        builder.add(NamedRef(other.id, other.name))
    return builder.result()


def item_craftables(store: DatasetStore, item_id: int) -> RelationResult[CraftableRow]:
    """Recipes crafting this item, with ingredients and vendor locations.

    A recipe naming a shop that does not exist fails the whole relation
    with ShopNotFoundError.
    """
    builder: RelationBuilder[CraftableRow] = RelationBuilder("item_craftables", item_id)
    item = store.get_item(item_id)
    if item is None:
        return builder.result()

    for craftable in item.craftables:
        ingredients = resolve_ingredients(store, craftable.ingredients, builder)
        shop = store.get_shop(craftable.shop_name)
        if shop is None:
            return builder.fail(ShopNotFoundError(craftable.shop_name, item.id))
        builder.add(
            CraftableRow(
                shop_name=craftable.shop_name,
                eons=craftable.eons,
                gold=craftable.gold,
                ingredients=ingredients,
                npcs=resolve_vendors(store, shop, builder),
            )
        )
    return builder.result()


def item_sold_by(store: DatasetStore, item_id: int) -> RelationResult[SoldByRow]:
    """One row per (NPC, map location, price) for every shop selling the item."""
    builder: RelationBuilder[SoldByRow] = RelationBuilder("item_sold_by", item_id)
    item = store.get_item(item_id)
    if item is None:
        return builder.result()

    for shop_name in item.sold_by:
        shop = store.get_shop(shop_name)
        if shop is None:
            builder.omit(f"shop {shop_name!r}")
            continue
        buy = shop.buy_for(item.id)
        if buy is None:
            builder.omit(f"buy entry of shop {shop_name!r}")
            continue
        for vendor in resolve_vendors(store, shop, builder):
            builder.add(
                SoldByRow(
                    npc_id=vendor.npc_id,
                    npc_name=vendor.npc_name,
                    map_id=vendor.map_id,
                    map_name=vendor.map_name,
                    x=vendor.x,
                    y=vendor.y,
                    price=buy.price,
                )
            )
    return builder.result()


def item_quest_rewards(store: DatasetStore, item_id: int) -> RelationResult[QuestRewardRow]:
    """Quests rewarding this item, one row per matching reward entry.

    Quest titles are deduplicated. A quest whose start NPC cannot be
    resolved contributes no rows.
    """
    builder: RelationBuilder[QuestRewardRow] = RelationBuilder("item_quest_rewards", item_id)
    item = store.get_item(item_id)
    if item is None:
        return builder.result()

    for title in dict.fromkeys(item.quest_rewards):
        quest = store.get_quest_by_title(title)
        if quest is None:
            builder.omit(f"quest {title!r}")
            continue

        rewards = [reward for reward in quest.rewards if reward.item_id == item.id]
        if not rewards:
            continue

        vendor_id = quest.start_npc_vendor_id
        npc = store.get_quest_giver(vendor_id) if vendor_id is not None else None
        if npc is None:
            builder.omit(f"start npc of quest {quest.id}")
            continue

        for reward in rewards:
            builder.add(
                QuestRewardRow(quest_id=quest.id, quest_name=title, npc_id=npc.id, amount=reward.amount)
            )
    return builder.result()


def item_gather_spots(store: DatasetStore, item_id: int) -> RelationResult[GatherSpotRow]:
    """Resource nodes yielding this item over all maps, in map order."""
    builder: RelationBuilder[GatherSpotRow] = RelationBuilder("item_gather_spots", item_id)
    for game_map in store.maps.maps_with_gather(item_id):
        for gather in game_map.gathers:
            if gather.item_id != item_id:
                continue
            builder.add(
                GatherSpotRow(
                    item_id=gather.item_id,
                    map_id=game_map.id,
                    map_name=game_map.name,
                    x=gather.x,
                    y=gather.y,
                    amount=gather.max_amount,
                    graphic_id=gather.graphic_id + GATHER_GRAPHIC_OFFSET,
                )
            )
    return builder.result()


def item_chest_spawns(store: DatasetStore, item_id: int) -> RelationResult[ChestSpawnRow]:
    """Chest slots holding this item over all maps.

    Only ground items placed on a tile marked as a chest count; the chest
    graphic comes from the map's Object layer.
    """
    builder: RelationBuilder[ChestSpawnRow] = RelationBuilder("item_chest_spawns", item_id)
    for game_map in store.maps.maps_with_ground_item(item_id):
        for placed in game_map.items:
            if placed.item_id != item_id:
                continue
            if game_map.spec_at(placed.x, placed.y) != MapTileSpec.CHEST:
                continue
            builder.add(
                ChestSpawnRow(
                    item_id=placed.item_id,
                    map_id=game_map.id,
                    map_name=game_map.name,
                    x=placed.x,
                    y=placed.y,
                    amount=placed.amount,
                    slot=placed.slot,
                    time=placed.time,
                    key=placed.key,
                    graphic_id=game_map.object_graphic_at(placed.x, placed.y),
                )
            )
    return builder.result()


ITEM_RELATIONS: Dict[str, Callable[[DatasetStore, int], RelationResult]] = {
    "drops": item_drops,
    "ingredient_for": item_ingredient_for,
    "craftables": item_craftables,
    "sold_by": item_sold_by,
    "quest_rewards": item_quest_rewards,
    "gather_spots": item_gather_spots,
    "chest_spawns": item_chest_spawns,
}

"""
Map relations scoped to a single map: NPC spawns, gather spots, chests,
signs and warps.
"""

from typing import Callable, Dict, List

from ..game_data.labels import MapTileSpec
from ..game_data.models import Coord
from ..game_data.store import DatasetStore
from .items import GATHER_GRAPHIC_OFFSET
from .npcs import effective_respawn, effective_speed
from .results import RelationBuilder, RelationResult
from .rows import ChestContentRow, ChestRow, MapGatherRow, MapSpawnRow, SignRow, WarpRow


def map_npc_spawns(store: DatasetStore, map_id: int) -> RelationResult[MapSpawnRow]:
    builder: RelationBuilder[MapSpawnRow] = RelationBuilder("map_npc_spawns", map_id)
    game_map = store.get_map(map_id)
    if game_map is None:
        return builder.result()

    for spawn in game_map.npcs:
        npc = store.get_npc(spawn.npc_id)
        if npc is None:
            builder.omit(f"npc {spawn.npc_id}")
            continue
        builder.add(
            MapSpawnRow(
                npc_id=npc.id,
                npc_name=npc.name,
                x=spawn.x,
                y=spawn.y,
                amount=spawn.amount,
                speed=effective_speed(spawn, npc),
                time=effective_respawn(spawn, npc),
            )
        )
    return builder.result()


def map_gather_spots(store: DatasetStore, map_id: int) -> RelationResult[MapGatherRow]:
    builder: RelationBuilder[MapGatherRow] = RelationBuilder("map_gather_spots", map_id)
    game_map = store.get_map(map_id)
    if game_map is None:
        return builder.result()

    for gather in game_map.gathers:
        item = store.get_item(gather.item_id)
        if item is None:
            builder.omit(f"item {gather.item_id}")
            continue
        builder.add(
            MapGatherRow(
                item_id=item.id,
                item_name=item.name,
                x=gather.x,
                y=gather.y,
                amount=gather.max_amount,
                graphic_id=gather.graphic_id + GATHER_GRAPHIC_OFFSET,
            )
        )
    return builder.result()


def map_chests(store: DatasetStore, map_id: int) -> RelationResult[ChestRow]:
    """Chests of a map, one per chest tile, each listing its item slots.

    Ground items on tiles not marked as a chest are not part of any chest.
    Chests appear in the order their first slot is listed.
    """
    builder: RelationBuilder[ChestRow] = RelationBuilder("map_chests", map_id)
    game_map = store.get_map(map_id)
    if game_map is None:
        return builder.result()

    contents: Dict[Coord, List[ChestContentRow]] = {}
    for placed in game_map.items:
        if game_map.spec_at(placed.x, placed.y) != MapTileSpec.CHEST:
            continue
        item = store.get_item(placed.item_id)
        if item is None:
            builder.omit(f"item {placed.item_id}")
            continue
        contents.setdefault((placed.x, placed.y), []).append(
            ChestContentRow(
                item_id=item.id,
                item_name=item.name,
                amount=placed.amount,
                slot=placed.slot,
                time=placed.time,
                key=placed.key,
            )
        )

    for (x, y), spawns in contents.items():
        builder.add(
            ChestRow(x=x, y=y, graphic_id=game_map.object_graphic_at(x, y), spawns=tuple(spawns))
        )
    return builder.result()


def map_signs(store: DatasetStore, map_id: int) -> RelationResult[SignRow]:
    builder: RelationBuilder[SignRow] = RelationBuilder("map_signs", map_id)
    game_map = store.get_map(map_id)
    if game_map is None:
        return builder.result()

    for sign in game_map.signs:
        builder.add(
            SignRow(
                x=sign.x,
                y=sign.y,
                title=sign.title,
                message=sign.message,
                graphic_id=game_map.object_graphic_at(sign.x, sign.y),
            )
        )
    return builder.result()


def map_warps(store: DatasetStore, map_id: int) -> RelationResult[WarpRow]:
    """Warps leaving the map; warps back into the same map are skipped."""
    builder: RelationBuilder[WarpRow] = RelationBuilder("map_warps", map_id)
    game_map = store.get_map(map_id)
    if game_map is None:
        return builder.result()

    for warp in game_map.warps:
        if warp.destination_id == game_map.id:
            continue
        destination = store.get_map(warp.destination_id)
        if destination is None:
            builder.omit(f"map {warp.destination_id}")
            continue
        builder.add(
            WarpRow(
                x=warp.x,
                y=warp.y,
                map_id=destination.id,
                map_name=destination.name,
                destination_x=warp.destination_x,
                destination_y=warp.destination_y,
            )
        )
    return builder.result()


MAP_RELATIONS: Dict[str, Callable[[DatasetStore, int], RelationResult]] = {
    "npc_spawns": map_npc_spawns,
    "gather_spots": map_gather_spots,
    "chests": map_chests,
    "signs": map_signs,
    "warps": map_warps,
}

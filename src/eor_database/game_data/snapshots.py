"""
Immutable per-collection snapshots with lookup indices.

A snapshot is built once per load and never mutated. Indices are derived
at construction so point lookups and reverse joins avoid rescanning the
records; every index keeps the first record in source order when keys
collide, and multi-valued indices keep source order.
"""

from collections import defaultdict
from typing import (
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from .labels import NpcBehavior
from .models import Collection, GameClass, GameMap, Item, Npc, Quest, Record, Shop, Spell

R = TypeVar("R", bound=Record)


class CollectionSnapshot(Generic[R]):
    """Records of one collection plus id and name indices."""

    NAME_ATTR = "name"

    def __init__(self, collection: Collection, records: Tuple[R, ...]):
        self.collection = collection
        self.records: Tuple[R, ...] = records
        self._by_id: Dict[int, R] = {}
        self._by_name: Dict[str, R] = {}
        for record in records:
            record_id = getattr(record, "id", None)
            if record_id is not None:
                self._by_id.setdefault(record_id, record)
            self._by_name.setdefault(getattr(record, self.NAME_ATTR), record)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[R]:
        return iter(self.records)

    def find_by_id(self, record_id: int) -> Optional[R]:
        """Return the record with the given id, or None."""
        return self._by_id.get(record_id)

    def find_by_name(self, name: str) -> Optional[R]:
        """Return the first record with exactly this name, or None."""
        return self._by_name.get(name)

    def filter(self, predicate: Callable[[R], bool]) -> List[R]:
        """Return records matching a predicate, in source order."""
        return [record for record in self.records if predicate(record)]


class ItemSnapshot(CollectionSnapshot[Item]):
    """Items without resource placeholders."""

    def __init__(self, records: Tuple[Item, ...]):
        kept = tuple(item for item in records if not item.is_resource)
        self.excluded_count = len(records) - len(kept)
        super().__init__(Collection.ITEMS, kept)


class NpcSnapshot(CollectionSnapshot[Npc]):
    """NPCs with case-insensitive name and quest-giver indices."""

    def __init__(self, records: Tuple[Npc, ...]):
        super().__init__(Collection.NPCS, records)
        self._by_lower_name: Dict[str, Npc] = {}
        self._quest_givers: Dict[int, Npc] = {}
        for npc in records:
            self._by_lower_name.setdefault(npc.name.lower(), npc)
            if npc.behavior == NpcBehavior.QUEST:
                self._quest_givers.setdefault(npc.vendor_id, npc)

    def find_by_name(self, name: str) -> Optional[Npc]:
        """Return the first NPC with this name, ignoring case."""
        return self._by_lower_name.get(name.lower())

    def find_quest_giver(self, vendor_id: int) -> Optional[Npc]:
        """Return the NPC acting as quest-giver for a quest vendor id."""
        return self._quest_givers.get(vendor_id)


class ShopSnapshot(CollectionSnapshot[Shop]):
    """Shops keyed by name, plus staffing NPC name (case-insensitive)."""

    def __init__(self, records: Tuple[Shop, ...]):
        super().__init__(Collection.SHOPS, records)
        self._by_npc_name: Dict[str, Shop] = {}
        for shop in records:
            for presence in shop.npcs:
                self._by_npc_name.setdefault(presence.npc_name.lower(), shop)

    def find_by_npc_name(self, npc_name: str) -> Optional[Shop]:
        """Return the first shop staffed by an NPC with this name."""
        return self._by_npc_name.get(npc_name.lower())


class QuestSnapshot(CollectionSnapshot[Quest]):
    """Quests keyed by id and title."""

    NAME_ATTR = "title"

    def __init__(self, records: Tuple[Quest, ...]):
        super().__init__(Collection.QUESTS, records)


class MapSnapshot(CollectionSnapshot[GameMap]):
    """Maps with inverted indices from referenced ids to maps.

    Each index lists every map (once, in map order) that references the id,
    so reverse lookups return the same order as a full scan would.
    """

    def __init__(self, records: Tuple[GameMap, ...]):
        super().__init__(Collection.MAPS, records)
        self._gathers_by_item = self._invert(records, lambda m: (g.item_id for g in m.gathers))
        self._ground_items_by_item = self._invert(records, lambda m: (i.item_id for i in m.items))
        self._spawns_by_npc = self._invert(records, lambda m: (n.npc_id for n in m.npcs))

    @staticmethod
    def _invert(records, references) -> Dict[int, Tuple[GameMap, ...]]:
        index: Dict[int, List[GameMap]] = defaultdict(list)
        for game_map in records:
            for ref_id in dict.fromkeys(references(game_map)):
                index[ref_id].append(game_map)
        return {ref_id: tuple(maps) for ref_id, maps in index.items()}

    def maps_with_gather(self, item_id: int) -> Tuple[GameMap, ...]:
        """Maps holding a resource node for an item."""
        return self._gathers_by_item.get(item_id, ())

    def maps_with_ground_item(self, item_id: int) -> Tuple[GameMap, ...]:
        """Maps placing an item on the ground or in a chest."""
        return self._ground_items_by_item.get(item_id, ())

    def maps_with_spawn(self, npc_id: int) -> Tuple[GameMap, ...]:
        """Maps spawning an NPC."""
        return self._spawns_by_npc.get(npc_id, ())


def build_snapshot(collection: Collection, records: Tuple[Record, ...]) -> CollectionSnapshot:
    """Wrap loaded records in the snapshot type of their collection."""
    if collection is Collection.ITEMS:
        return ItemSnapshot(records)  # type: ignore[arg-type]
    if collection is Collection.NPCS:
        return NpcSnapshot(records)  # type: ignore[arg-type]
    if collection is Collection.SHOPS:
        return ShopSnapshot(records)  # type: ignore[arg-type]
    if collection is Collection.QUESTS:
        return QuestSnapshot(records)  # type: ignore[arg-type]
    if collection is Collection.MAPS:
        return MapSnapshot(records)  # type: ignore[arg-type]
    return CollectionSnapshot(collection, records)


ClassSnapshot = CollectionSnapshot[GameClass]
SpellSnapshot = CollectionSnapshot[Spell]

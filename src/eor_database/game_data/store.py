"""
Dataset store for the EOR collections.

Holds one optional snapshot per collection. The first access to a
collection reads its dump from disk; later accesses return the same
snapshot until the slot is reset. Readers that already hold a snapshot
keep using it after a reset.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple, Union

from ..errors import UnknownCollectionError
from .loaders import CollectionFileLoader
from .models import Collection, GameClass, GameMap, Item, Npc, Quest, Record, Shop, Spell
from .snapshots import (
    ClassSnapshot,
    CollectionSnapshot,
    ItemSnapshot,
    MapSnapshot,
    NpcSnapshot,
    QuestSnapshot,
    ShopSnapshot,
    SpellSnapshot,
    build_snapshot,
)

if TYPE_CHECKING:
    from ..settings import AppSettings

CollectionRef = Union[Collection, str]


def as_collection(name: CollectionRef) -> Collection:
    """Convert a collection name to the Collection enum.

    Raises:
        UnknownCollectionError: If the name is not one of the seven collections
    """
    if isinstance(name, Collection):
        return name
    try:
        return Collection(name)
    except ValueError as e:
        raise UnknownCollectionError(str(name)) from e


class DatasetStore:
    """Lazily loaded, memoized access to the seven collections.

    Snapshots are replaced whole, never mutated, so concurrent readers need
    no locking: a reader either sees the previous snapshot or the new one.
    """

    def __init__(self, data_dir: Union[str, Path], loader: Optional[CollectionFileLoader] = None):
        """Initialize the store.

        Args:
            data_dir: Directory holding `<collection>.json` dumps
            loader: Loader used to read dumps (a default one if omitted)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.data_dir = Path(data_dir)
        self.loader = loader or CollectionFileLoader()
        self._slots: Dict[Collection, Optional[CollectionSnapshot]] = {
            collection: None for collection in Collection
        }
        self.logger.debug(f"DatasetStore initialized with data dir: {self.data_dir}")

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "DatasetStore":
        """Create a store reading from the configured data directory."""
        return cls(settings.data_dir)

    def collection_path(self, collection: CollectionRef) -> Path:
        """Return the dump file path of a collection."""
        return self.data_dir / f"{as_collection(collection).value}.json"

    # === LIFECYCLE ===

    def snapshot(self, collection: CollectionRef) -> CollectionSnapshot:
        """Return the snapshot of a collection, loading it on first access.

        Raises:
            UnknownCollectionError: For an unknown collection name
            CollectionFileNotFoundError: If the dump file is missing
            SchemaValidationError: If the dump is malformed
        """
        collection = as_collection(collection)
        current = self._slots[collection]
        if current is not None:
            return current

        path = self.collection_path(collection)
        records = self.loader.load(collection, path)
        loaded = build_snapshot(collection, records)
        self._slots[collection] = loaded

        if isinstance(loaded, ItemSnapshot) and loaded.excluded_count:
            self.logger.debug(f"Excluded {loaded.excluded_count} resource placeholder items")
        self.logger.info(f"Loaded {len(loaded)} {collection.value} from {path}")
        return loaded

    def load(self, collection: CollectionRef) -> Tuple[Record, ...]:
        """Return all records of a collection in source order.

        Repeated calls without a reset return the identical tuple.
        """
        return self.snapshot(collection).records

    def is_loaded(self, collection: CollectionRef) -> bool:
        return self._slots[as_collection(collection)] is not None

    def reset(self, collection: CollectionRef) -> None:
        """Drop the memoized snapshot so the next access re-reads the dump."""
        collection = as_collection(collection)
        self._slots[collection] = None
        self.logger.info(f"Reset {collection.value} collection")

    def reset_all(self) -> None:
        """Drop every memoized snapshot."""
        for collection in Collection:
            self._slots[collection] = None
        self.logger.info("Reset all collections")

    def preload(self, collections: Optional[Iterable[CollectionRef]] = None) -> Dict[Collection, int]:
        """Load several collections in parallel.

        Args:
            collections: Collections to load (all seven if omitted)

        Returns:
            Record count per collection

        Raises:
            DatasetError: The first load failure encountered
        """
        targets = [as_collection(c) for c in (collections or list(Collection))]
        counts: Dict[Collection, int] = {}

        with ThreadPoolExecutor(max_workers=len(targets) or 1) as executor:
            future_to_collection = {
                executor.submit(self.snapshot, collection): collection
                for collection in targets
            }
            for future in as_completed(future_to_collection):
                collection = future_to_collection[future]
                counts[collection] = len(future.result())

        return {collection: counts[collection] for collection in targets}

    # === TYPED SNAPSHOTS ===

    @property
    def classes(self) -> ClassSnapshot:
        return self.snapshot(Collection.CLASSES)

    @property
    def items(self) -> ItemSnapshot:
        return self.snapshot(Collection.ITEMS)  # type: ignore[return-value]

    @property
    def maps(self) -> MapSnapshot:
        return self.snapshot(Collection.MAPS)  # type: ignore[return-value]

    @property
    def npcs(self) -> NpcSnapshot:
        return self.snapshot(Collection.NPCS)  # type: ignore[return-value]

    @property
    def quests(self) -> QuestSnapshot:
        return self.snapshot(Collection.QUESTS)  # type: ignore[return-value]

    @property
    def shops(self) -> ShopSnapshot:
        return self.snapshot(Collection.SHOPS)  # type: ignore[return-value]

    @property
    def spells(self) -> SpellSnapshot:
        return self.snapshot(Collection.SPELLS)

    # === POINT LOOKUPS ===

    def get_item(self, item_id: int) -> Optional[Item]:
        return self.items.find_by_id(item_id)

    def get_npc(self, npc_id: int) -> Optional[Npc]:
        return self.npcs.find_by_id(npc_id)

    def get_npc_by_name(self, name: str) -> Optional[Npc]:
        return self.npcs.find_by_name(name)

    def get_quest_giver(self, vendor_id: int) -> Optional[Npc]:
        """Return the NPC acting as quest-giver for a quest vendor id."""
        return self.npcs.find_quest_giver(vendor_id)

    def get_map(self, map_id: int) -> Optional[GameMap]:
        return self.maps.find_by_id(map_id)

    def get_quest(self, quest_id: int) -> Optional[Quest]:
        return self.quests.find_by_id(quest_id)

    def get_quest_by_title(self, title: str) -> Optional[Quest]:
        return self.quests.find_by_name(title)

    def get_shop(self, name: str) -> Optional[Shop]:
        return self.shops.find_by_name(name)

    def get_shop_by_npc_name(self, npc_name: str) -> Optional[Shop]:
        return self.shops.find_by_npc_name(npc_name)

    def get_class(self, class_id: int) -> Optional[GameClass]:
        return self.classes.find_by_id(class_id)

    def get_spell(self, spell_id: int) -> Optional[Spell]:
        return self.spells.find_by_id(spell_id)

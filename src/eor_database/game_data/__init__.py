"""
Module for working with EOR game data.

Provides the dataset store that loads, validates and indexes the seven
collection dumps, the record models, and listing helpers used by the
presentation layer.
"""

from .models import (
    Collection,
    GameClass,
    GameMap,
    Item,
    Npc,
    Quest,
    Shop,
    Spell,
    OBJECT_LAYER_NAME,
    RESOURCE_ITEM_SUFFIX,
)
from .store import DatasetStore, as_collection
from .snapshots import CollectionSnapshot
from .loaders import CollectionFileLoader
from .schema import validate_collection
from .labels import MapTileSpec, ItemType, ItemSubType, NpcBehavior
from .describe import describe_item
from .listing import ListResult, SearchParams, paginate

# Public exports
__all__ = [
    # Store
    "DatasetStore",
    "as_collection",
    "Collection",
    # Models
    "GameClass",
    "GameMap",
    "Item",
    "Npc",
    "Quest",
    "Shop",
    "Spell",
    # Constants
    "OBJECT_LAYER_NAME",
    "RESOURCE_ITEM_SUFFIX",
    "MapTileSpec",
    "ItemType",
    "ItemSubType",
    "NpcBehavior",
    # Listings
    "ListResult",
    "SearchParams",
    "paginate",
    "describe_item",
    # Component classes (for advanced usage)
    "CollectionSnapshot",
    "CollectionFileLoader",
    "validate_collection",
]

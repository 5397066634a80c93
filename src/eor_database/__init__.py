"""
EOR Database: browser core for the Endless Online game datasets.

Loads the static collection dumps (items, NPCs, maps, quests, shops,
classes and spells), resolves cross references between them and renders
isometric map previews.
"""

__version__ = "0.1.0"
__author__ = "EOR Database Contributors"

# Core service imports
from .game_data import DatasetStore, Collection
from .crossref import CrossReferenceResolver, RelationResult, RelationStatus
from .rendering import MapPreviewRenderer
from .refresh import RefreshService
from .utils.logging_config import setup_logging
from .errors import (
    EorDatabaseError,
    DatasetError,
    CollectionFileNotFoundError,
    SchemaValidationError,
    UnknownCollectionError,
    ResolutionError,
    ShopNotFoundError,
    MapNotFoundError,
    InvalidPageError,
    RefreshError,
    RefreshDeniedError,
    RefreshFetchError,
)

__all__ = [
    # Services
    "DatasetStore",
    "Collection",
    "CrossReferenceResolver",
    "RelationResult",
    "RelationStatus",
    "MapPreviewRenderer",
    "RefreshService",
    # Logging
    "setup_logging",
    # Errors
    "EorDatabaseError",
    "DatasetError",
    "CollectionFileNotFoundError",
    "SchemaValidationError",
    "UnknownCollectionError",
    "ResolutionError",
    "ShopNotFoundError",
    "MapNotFoundError",
    "InvalidPageError",
    "RefreshError",
    "RefreshDeniedError",
    "RefreshFetchError",
]

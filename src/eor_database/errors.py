"""
Exception hierarchy for EOR Database.

Not-found lookups are not errors: they return None or an empty list.
The exceptions below cover the conditions that are surfaced to callers.
"""

from typing import Iterable, List, Sequence


class EorDatabaseError(Exception):
    """Base class for all errors raised by this package."""


# =============================================================================
# Dataset store
# =============================================================================

class DatasetError(EorDatabaseError):
    """Raised when a collection cannot be loaded."""


class UnknownCollectionError(DatasetError):
    """Raised for a collection name outside the known seven."""

    def __init__(self, name: str):
        super().__init__(f"Unknown collection: {name!r}")
        self.name = name


class CollectionFileNotFoundError(DatasetError):
    """Raised when the dump file of a collection is missing."""

    def __init__(self, collection: str, path: object):
        super().__init__(f"Dump file for collection '{collection}' not found: {path}")
        self.collection = collection
        self.path = path


class SchemaValidationError(DatasetError):
    """Raised when a collection dump does not match its schema.

    A single malformed record fails the whole collection.
    """

    MAX_REPORTED = 20

    def __init__(self, collection: str, errors: Sequence[str]):
        self.collection = collection
        self.errors: List[str] = list(errors)
        shown = self.errors[: self.MAX_REPORTED]
        details = "\n  - ".join(shown)
        more = len(self.errors) - len(shown)
        suffix = f"\n  ... and {more} more" if more > 0 else ""
        super().__init__(
            f"Invalid '{collection}' dump ({len(self.errors)} error(s)):\n  - {details}{suffix}"
        )


# =============================================================================
# Cross-reference resolution
# =============================================================================

class ResolutionError(EorDatabaseError):
    """Raised when a relationship cannot be resolved and must not be skipped."""


class ShopNotFoundError(ResolutionError):
    """Raised when a crafting recipe names a shop that does not exist."""

    def __init__(self, shop_name: str, item_id: int):
        super().__init__(f"Shop not found: {shop_name!r} (craftable of item {item_id})")
        self.shop_name = shop_name
        self.item_id = item_id


# =============================================================================
# Rendering and listings
# =============================================================================

class MapNotFoundError(EorDatabaseError):
    """Raised by the map preview renderer for an unknown map id."""

    def __init__(self, map_id: int):
        super().__init__(f"Map not found: {map_id}")
        self.map_id = map_id


class InvalidPageError(EorDatabaseError):
    """Raised for a page parameter that is not a positive integer."""

    def __init__(self, page: object):
        super().__init__(f"Invalid page: {page}")
        self.page = page


# =============================================================================
# Refresh
# =============================================================================

class RefreshError(EorDatabaseError):
    """Base class for refresh failures."""


class RefreshDeniedError(RefreshError):
    """Raised when the refresh key is missing or wrong."""

    def __init__(self) -> None:
        super().__init__("Denied")


class RefreshFetchError(RefreshError):
    """Raised when downloading or storing a collection dump fails.

    Collections refreshed before the failure stay refreshed.
    """

    def __init__(self, collection: str, reason: str, refreshed: Iterable[str] = ()):
        self.collection = collection
        self.refreshed = list(refreshed)
        super().__init__(f"Refreshing '{collection}' failed: {reason}")

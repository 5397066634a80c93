"""
Filtered, paginated listings and dataset-wide aggregates.

Listings apply a case-insensitive name substring filter and an optional
exact type filter, then return one page of rows together with the total
number of rows that passed the filters.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

from ..errors import InvalidPageError
from .describe import describe_item
from .labels import (
    npc_speed_label,
    npc_type_label,
    spell_direct_effect_label,
    spell_target_label,
    spell_target_restrict_label,
)
from .store import DatasetStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
ALL_TYPES = "all"
UNNAMED_MAP = "???"

# Leading integer of a type filter, as in "12" or "12abc"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class SearchParams:
    """Listing filter and page selection, as received from a query string."""

    name: str = ""
    type: str = ALL_TYPES
    page: Union[str, int] = "1"

    def matches_name(self, name: str) -> bool:
        """Case-insensitive substring match; an empty filter matches all."""
        return not self.name or self.name.lower() in name.lower()

    def type_code(self) -> Optional[int]:
        """Return the type filter as a code, or None for "all".

        Only the leading integer counts, so "12abc" filters on 12. A type
        filter that does not start with a number matches no records.
        """
        if self.type == ALL_TYPES or self.type == "":
            return None
        match = _LEADING_INT.match(self.type)
        return int(match.group(1)) if match else -1

    def matches_type(self, code: int) -> bool:
        wanted = self.type_code()
        return wanted is None or wanted == code


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """One page of rows plus the total filtered count."""

    count: int
    records: List[T] = field(default_factory=list)


@dataclass(frozen=True)
class ItemListEntry:
    id: int
    name: str
    meta: List[str]


@dataclass(frozen=True)
class NpcListEntry:
    id: int
    name: str
    type: str
    level: float


@dataclass(frozen=True)
class NamedEntry:
    """Row of listings that only show an id and a name."""

    id: int
    name: str


@dataclass(frozen=True)
class SpellListEntry:
    id: int
    name: str
    effect: str
    target: str
    restrict: str


@dataclass(frozen=True)
class SpeedExample:
    """Distinct effective spawn speed and one NPC that moves at it."""

    speed: float
    label: str
    npc_id: int
    npc_name: str


def parse_page(page: Union[str, int]) -> int:
    """Parse a 1-based page number.

    Raises:
        InvalidPageError: If the page is not a positive integer
    """
    if isinstance(page, bool):
        raise InvalidPageError(page)
    try:
        number = int(page)
    except (TypeError, ValueError) as e:
        raise InvalidPageError(page) from e
    if number < 1:
        raise InvalidPageError(page)
    return number


def paginate(records: Sequence[T], page: Union[str, int], page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[T]:
    """Slice one page out of already filtered records.

    Args:
        records: Filtered records
        page: 1-based page number (string or int)
        page_size: Records per page

    Returns:
        ListResult with the total count and the requested slice

    Raises:
        InvalidPageError: If the page is not a positive integer
    """
    number = parse_page(page)
    start = page_size * (number - 1)
    return ListResult(count=len(records), records=list(records[start:start + page_size]))


def _list(
    records: Sequence[R],
    search: SearchParams,
    page_size: int,
    name_of: Callable[[R], str],
    type_of: Optional[Callable[[R], int]],
    to_row: Callable[[R], T],
) -> ListResult[T]:
    # Validate the page before building rows
    parse_page(search.page)
    filtered = [
        record
        for record in records
        if search.matches_name(name_of(record))
        and (type_of is None or search.matches_type(type_of(record)))
    ]
    page = paginate(filtered, search.page, page_size)
    return ListResult(count=page.count, records=[to_row(record) for record in page.records])


def list_items(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[ItemListEntry]:
    """List items filtered by name and `item_type`, with description lines."""
    return _list(
        store.items.records,
        search,
        page_size,
        lambda item: item.name,
        lambda item: item.item_type,
        lambda item: ItemListEntry(id=item.id, name=item.name, meta=describe_item(item)),
    )


def list_npcs(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[NpcListEntry]:
    """List NPCs filtered by name and behavior."""
    return _list(
        store.npcs.records,
        search,
        page_size,
        lambda npc: npc.name,
        lambda npc: npc.behavior,
        lambda npc: NpcListEntry(
            id=npc.id, name=npc.name, type=npc_type_label(npc.behavior), level=npc.stats.level
        ),
    )


def list_maps(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[NamedEntry]:
    """List maps filtered by name; unnamed maps show as "???"."""
    return _list(
        store.maps.records,
        search,
        page_size,
        lambda game_map: game_map.name,
        None,
        lambda game_map: NamedEntry(id=game_map.id, name=game_map.name or UNNAMED_MAP),
    )


def list_spells(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[SpellListEntry]:
    """List spells filtered by name and direct effect."""
    return _list(
        store.spells.records,
        search,
        page_size,
        lambda spell: spell.name,
        lambda spell: spell.direct_effect,
        lambda spell: SpellListEntry(
            id=spell.id,
            name=spell.name,
            effect=spell_direct_effect_label(spell.direct_effect),
            target=spell_target_label(spell.target_type),
            restrict=spell_target_restrict_label(spell.target_restrict),
        ),
    )


def list_classes(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[NamedEntry]:
    return _list(
        store.classes.records,
        search,
        page_size,
        lambda cls: cls.name,
        None,
        lambda cls: NamedEntry(id=cls.id, name=cls.name),
    )


def list_quests(store: DatasetStore, search: SearchParams, page_size: int = DEFAULT_PAGE_SIZE) -> ListResult[NamedEntry]:
    return _list(
        store.quests.records,
        search,
        page_size,
        lambda quest: quest.title,
        None,
        lambda quest: NamedEntry(id=quest.id, name=quest.title),
    )


LISTINGS = {
    "items": list_items,
    "npcs": list_npcs,
    "maps": list_maps,
    "spells": list_spells,
    "classes": list_classes,
    "quests": list_quests,
}


def shop_names(store: DatasetStore) -> List[str]:
    """Distinct shop names referenced by item recipes and sellers.

    Names appear in first-seen order over items, recipes before sellers.
    """
    names: Dict[str, None] = {}
    for item in store.items:
        for craftable in item.craftables:
            names.setdefault(craftable.shop_name, None)
        for shop_name in item.sold_by:
            names.setdefault(shop_name, None)
    return list(names)


def npc_speeds(store: DatasetStore) -> List[SpeedExample]:
    """Distinct effective spawn speeds over all maps, with an example NPC each.

    The effective speed is the spawn override when set, else the NPC's
    default speed. Spawns of unknown NPCs are skipped.
    """
    examples: Dict[float, SpeedExample] = {}
    npcs = store.npcs
    for game_map in store.maps:
        for spawn in game_map.npcs:
            npc = npcs.find_by_id(spawn.npc_id)
            if npc is None:
                continue
            speed = spawn.speed or npc.default_speed
            if speed not in examples:
                examples[speed] = SpeedExample(
                    speed=speed, label=npc_speed_label(int(speed)), npc_id=npc.id, npc_name=npc.name
                )
    logger.debug(f"Found {len(examples)} distinct spawn speeds")
    return list(examples.values())

"""
Row types produced by the cross-reference resolver.

Rows are plain frozen dataclasses so they can be serialized directly
(orjson handles dataclasses natively).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..game_data.models import Number


@dataclass(frozen=True)
class NamedRef:
    id: int
    name: str


# =============================================================================
# Item relations
# =============================================================================

@dataclass(frozen=True)
class ItemDropRow:
    npc_id: int
    npc_name: str
    percent: Number


@dataclass(frozen=True)
class IngredientRow:
    item_id: int
    item_name: str
    quantity: Number


@dataclass(frozen=True)
class VendorRow:
    """An NPC staffing a shop at a map location."""

    npc_id: int
    npc_name: str
    graphic: int
    map_id: int
    map_name: str
    x: int
    y: int


@dataclass(frozen=True)
class CraftableRow:
    shop_name: str
    eons: Number
    gold: Number
    ingredients: Tuple[IngredientRow, ...]
    npcs: Tuple[VendorRow, ...]


@dataclass(frozen=True)
class SoldByRow:
    npc_id: int
    npc_name: str
    map_id: int
    map_name: str
    x: int
    y: int
    price: Number


@dataclass(frozen=True)
class QuestRewardRow:
    quest_id: int
    quest_name: str
    npc_id: int
    amount: Number


@dataclass(frozen=True)
class GatherSpotRow:
    item_id: int
    map_id: int
    map_name: str
    x: int
    y: int
    amount: Number
    graphic_id: int


@dataclass(frozen=True)
class ChestSpawnRow:
    item_id: int
    map_id: int
    map_name: str
    x: int
    y: int
    amount: Number
    slot: int
    time: Number
    key: int
    graphic_id: Optional[int]


# =============================================================================
# NPC relations
# =============================================================================

@dataclass(frozen=True)
class NpcDropRow:
    item_id: int
    item_name: str
    percent: Number


@dataclass(frozen=True)
class NpcSpawnRow:
    map_id: int
    map_name: str
    x: int
    y: int
    amount: Number
    speed: Number
    time: Number


@dataclass(frozen=True)
class BuyOfferRow:
    item_id: int
    item_name: str
    price: Number


@dataclass(frozen=True)
class CraftOfferRow:
    item_id: int
    item_name: str
    eons: Number
    gold: Number
    ingredients: Tuple[IngredientRow, ...]


# =============================================================================
# Map relations
# =============================================================================

@dataclass(frozen=True)
class MapSpawnRow:
    npc_id: int
    npc_name: str
    x: int
    y: int
    amount: Number
    speed: Number
    time: Number


@dataclass(frozen=True)
class MapGatherRow:
    item_id: int
    item_name: str
    x: int
    y: int
    amount: Number
    graphic_id: int


@dataclass(frozen=True)
class ChestContentRow:
    item_id: int
    item_name: str
    amount: Number
    slot: int
    time: Number
    key: int


@dataclass(frozen=True)
class ChestRow:
    """Chest tile with every item slot placed on it."""

    x: int
    y: int
    graphic_id: Optional[int]
    spawns: Tuple[ChestContentRow, ...]


@dataclass(frozen=True)
class SignRow:
    x: int
    y: int
    title: str
    message: str
    graphic_id: Optional[int]


@dataclass(frozen=True)
class WarpRow:
    x: int
    y: int
    map_id: int
    map_name: str
    destination_x: int
    destination_y: int


# =============================================================================
# Quest relations
# =============================================================================

@dataclass(frozen=True)
class RewardItemRow:
    item_id: int
    item_name: str
    amount: Number

"""
Data models for EOR game data.

Contains the immutable record types built from the JSON collection dumps.
Each model is intentionally lightweight: no file-system or lookup logic.
Records are created once per load and shared read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, TypeAlias, Union

Number: TypeAlias = Union[int, float]
"""Numeric JSON value (percentages may be fractional)."""

Coord: TypeAlias = Tuple[int, int]
"""Tile coordinate as (x, y)."""

RawRecord: TypeAlias = Dict[str, Any]
"""A single record as parsed from a collection dump."""


class Collection(str, Enum):
    """The seven top-level datasets."""

    CLASSES = "classes"
    ITEMS = "items"
    MAPS = "maps"
    NPCS = "npcs"
    QUESTS = "quests"
    SHOPS = "shops"
    SPELLS = "spells"


# Suffix of placeholder items that are never listed
RESOURCE_ITEM_SUFFIX = "-res"

# Named map layer holding object graphics (chests, signs)
OBJECT_LAYER_NAME = "Object"


def _tuple_of(cls: Any, values: Optional[List[RawRecord]]) -> Tuple[Any, ...]:
    """Build a tuple of records from an optional JSON array."""
    return tuple(cls.from_dict(value) for value in values or ())


def _frozen_mapping() -> Mapping[Any, Any]:
    """Empty read-only mapping for record fields keyed by coordinate or slot."""
    return MappingProxyType({})


# =============================================================================
# Item Models
# =============================================================================

@dataclass(frozen=True)
class ItemStats:
    """Numeric stat block shared by equipment and consumables."""

    hp: Number = 0
    tp: Number = 0
    sp: Number = 0
    min_damage: Number = 0
    max_damage: Number = 0
    hit_rate: Number = 0
    evasion: Number = 0
    armor: Number = 0
    critical_chance: Number = 0
    power: Number = 0
    accuracy: Number = 0
    defense: Number = 0
    dexterity: Number = 0
    vitality: Number = 0
    aura: Number = 0
    light: Number = 0
    dark: Number = 0
    earth: Number = 0
    air: Number = 0
    water: Number = 0
    fire: Number = 0

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ItemStats":
        return cls(**{name: data[name] for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class ItemRequirements:
    """Minimum level, class and stats needed to use an item."""

    level: Number = 0
    class_id: Number = 0
    power: Number = 0
    accuracy: Number = 0
    dexterity: Number = 0
    defense: Number = 0
    vitality: Number = 0
    aura: Number = 0

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ItemRequirements":
        return cls(
            level=data["required_level"],
            class_id=data["required_class"],
            power=data["required_power"],
            accuracy=data["required_accuracy"],
            dexterity=data["required_dexterity"],
            defense=data["required_defense"],
            vitality=data["required_vitality"],
            aura=data["required_aura"],
        )

    def any(self) -> bool:
        """Whether at least one requirement is set."""
        return any(getattr(self, name) for name in self.__dataclass_fields__)


@dataclass(frozen=True)
class ItemDrop:
    """Entry of an item's drop table: which NPC drops it and how often."""

    npc_id: int
    percent: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ItemDrop":
        return cls(npc_id=int(data["npc_id"]), percent=data["drop_percent"])


@dataclass(frozen=True)
class CraftIngredient:
    """Ingredient of a crafting recipe."""

    item_id: int
    quantity: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "CraftIngredient":
        return cls(item_id=int(data["itemID"]), quantity=data["quantity"])


@dataclass(frozen=True)
class Craftable:
    """Crafting recipe for an item, offered by a named shop."""

    shop_name: str
    eons: Number
    gold: Number
    ingredients: Tuple[CraftIngredient, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Craftable":
        return cls(
            shop_name=data["shopName"],
            eons=data["craftEon"],
            gold=data["craftGold"],
            ingredients=_tuple_of(CraftIngredient, data.get("craftIngredients")),
        )


@dataclass(frozen=True)
class Item:
    """Item record.

    Relationship arrays are pre-denormalized by the upstream dump:
    `ingredient_for`, `sold_by` and `quest_rewards` are trusted as given.
    """

    id: int
    name: str
    graphic: int
    item_type: int
    item_sub_type: int
    item_unique: int
    stats: ItemStats
    requirements: ItemRequirements
    spec1: Number = 0
    spec2: Number = 0
    spec3: Number = 0
    weight: Number = 0
    size: Number = 0
    sell_price: Number = 0
    aoe_flag: Number = 0
    target_area: Number = 0
    graphic_url: str = ""
    drops: Tuple[ItemDrop, ...] = ()
    shared: Tuple[ItemDrop, ...] = ()
    craftables: Tuple[Craftable, ...] = ()
    ingredient_for: Tuple[int, ...] = ()
    sold_by: Tuple[str, ...] = ()
    quest_rewards: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Item":
        """Create Item from a validated JSON record.

        Args:
            data: Record from the items dump

        Returns:
            Item instance
        """
        return cls(
            id=int(data["id"]),
            name=data["name"],
            graphic=int(data["graphic"]),
            item_type=int(data["item_type"]),
            item_sub_type=int(data["item_sub_type"]),
            item_unique=int(data["item_unique"]),
            stats=ItemStats.from_dict(data),
            requirements=ItemRequirements.from_dict(data),
            spec1=data["spec1"],
            spec2=data["spec2"],
            spec3=data["spec3"],
            weight=data["weight"],
            size=data["size"],
            sell_price=data["sell_price"],
            aoe_flag=data["aoe_flag"],
            target_area=data.get("target_area") or 0,
            graphic_url=data["graphic_url"],
            drops=_tuple_of(ItemDrop, data.get("drops")),
            shared=_tuple_of(ItemDrop, data.get("shared")),
            craftables=_tuple_of(Craftable, data.get("craftables")),
            ingredient_for=tuple(int(i) for i in data.get("ingredientFor") or ()),
            sold_by=tuple(s["soldByName"] for s in data.get("soldBy") or ()),
            quest_rewards=tuple(q["questName"] for q in data.get("questRewards") or ()),
        )

    @property
    def is_resource(self) -> bool:
        """Resource placeholders are excluded from the items snapshot."""
        return self.name.endswith(RESOURCE_ITEM_SUFFIX)


# =============================================================================
# NPC Models
# =============================================================================

@dataclass(frozen=True)
class NpcDrop:
    """Entry of an NPC's drop table."""

    item_id: int
    percent: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "NpcDrop":
        return cls(item_id=int(data["itemID"]), percent=data["drop_percent"])


@dataclass(frozen=True)
class NpcStats:
    """Combat stat block of an NPC."""

    hp: Number = 0
    tp: Number = 0
    min_damage: Number = 0
    max_damage: Number = 0
    accuracy: Number = 0
    evasion: Number = 0
    armor: Number = 0
    critical_chance: Number = 0
    level: Number = 0
    experience: Number = 0

    @classmethod
    def from_dict(cls, data: RawRecord) -> "NpcStats":
        return cls(**{name: data[name] for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Npc:
    """NPC record."""

    id: int
    name: str
    graphic: int
    race: int
    boss: int
    child: int
    behavior: int
    vendor_id: int
    respawn_secs: Number
    spawn_time: Number
    default_speed: Number
    stats: NpcStats
    drops: Tuple[NpcDrop, ...] = ()
    shared: Tuple[NpcDrop, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Npc":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            graphic=int(data["graphic"]),
            race=int(data["race"]),
            boss=int(data["boss"]),
            child=int(data["child"]),
            behavior=int(data["behavior"]),
            vendor_id=int(data["vendor_id"]),
            respawn_secs=data["npc_respawn_secs"],
            spawn_time=data["npc_spawn_time"],
            default_speed=data["npc_default_speed"],
            stats=NpcStats.from_dict(data),
            drops=_tuple_of(NpcDrop, data.get("drops")),
            shared=_tuple_of(NpcDrop, data.get("shared")),
        )


# =============================================================================
# Map Models
# =============================================================================

@dataclass(frozen=True)
class MapNpcSpawn:
    """NPC spawn descriptor placed on a map."""

    npc_id: int
    x: int
    y: int
    amount: Number
    speed: Number
    time: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "MapNpcSpawn":
        return cls(
            npc_id=int(data["id"]),
            x=int(data["x"]),
            y=int(data["y"]),
            amount=data["amount"],
            speed=data["speed"],
            time=data["time"],
        )


@dataclass(frozen=True)
class MapItem:
    """Ground item or chest slot placed on a map."""

    item_id: int
    x: int
    y: int
    key: int
    slot: int
    time: Number
    amount: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "MapItem":
        return cls(
            item_id=int(data["item_id"]),
            x=int(data["x"]),
            y=int(data["y"]),
            key=int(data["key"]),
            slot=int(data["slot"]),
            time=data["time"],
            amount=data["amount"],
        )


@dataclass(frozen=True)
class MapGather:
    """Resource node on a map."""

    item_id: int
    x: int
    y: int
    type: int
    hit_count: Number
    max_amount: Number
    graphic_id: int

    @classmethod
    def from_dict(cls, data: RawRecord) -> "MapGather":
        return cls(
            item_id=int(data["item_id"]),
            x=int(data["x"]),
            y=int(data["y"]),
            type=int(data["type"]),
            hit_count=data["hit_count"],
            max_amount=data["max_amount"],
            graphic_id=int(data["graphic_id"]),
        )


@dataclass(frozen=True)
class WarpTile:
    """Tile that moves the player to another map."""

    x: int
    y: int
    destination_id: int
    destination_x: int
    destination_y: int

    @classmethod
    def from_dict(cls, data: RawRecord) -> "WarpTile":
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            destination_id=int(data["destination_id"]),
            destination_x=int(data["destination_x"]),
            destination_y=int(data["destination_y"]),
        )


@dataclass(frozen=True)
class MapLayer:
    """Named sparse grid of tile graphics.

    When several entries share a coordinate the first one wins.
    """

    name: str
    rows: int
    columns: Optional[int] = None
    tiles: Mapping[Coord, Optional[int]] = field(default_factory=_frozen_mapping, hash=False)

    @classmethod
    def from_dict(cls, data: RawRecord) -> "MapLayer":
        details = data["details"]
        tiles: Dict[Coord, Optional[int]] = {}
        for tile in data.get("tiles") or ():
            tiles.setdefault((int(tile["x"]), int(tile["y"])), tile.get("tile"))
        columns = details.get("columns")
        return cls(
            name=details["name"],
            rows=int(details["rows"]),
            columns=int(columns) if columns is not None else None,
            tiles=MappingProxyType(tiles),
        )

    def tile_at(self, x: int, y: int) -> Optional[int]:
        """Return the graphic at a coordinate, or None."""
        return self.tiles.get((x, y))


@dataclass(frozen=True)
class MapSign:
    """Readable sign placed on a map."""

    x: int
    y: int
    title: str
    message: str

    @classmethod
    def from_dict(cls, data: RawRecord) -> "MapSign":
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            title=data["msg"]["title"],
            message=data["msg"]["message"],
        )


@dataclass(frozen=True)
class GameMap:
    """Map record with its entity layers.

    `spec_tiles` maps a coordinate to its tile-spec code. The cell sets are
    derived once at construction and used by the preview renderer.
    """

    id: int
    name: str
    width: int
    height: int
    scroll_allow: int = 0
    minimap_allow: int = 0
    daymode: int = 0
    weather_type: int = 0
    respawn_x: int = 0
    respawn_y: int = 0
    npcs: Tuple[MapNpcSpawn, ...] = ()
    items: Tuple[MapItem, ...] = ()
    gathers: Tuple[MapGather, ...] = ()
    warps: Tuple[WarpTile, ...] = ()
    layers: Tuple[MapLayer, ...] = ()
    signs: Tuple[MapSign, ...] = ()
    spec_tiles: Mapping[Coord, int] = field(default_factory=_frozen_mapping, hash=False)
    npc_cells: FrozenSet[Coord] = field(default_factory=frozenset, repr=False)
    warp_cells: FrozenSet[Coord] = field(default_factory=frozenset, repr=False)

    @classmethod
    def from_dict(cls, data: RawRecord) -> "GameMap":
        """Create GameMap from a validated JSON record.

        Args:
            data: Record from the maps dump

        Returns:
            GameMap instance
        """
        spec_tiles: Dict[Coord, int] = {}
        for tile in data["spec_tiles"]:
            spec_tiles.setdefault((int(tile["x"]), int(tile["y"])), int(tile["spec"]))

        npcs = _tuple_of(MapNpcSpawn, data["npcs"])
        warps = _tuple_of(WarpTile, data["warp_tiles"])

        return cls(
            id=int(data["id"]),
            name=data["name"],
            width=int(data["width"]),
            height=int(data["height"]),
            scroll_allow=int(data["scroll_allow"]),
            minimap_allow=int(data["minimap_allow"]),
            daymode=int(data["daymode"]),
            weather_type=int(data["weather_type"]),
            respawn_x=int(data["respawn_x"]),
            respawn_y=int(data["respawn_y"]),
            npcs=npcs,
            items=_tuple_of(MapItem, data["items"]),
            gathers=_tuple_of(MapGather, data.get("map_gathers")),
            warps=warps,
            layers=_tuple_of(MapLayer, data["map_layers"]),
            signs=_tuple_of(MapSign, data["signs"]),
            spec_tiles=MappingProxyType(spec_tiles),
            npc_cells=frozenset((n.x, n.y) for n in npcs),
            warp_cells=frozenset((w.x, w.y) for w in warps),
        )

    def spec_at(self, x: int, y: int) -> Optional[int]:
        """Return the tile-spec code at a coordinate, or None."""
        return self.spec_tiles.get((x, y))

    def layer(self, name: str) -> Optional[MapLayer]:
        """Return the first layer with the given name."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def object_graphic_at(self, x: int, y: int) -> Optional[int]:
        """Return the Object layer graphic at a coordinate, or None."""
        layer = self.layer(OBJECT_LAYER_NAME)
        if layer is None:
            return None
        return layer.tile_at(x, y)


# =============================================================================
# Quest Models
# =============================================================================

@dataclass(frozen=True)
class QuestReward:
    """Item reward of a quest."""

    item_id: int
    amount: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "QuestReward":
        return cls(item_id=int(data["item_id"]), amount=data["amount"])


@dataclass(frozen=True)
class QuestStateNpc:
    npc_type: int
    npc_id: int

    @classmethod
    def from_dict(cls, data: RawRecord) -> "QuestStateNpc":
        return cls(npc_type=int(data["npc_type"]), npc_id=int(data["npc_id"]))


@dataclass(frozen=True)
class QuestState:
    """Narrative quest state; not used by computed logic."""

    state_id: int
    npcs: Tuple[QuestStateNpc, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "QuestState":
        return cls(
            state_id=int(data["state_id"]),
            npcs=_tuple_of(QuestStateNpc, data["npcs"]),
        )


@dataclass(frozen=True)
class Quest:
    """Quest record."""

    id: int
    title: str
    quest_type: int
    min_level: Number
    max_level: Number
    repeatable: int
    reward_exp: Number
    additional_exp: Number
    start_npcs: Tuple[int, ...] = ()
    item_rewards_1: Tuple[QuestReward, ...] = ()
    item_rewards_2: Tuple[QuestReward, ...] = ()
    states: Tuple[QuestState, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Quest":
        return cls(
            id=int(data["id"]),
            title=data["title"],
            quest_type=int(data["quest_type"]),
            min_level=data["min_level"],
            max_level=data["max_level"],
            repeatable=int(data["repeatable"]),
            reward_exp=data["reward_exp"],
            additional_exp=data["additional_exp"],
            start_npcs=tuple(int(n) for n in data["start_npcs"]),
            item_rewards_1=_tuple_of(QuestReward, data["item_rewards_1"]),
            item_rewards_2=_tuple_of(QuestReward, data["item_rewards_2"]),
            states=_tuple_of(QuestState, data["states"]),
        )

    @property
    def rewards(self) -> Tuple[QuestReward, ...]:
        """Both reward arrays, first then second."""
        return self.item_rewards_1 + self.item_rewards_2

    @property
    def start_npc_vendor_id(self) -> Optional[int]:
        """The authoritative (first) start-NPC id, if any."""
        return self.start_npcs[0] if self.start_npcs else None


# =============================================================================
# Shop Models
# =============================================================================

@dataclass(frozen=True)
class ShopNpc:
    """Presence of a shop's NPC on a map, keyed by NPC name."""

    npc_name: str
    map_id: int
    map_name: str
    x: int
    y: int

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ShopNpc":
        return cls(
            npc_name=data["npc_name"],
            map_id=int(data["map_id"]),
            map_name=data["map_name"],
            x=int(data["x"]),
            y=int(data["y"]),
        )


@dataclass(frozen=True)
class ShopBuy:
    """Item sold by a shop and its price."""

    item_id: int
    price: Number

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ShopBuy":
        return cls(item_id=int(data["item_id"]), price=data["price"])


@dataclass(frozen=True)
class Shop:
    """Shop record. The name is the primary key."""

    name: str
    npcs: Tuple[ShopNpc, ...] = ()
    buys: Tuple[ShopBuy, ...] = ()
    crafts: Tuple[int, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Shop":
        return cls(
            name=data["name"],
            npcs=_tuple_of(ShopNpc, data["npcs"]),
            buys=_tuple_of(ShopBuy, data["buys"]),
            crafts=tuple(int(c["item_id"]) for c in data["crafts"]),
        )

    def buy_for(self, item_id: int) -> Optional[ShopBuy]:
        """Return the first buy entry for an item, or None."""
        for buy in self.buys:
            if buy.item_id == item_id:
                return buy
        return None


# =============================================================================
# Class and Spell Models
# =============================================================================

@dataclass(frozen=True)
class ClassStats:
    power: Number = 0
    accuracy: Number = 0
    defense: Number = 0
    dexterity: Number = 0
    vitality: Number = 0
    aura: Number = 0


@dataclass(frozen=True)
class GameClass:
    """Character class record.

    `preview_items` maps an equipment slot (from `preview_<slot>_item_id`)
    to the item id shown in the class picker.
    """

    id: int
    name: str
    class_group: int
    base: ClassStats
    preview_items: Mapping[str, int] = field(default_factory=_frozen_mapping, hash=False)

    @classmethod
    def from_dict(cls, data: RawRecord) -> "GameClass":
        previews: Dict[str, int] = {}
        for key, value in data.items():
            if key.startswith("preview_") and key.endswith("_item_id"):
                slot = key[len("preview_"):-len("_item_id")]
                previews[slot] = int(value)
        return cls(
            id=int(data["id"]),
            name=data["name"],
            class_group=int(data["class_group"]),
            base=ClassStats(
                power=data["base_power"],
                accuracy=data["base_accuracy"],
                defense=data["base_defense"],
                dexterity=data["base_dexterity"],
                vitality=data["base_vitality"],
                aura=data["base_aura"],
            ),
            preview_items=MappingProxyType(previews),
        )


@dataclass(frozen=True)
class Spell:
    """Spell record.

    `direct_effect` selects the meaning of the low/high range:
    1 is damage, 2 is healing.
    """

    id: int
    name: str
    shout: str
    icon: int
    graphic: int
    tp_cost: Number
    sp_cost: Number
    cast_time: Number
    cooldown: Number
    direct_effect: int
    direct_low: Number
    direct_high: Number
    target_restrict: int
    target_type: int
    element: int = 0
    element_power: Number = 0
    icon_url: str = ""
    graphic_url: str = ""

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Spell":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            shout=data["shout"],
            icon=int(data["icon"]),
            graphic=int(data["graphic"]),
            tp_cost=data["tp_cost"],
            sp_cost=data["sp_cost"],
            cast_time=data["cast_time"],
            cooldown=data["cooldown"],
            direct_effect=int(data["direct_effect"]),
            direct_low=data["direct-low"],
            direct_high=data["direct-high"],
            target_restrict=int(data["target_restrict"]),
            target_type=int(data["target_type"]),
            element=int(data["element"]),
            element_power=data["element_power"],
            icon_url=data["icon_url"],
            graphic_url=data["graphic_url"],
        )


Record: TypeAlias = Union[Item, Npc, GameMap, Quest, Shop, GameClass, Spell]

RECORD_TYPES: Dict[Collection, Any] = {
    Collection.CLASSES: GameClass,
    Collection.ITEMS: Item,
    Collection.MAPS: GameMap,
    Collection.NPCS: Npc,
    Collection.QUESTS: Quest,
    Collection.SHOPS: Shop,
    Collection.SPELLS: Spell,
}

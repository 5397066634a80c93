"""
Validation schemas for the collection dumps.

Each collection is checked against the latest known revision of its
record shape. Validation methods return a list of error messages (empty
if valid) so a whole dump can be reported at once; the store turns a
non-empty list into SchemaValidationError.
"""

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any, Dict, FrozenSet, List, Mapping
from urllib.parse import urlparse

from .models import Collection


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "number" if _is_number(value) else type(value).__name__


@dataclass(frozen=True)
class RecordSchema:
    """Shape of one JSON object.

    Field groups are sets of keys; nested arrays of objects and nested
    objects carry their own RecordSchema. `integers` hold ids, codes,
    coordinates and sizes, which must not carry a fractional part.
    `integer_patterns` are shell-style key patterns whose matching keys
    are optional integers. `minimums` bounds numeric fields from below.
    `legacy_fields` maps a key of a superseded revision to the key that
    replaced it.
    """

    numbers: FrozenSet[str] = frozenset()
    integers: FrozenSet[str] = frozenset()
    strings: FrozenSet[str] = frozenset()
    urls: FrozenSet[str] = frozenset()
    optional_numbers: FrozenSet[str] = frozenset()
    optional_integers: FrozenSet[str] = frozenset()
    optional_booleans: FrozenSet[str] = frozenset()
    number_arrays: FrozenSet[str] = frozenset()
    optional_number_arrays: FrozenSet[str] = frozenset()
    integer_arrays: FrozenSet[str] = frozenset()
    optional_integer_arrays: FrozenSet[str] = frozenset()
    integer_patterns: FrozenSet[str] = frozenset()
    minimums: Mapping[str, int] = field(default_factory=dict)
    arrays: Mapping[str, "RecordSchema"] = field(default_factory=dict)
    optional_arrays: Mapping[str, "RecordSchema"] = field(default_factory=dict)
    objects: Mapping[str, "RecordSchema"] = field(default_factory=dict)
    legacy_fields: Mapping[str, str] = field(default_factory=dict)

    @property
    def required(self) -> FrozenSet[str]:
        return (
            self.numbers
            | self.integers
            | self.strings
            | self.urls
            | self.number_arrays
            | self.integer_arrays
            | frozenset(self.arrays)
            | frozenset(self.objects)
        )

    @property
    def scalars(self) -> FrozenSet[str]:
        """Required numeric fields, integers included."""
        return self.numbers | self.integers

    def validate(self, data: Any, path: str) -> List[str]:
        """Validate one object against this schema.

        Args:
            data: Parsed JSON value
            path: Location used as error message prefix

        Returns:
            List of error messages (empty if valid)
        """
        if not isinstance(data, dict):
            return [f"{path}: expected object, got {_type_name(data)}"]

        errors: List[str] = []

        # Superseded revision is reported first, it explains the missing fields
        for legacy, replacement in sorted(self.legacy_fields.items()):
            if legacy in data and replacement not in data:
                errors.append(
                    f"{path}: field '{legacy}' belongs to a superseded schema revision "
                    f"(expected '{replacement}')"
                )

        missing = self.required - data.keys()
        for name in sorted(missing):
            errors.append(f"{path}: missing required field '{name}'")

        for name in sorted(self.numbers | self.optional_numbers):
            if name in data and not (
                _is_number(data[name])
                or (name in self.optional_numbers and data[name] is None)
            ):
                errors.append(f"{path}.{name}: expected number, got {_type_name(data[name])}")

        pattern_keys = {
            key
            for key in data
            if any(fnmatchcase(key, pattern) for pattern in self.integer_patterns)
        }
        for name in sorted(self.integers | pattern_keys | self.optional_integers):
            if name in data and not (
                _is_integer(data[name])
                or (name in self.optional_integers and data[name] is None)
            ):
                errors.append(f"{path}.{name}: expected integer, got {_type_name(data[name])}")

        for name, minimum in sorted(self.minimums.items()):
            value = data.get(name)
            if _is_number(value) and value < minimum:
                errors.append(f"{path}.{name}: expected at least {minimum}, got {value!r}")

        for name in sorted(self.strings):
            if name in data and not isinstance(data[name], str):
                errors.append(f"{path}.{name}: expected string, got {_type_name(data[name])}")

        for name in sorted(self.urls):
            if name in data and not _is_url(data[name]):
                errors.append(f"{path}.{name}: expected url, got {data[name]!r}")

        for name in sorted(self.optional_booleans):
            if name in data and not isinstance(data[name], bool):
                errors.append(f"{path}.{name}: expected boolean, got {_type_name(data[name])}")

        scalar_arrays = [
            (name, _is_number, "number")
            for name in self.number_arrays | self.optional_number_arrays
        ] + [
            (name, _is_integer, "integer")
            for name in self.integer_arrays | self.optional_integer_arrays
        ]
        for name, check, expected in sorted(scalar_arrays, key=lambda entry: entry[0]):
            if name not in data:
                continue
            values = data[name]
            if not isinstance(values, list):
                errors.append(f"{path}.{name}: expected array, got {_type_name(values)}")
                continue
            for index, value in enumerate(values):
                if not check(value):
                    errors.append(
                        f"{path}.{name}[{index}]: expected {expected}, got {_type_name(value)}"
                    )

        for name, schema in sorted({**self.arrays, **self.optional_arrays}.items()):
            if name not in data:
                continue
            values = data[name]
            if not isinstance(values, list):
                errors.append(f"{path}.{name}: expected array, got {_type_name(values)}")
                continue
            for index, value in enumerate(values):
                errors.extend(schema.validate(value, f"{path}.{name}[{index}]"))

        for name, schema in sorted(self.objects.items()):
            if name in data:
                errors.extend(schema.validate(data[name], f"{path}.{name}"))

        return errors


def _fields(*names: str) -> FrozenSet[str]:
    return frozenset(names)


def _at_least(minimum: int, *names: str) -> Dict[str, int]:
    return {name: minimum for name in names}


# Record ids start at 1; coordinates and foreign keys at 0
_ID_MINIMUM = _at_least(1, "id")
_COORD = _fields("x", "y")
_COORD_MINIMUMS = _at_least(0, "x", "y")

# =============================================================================
# Items
# =============================================================================

ITEM_STAT_FIELDS = _fields(
    "hp", "tp", "sp", "min_damage", "max_damage", "hit_rate", "evasion", "armor",
    "critical_chance", "power", "accuracy", "defense", "dexterity", "vitality",
    "aura", "light", "dark", "earth", "air", "water", "fire",
)

ITEM_REQUIREMENT_FIELDS = _fields(
    "required_level", "required_class", "required_power", "required_accuracy",
    "required_dexterity", "required_defense", "required_vitality", "required_aura",
)

ITEM_SCHEMA = RecordSchema(
    numbers=_fields(
        "spec1", "spec2", "spec3", "weight", "aoe_flag", "size", "sell_price",
    ) | ITEM_STAT_FIELDS | ITEM_REQUIREMENT_FIELDS,
    integers=_fields("id", "graphic", "item_type", "item_sub_type", "item_unique"),
    minimums=_ID_MINIMUM,
    strings=_fields("name"),
    urls=_fields("graphic_url"),
    optional_numbers=_fields("target_area"),
    optional_booleans=_fields("gatherableMaps", "gatherableSpots", "chestSpawnChests"),
    optional_integer_arrays=_fields("ingredientFor"),
    optional_arrays={
        "drops": RecordSchema(
            numbers=_fields("drop_percent"),
            integers=_fields("npc_id"),
            minimums=_at_least(0, "npc_id"),
            urls=_fields("npc_url"),
        ),
        "shared": RecordSchema(
            numbers=_fields("drop_percent"),
            integers=_fields("npc_id"),
            minimums=_at_least(0, "npc_id"),
        ),
        "craftables": RecordSchema(
            numbers=_fields("craftEon", "craftGold"),
            strings=_fields("shopName"),
            arrays={
                "craftIngredients": RecordSchema(
                    numbers=_fields("quantity"),
                    integers=_fields("itemID"),
                    minimums=_at_least(0, "itemID"),
                    urls=_fields("item_url"),
                )
            },
        ),
        "soldBy": RecordSchema(strings=_fields("soldByName")),
        "questRewards": RecordSchema(strings=_fields("questName")),
    },
    legacy_fields={"pierce": "item_sub_type"},
)

# =============================================================================
# NPCs
# =============================================================================

NPC_SCHEMA = RecordSchema(
    numbers=_fields(
        "npc_respawn_secs", "npc_spawn_time", "npc_default_speed",
        "hp", "tp", "min_damage", "max_damage", "accuracy", "evasion", "armor",
        "critical_chance", "level", "experience",
    ),
    integers=_fields("id", "graphic", "race", "boss", "child", "behavior", "vendor_id"),
    minimums=_ID_MINIMUM,
    strings=_fields("name"),
    optional_arrays={
        "drops": RecordSchema(
            numbers=_fields("drop_percent"),
            integers=_fields("itemID"),
            minimums=_at_least(0, "itemID"),
            urls=_fields("item_url"),
        ),
        "shared": RecordSchema(
            numbers=_fields("drop_percent"),
            integers=_fields("itemID"),
            minimums=_at_least(0, "itemID"),
        ),
    },
)

# =============================================================================
# Maps
# =============================================================================

MAP_SCHEMA = RecordSchema(
    integers=_fields(
        "id", "width", "height", "scroll_allow", "minimap_allow",
        "daymode", "weather_type", "respawn_x", "respawn_y",
    ),
    minimums={**_ID_MINIMUM, **_at_least(1, "width", "height")},
    strings=_fields("name"),
    arrays={
        "npcs": RecordSchema(
            numbers=_fields("speed", "time", "amount"),
            integers=_COORD | _fields("id"),
            minimums={**_COORD_MINIMUMS, **_at_least(0, "id")},
        ),
        "items": RecordSchema(
            numbers=_fields("time", "amount"),
            integers=_COORD | _fields("key", "slot", "item_id"),
            minimums={**_COORD_MINIMUMS, **_at_least(0, "item_id")},
        ),
        "warp_tiles": RecordSchema(
            integers=_COORD | _fields("destination_id", "destination_x", "destination_y"),
            minimums={
                **_COORD_MINIMUMS,
                **_at_least(0, "destination_id", "destination_x", "destination_y"),
            },
        ),
        "map_layers": RecordSchema(
            objects={
                "details": RecordSchema(
                    integers=_fields("rows"),
                    strings=_fields("name"),
                    optional_integers=_fields("columns"),
                )
            },
            optional_arrays={
                "tiles": RecordSchema(
                    integers=_COORD,
                    optional_integers=_fields("tile"),
                    minimums=_COORD_MINIMUMS,
                )
            },
        ),
        "spec_tiles": RecordSchema(
            integers=_COORD | _fields("spec"), minimums=_COORD_MINIMUMS
        ),
        "signs": RecordSchema(
            integers=_COORD,
            minimums=_COORD_MINIMUMS,
            objects={"msg": RecordSchema(strings=_fields("title", "message"))},
        ),
    },
    optional_arrays={
        "map_gathers": RecordSchema(
            numbers=_fields("hit_count", "max_amount"),
            integers=_COORD | _fields("type", "item_id", "graphic_id"),
            minimums={**_COORD_MINIMUMS, **_at_least(0, "item_id")},
        ),
    },
)

# =============================================================================
# Quests, shops, classes, spells
# =============================================================================

_QUEST_REWARD = RecordSchema(
    numbers=_fields("amount"),
    integers=_fields("item_id"),
    minimums=_at_least(0, "item_id"),
)

QUEST_SCHEMA = RecordSchema(
    numbers=_fields("min_level", "max_level", "reward_exp", "additional_exp"),
    integers=_fields("id", "quest_type", "repeatable"),
    minimums=_ID_MINIMUM,
    strings=_fields("title"),
    optional_numbers=_fields("start_map"),
    integer_arrays=_fields("start_npcs"),
    arrays={
        "item_rewards_1": _QUEST_REWARD,
        "item_rewards_2": _QUEST_REWARD,
        "states": RecordSchema(
            integers=_fields("state_id"),
            arrays={"npcs": RecordSchema(integers=_fields("npc_type", "npc_id"))},
        ),
    },
)

SHOP_SCHEMA = RecordSchema(
    strings=_fields("name"),
    arrays={
        "npcs": RecordSchema(
            integers=_COORD | _fields("map_id"),
            minimums={**_COORD_MINIMUMS, **_at_least(0, "map_id")},
            strings=_fields("npc_name", "map_name"),
        ),
        "buys": RecordSchema(
            numbers=_fields("price"),
            integers=_fields("item_id"),
            minimums=_at_least(0, "item_id"),
        ),
        "crafts": RecordSchema(integers=_fields("item_id"), minimums=_at_least(0, "item_id")),
    },
)

CLASS_SCHEMA = RecordSchema(
    numbers=_fields(
        "base_power", "base_accuracy", "base_defense",
        "base_dexterity", "base_vitality", "base_aura",
    ),
    integers=_fields("id", "class_group"),
    integer_patterns=_fields("preview_*_item_id"),
    minimums=_ID_MINIMUM,
    strings=_fields("name"),
    legacy_fields={
        "class_type": "class_group",
        "classpicker_equip_1": "class_group",
    },
)

SPELL_SCHEMA = RecordSchema(
    numbers=_fields(
        "tp_cost", "sp_cost", "cast_time", "cooldown",
        "direct-low", "direct-high", "element_power",
    ),
    integers=_fields(
        "id", "icon", "graphic", "direct_effect", "target_restrict", "target_type", "element",
    ),
    minimums=_ID_MINIMUM,
    strings=_fields("name", "shout"),
    urls=_fields("icon_url", "graphic_url"),
    legacy_fields={
        "spell_type": "direct_effect",
        "min_damage": "direct-low",
        "max_damage": "direct-high",
    },
)

COLLECTION_SCHEMAS: Dict[Collection, RecordSchema] = {
    Collection.CLASSES: CLASS_SCHEMA,
    Collection.ITEMS: ITEM_SCHEMA,
    Collection.MAPS: MAP_SCHEMA,
    Collection.NPCS: NPC_SCHEMA,
    Collection.QUESTS: QUEST_SCHEMA,
    Collection.SHOPS: SHOP_SCHEMA,
    Collection.SPELLS: SPELL_SCHEMA,
}


def _record_label(index: int, record: Any) -> str:
    if isinstance(record, dict):
        key = record.get("id", record.get("name"))
        if key is not None:
            return f"[{index}] (id={key})" if "id" in record else f"[{index}] (name={key!r})"
    return f"[{index}]"


def validate_collection(collection: Collection, data: Any) -> List[str]:
    """Validate a parsed dump against its collection schema.

    Args:
        collection: Which collection the dump belongs to
        data: Parsed JSON document

    Returns:
        List of error messages (empty if valid)
    """
    if not isinstance(data, list):
        return [f"expected a JSON array, got {_type_name(data)}"]

    schema = COLLECTION_SCHEMAS[collection]
    errors: List[str] = []
    for index, record in enumerate(data):
        errors.extend(schema.validate(record, _record_label(index, record)))
    return errors

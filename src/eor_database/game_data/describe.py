"""
Short descriptive lines for item listings.

`describe_item` summarizes an item in a few strings: its category wording,
sub-type flags, stat bonuses, requirements and sell price.
"""

from typing import List

from .labels import ItemSubType, ItemType
from .models import Item

# Category wording for item types without equipment stats
SIMPLE_CATEGORIES = {
    ItemType.CURRENCY: "currency",
    ItemType.TELEPORT: "teleport",
    ItemType.TRANSFORMATION: "transformation",
    ItemType.EXP_REWARD: "exp reward",
    ItemType.SKILL_BOOK: "skill book",
    ItemType.RESERVED: "reserved",
    ItemType.KEY: "key",
    ItemType.BEVERAGE: "beverage",
    ItemType.EFFECT: "effect",
    ItemType.HAIRDYE: "hairdye",
    ItemType.HAIRTOOL: "hairtool",
    ItemType.CURE: "cure",
    ItemType.VISUAL_DOCUMENT: "visual document",
    ItemType.AUDIO_DOCUMENT: "audio document",
    ItemType.TRANSPORT_TICKET: "transport ticket",
    ItemType.FIREWORKS: "fireworks",
    ItemType.EXPLOSIVE: "explosive",
    ItemType.REVIVE_OTHER: "medical supply",
    ItemType.REVIVE_SELF: "medical supply",
    ItemType.BUFF: "buff",
    ItemType.DEBUFF: "debuff",
}

GENERAL_SUB_TYPES = {
    ItemSubType.CRAFT: "craft",
    ItemSubType.QUEST: "quest",
    ItemSubType.FILLABLE: "fillable",
    ItemSubType.DEPRECATED: "deprecated",
}

EQUIPMENT_SLOTS = {
    ItemType.WEAPON: "weapon",
    ItemType.SHIELD: "shield",
    ItemType.CLOTHING: "clothing",
    ItemType.HAT: "hat",
    ItemType.BOOTS: "boots",
    ItemType.GLOVES: "gloves",
    ItemType.ACCESSORY: "accessory",
    ItemType.BELT: "belt",
    ItemType.NECKLACE: "necklace",
    ItemType.RING: "ring",
    ItemType.BRACELET: "bracelet",
    ItemType.BRACER: "bracer",
    ItemType.COSTUME: "costume",
    ItemType.COSTUME_HAT: "coshat",
    ItemType.WINGS: "wings",
    ItemType.BUDDY_SHOULDER: "buddy",
    ItemType.BUDDY_GROUND: "buddy",
    ItemType.TORCH: "torch",
}

# Suffix by item_unique // 20; 6 and above means expiring
UNIQUENESS_SUFFIXES = {1: " (lore)", 2: " (bound)", 3: " (forever)", 4: " (volatile)"}
CURSED_UNIQUENESS = 5
EXPIRING_UNIQUENESS = 6

# Weapon sub-types that turn the weapon into a gathering tool
TOOL_FLAGS = {
    ItemSubType.MINING: "+minerable mining",
    ItemSubType.LOGGING: "+wood logging",
    ItemSubType.FARMING: "+farming",
    ItemSubType.FISHING: "+fishing",
    ItemSubType.ANTIDOTE: "+antidote",
    ItemSubType.UNBOXING: "+unboxing",
}

EQUIPMENT_TYPE_RANGE = range(ItemType.WEAPON, ItemType.TORCH + 1)


def _category(item: Item) -> str:
    uniqueness = item.item_unique // 20

    if item.item_type == ItemType.GENERAL:
        words = ["general"]
        sub_type = GENERAL_SUB_TYPES.get(item.item_sub_type)  # type: ignore[call-overload]
        if sub_type:
            words.append(sub_type)
        words.append("item")
        category = " ".join(words)
    elif item.item_type == ItemType.POTION:
        category = "potion"
        if item.stats.hp:
            category += f" + {item.stats.hp}hp"
        if item.stats.tp:
            category += f" + {item.stats.tp}mp"
    elif item.item_type == ItemType.TITLE:
        category = "title" if item.spec1 == 1 else "announcement"
    elif item.item_type in SIMPLE_CATEGORIES:
        category = SIMPLE_CATEGORIES[item.item_type]  # type: ignore[index]
    elif item.item_type > ItemType.TORCH:
        category = "unknown"
    else:
        category = "cursed" if uniqueness == CURSED_UNIQUENESS else "normal"
        if item.target_area:
            category += " target area"
        if item.item_type in (ItemType.CLOTHING, ItemType.COSTUME):
            category += " male" if item.spec2 == 1 else " female"
        slot = EQUIPMENT_SLOTS.get(item.item_type)  # type: ignore[call-overload]
        if slot:
            category += f" {slot}"

    category += UNIQUENESS_SUFFIXES.get(uniqueness, "")
    if uniqueness >= EXPIRING_UNIQUENESS:
        category += " (expiring)"
    return category


def _flags(item: Item) -> List[str]:
    flags: List[str] = []
    sub_type = item.item_sub_type

    if sub_type == ItemSubType.WEDDING:
        flags.append("+wedding")
    if sub_type == ItemSubType.WARMTH:
        flags.append("+warmth")
    if item.item_type in (ItemType.SHIELD, ItemType.WEAPON) and sub_type == ItemSubType.PLAYABLE:
        flags.append("+playable")
    if item.item_type == ItemType.WEAPON and sub_type in TOOL_FLAGS:
        flags.append(TOOL_FLAGS[sub_type])  # type: ignore[index]
    if sub_type == ItemSubType.STEAL_THE_SHOW:
        flags.append(".. steal the show")
    if item.item_type == ItemType.REVIVE_OTHER:
        flags.append("revive other")
    if item.item_type == ItemType.REVIVE_SELF:
        flags.append("revive self")
    return flags


def _joined(prefix: str, parts: List[str]) -> str:
    return " ".join([prefix, *parts])


def _stat_lines(item: Item) -> List[str]:
    stats = item.stats
    lines: List[str] = []

    if stats.min_damage or stats.max_damage:
        damage = "aoe: " if item.aoe_flag else "damage: "
        damage += f"{stats.min_damage} - {stats.max_damage}"
        if item.target_area:
            damage += f" +{item.target_area}r"
        lines.append(damage)

    added = [
        f"{value}{unit}"
        for value, unit in ((stats.hp, "hp"), (stats.tp, "mp"), (stats.sp, "sp"))
        if value
    ]
    if added:
        lines.append(_joined("add+", added))

    defensive = [
        f"{value}{unit}"
        for value, unit in ((stats.defense, "def"), (stats.evasion, "eva"), (stats.armor, "arm"))
        if value
    ]
    if defensive:
        lines.append(_joined("def+", defensive))

    if stats.critical_chance and stats.hit_rate:
        lines.append(f"plus+ {stats.hit_rate}hit {stats.critical_chance}crit")
    elif stats.critical_chance:
        lines.append(f"crit+ {stats.critical_chance}")

    bonuses = [
        f"{value}{unit}"
        for value, unit in (
            (stats.power, "pow"),
            (stats.accuracy, "acc"),
            (stats.dexterity, "dex"),
            (stats.defense, "def"),
            (stats.vitality, "vit"),
            (stats.aura, "aur"),
        )
        if value
    ]
    if bonuses:
        lines.append(_joined("stat+", bonuses))

    return lines


def _requirement_line(item: Item) -> str:
    req = item.requirements
    parts: List[str] = []
    if req.level:
        parts.append(f"{req.level}LVL")
    if req.class_id:
        parts.append(f"Class {req.class_id}")
    parts.extend(
        f"{value}{unit}"
        for value, unit in (
            (req.power, "pow"),
            (req.accuracy, "acc"),
            (req.dexterity, "dex"),
            (req.defense, "def"),
            (req.vitality, "vit"),
            (req.aura, "aur"),
        )
        if value
    )
    return _joined("req:", parts)


def describe_item(item: Item) -> List[str]:
    """Build the listing description of an item.

    Args:
        item: Item to describe

    Returns:
        Category line first, then flags, stat lines, requirements and price
    """
    meta = [_category(item)]
    meta.extend(_flags(item))

    if item.item_type in EQUIPMENT_TYPE_RANGE:
        meta.extend(_stat_lines(item))

    if item.requirements.any():
        meta.append(_requirement_line(item))

    if item.sell_price:
        meta.append(f"sell: {item.sell_price}")

    return meta

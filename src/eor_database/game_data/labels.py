"""
Closed enumerations of the game data and their display labels.

Codes outside an enumeration are labelled "Unknown" (some with the raw
code appended), never rejected.
"""

from enum import IntEnum
from typing import Dict


class MapTileSpec(IntEnum):
    """Per-tile behavior codes found in a map's spec tiles."""

    WALL = 0
    CHAIR_DOWN = 1
    CHAIR_LEFT = 2
    CHAIR_RIGHT = 3
    CHAIR_UP = 4
    CHAIR_DOWN_RIGHT = 5
    CHAIR_UP_LEFT = 6
    CHAIR_ALL = 7
    RESERVED_8 = 8
    CHEST = 9
    RESERVED_10 = 10
    RESERVED_11 = 11
    RESERVED_12 = 12
    RESERVED_13 = 13
    GATHER_BLOCK = 14
    GATHER = 15
    BANK_VAULT = 16
    NPC_BOUNDARY = 17
    EDGE = 18
    FAKE_WALL = 19
    BOARD_1 = 20
    BOARD_2 = 21
    BOARD_3 = 22
    BOARD_4 = 23
    BOARD_5 = 24
    BOARD_6 = 25
    BOARD_7 = 26
    BOARD_8 = 27
    JUKEBOX = 28
    RESERVED_29 = 29
    WATER = 30
    RESERVED_31 = 31
    ARENA = 32
    AMBIENT_SOURCE = 33
    AMBIENT_SOURCE_2 = 34
    AMBIENT_SOURCE_3 = 35
    TIMED_SPIKES = 36
    SPIKES = 37
    WELL = 38
    FISHING_DOWN = 61
    FISHING_LEFT = 62
    FISHING_UP = 63
    FISHING_RIGHT = 64
    JUMP = 81
    RESERVED_83 = 83


class ItemType(IntEnum):
    STATIC = 0
    GENERAL = 1
    CURRENCY = 2
    POTION = 3
    TELEPORT = 4
    TRANSFORMATION = 5
    EXP_REWARD = 6
    SKILL_BOOK = 7
    RESERVED = 8
    KEY = 9
    WEAPON = 10
    SHIELD = 11
    CLOTHING = 12
    HAT = 13
    BOOTS = 14
    GLOVES = 15
    ACCESSORY = 16
    BELT = 17
    NECKLACE = 18
    RING = 19
    BRACELET = 20
    BRACER = 21
    COSTUME = 22
    COSTUME_HAT = 23
    WINGS = 24
    BUDDY_SHOULDER = 25
    BUDDY_GROUND = 26
    TORCH = 27
    BEVERAGE = 28
    EFFECT = 29
    HAIRDYE = 30
    HAIRTOOL = 31
    CURE = 32
    TITLE = 33
    VISUAL_DOCUMENT = 34
    AUDIO_DOCUMENT = 35
    TRANSPORT_TICKET = 36
    FIREWORKS = 37
    EXPLOSIVE = 38
    BUFF = 39
    DEBUFF = 40
    REVIVE_OTHER = 41
    REVIVE_SELF = 42


class ItemSubType(IntEnum):
    """Sub-category flags carried in `item_sub_type`."""

    PLAYABLE = 3
    WEDDING = 10
    MINING = 14
    LOGGING = 15
    FARMING = 16
    FISHING = 17
    ANTIDOTE = 22
    UNBOXING = 23
    CRAFT = 24
    QUEST = 25
    FILLABLE = 26
    WARMTH = 27
    STEAL_THE_SHOW = 30
    DEPRECATED = 31


class NpcBehavior(IntEnum):
    FRIENDLY = 0
    PASSIVE = 1
    AGGRESSIVE = 2
    CRAFTING = 5
    SHOP = 6
    INN_KEEPER = 7
    BANK = 9
    BARBER = 10
    GUILD_MASTER = 11
    PRIEST = 12
    LAWYER = 13
    TRAINER = 14
    QUEST = 15


class SpellDirectEffect(IntEnum):
    NONE = 0
    ATTACK = 1
    HEAL = 2


ITEM_TYPE_LABELS: Dict[int, str] = {
    0: "Static",
    1: "General",
    2: "Money",
    3: "Potion",
    4: "Teleport",
    5: "Transformation",
    6: "EXP Reward",
    7: "Skill Book",
    8: "Reserved",
    9: "Key",
    10: "Weapon",
    11: "Shield",
    12: "Clothing",
    13: "Hat",
    14: "Boots",
    15: "Gloves",
    16: "Accessory",
    17: "Belt",
    18: "Necklace",
    19: "Ring",
    20: "Bracelet",
    21: "Bracer",
    22: "Costume",
    23: "Costume Hat",
    24: "Wings",
    25: "Buddy",
    26: "Buddy 2",
    27: "Torch",
    28: "Beverage",
    29: "Effect",
    30: "Hairdye",
    31: "Hairtool",
    32: "Cure",
    33: "Title",
    34: "Visual Document",
    35: "Audio Document",
    36: "Transport Ticket",
    37: "Fireworks",
    38: "Explosive",
    39: "Buff",
    40: "Debuff",
}

ITEM_SUB_TYPE_LABELS: Dict[int, str] = {
    24: "craft",
    25: "quest",
    26: "fillable",
    31: "deprecated",
}

NPC_TYPE_LABELS: Dict[int, str] = {
    0: "Friendly",
    1: "Passive",
    2: "Aggressive",
    5: "Crafting",
    6: "Shop",
    7: "Inn Keeper",
    9: "Bank",
    10: "Barber",
    11: "Guild Master",
    12: "Priest",
    13: "Lawyer",
    14: "Trainer",
    15: "Quest",
}

NPC_SPEED_LABELS: Dict[int, str] = {
    0: "Custom",
    1: "Ultra++",
    2: "Ultra+",
    3: "Ultra",
    4: "Speedy+",
    5: "Speedy",
    6: "Fast+",
    7: "Fast",
    8: "Medium+",
    9: "Medium",
    10: "Medium-",
    11: "Slow",
    15: "Fixed",
}

SPELL_DIRECT_EFFECT_LABELS: Dict[int, str] = {
    SpellDirectEffect.NONE: "None",
    SpellDirectEffect.ATTACK: "Attack",
    SpellDirectEffect.HEAL: "Heal",
}

SPELL_TARGET_LABELS: Dict[int, str] = {0: "Other", 1: "Self", 3: "Group"}

SPELL_TARGET_RESTRICT_LABELS: Dict[int, str] = {0: "Npc", 1: "Friendly", 2: "Opponent"}

LIGHT_MODE_LABELS: Dict[int, str] = {
    0: "Indoors",
    1: "Indoors",
    2: "Dark",
    3: "Glitch",
    4: "Outdoors",
    5: "Shadowed",
}

WEATHER_TYPE_LABELS: Dict[int, str] = {
    0: "Normal",
    4: "Freezing",
    5: "Underwater",
    7: "Light Snow",
    8: "Heavy Snow",
}


def item_type_label(code: int) -> str:
    return ITEM_TYPE_LABELS.get(code, "Unknown")


def item_sub_type_label(code: int) -> str:
    return ITEM_SUB_TYPE_LABELS.get(code, f"unknown({code})")


def npc_type_label(code: int) -> str:
    return NPC_TYPE_LABELS.get(code, "Unknown")


def npc_speed_label(code: int) -> str:
    return NPC_SPEED_LABELS.get(code, f"Unknown ({code})")


def spell_direct_effect_label(code: int) -> str:
    return SPELL_DIRECT_EFFECT_LABELS.get(code, f"Unknown ({code})")


def spell_target_label(code: int) -> str:
    return SPELL_TARGET_LABELS.get(code, f"Unknown ({code})")


def spell_target_restrict_label(code: int) -> str:
    return SPELL_TARGET_RESTRICT_LABELS.get(code, f"Unknown ({code})")


def light_mode_label(code: int) -> str:
    return LIGHT_MODE_LABELS.get(code, f"Unknown ({code})")


def weather_type_label(code: int) -> str:
    return WEATHER_TYPE_LABELS.get(code, f"Unknown ({code})")

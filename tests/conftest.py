"""Shared fixtures: record factories and a small on-disk dataset."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import orjson
import pytest

from eor_database.crossref import CrossReferenceResolver
from eor_database.game_data import DatasetStore
from eor_database.game_data.schema import (
    CLASS_SCHEMA,
    ITEM_SCHEMA,
    MAP_SCHEMA,
    NPC_SCHEMA,
    QUEST_SCHEMA,
    SPELL_SCHEMA,
)
from eor_database.settings import AppSettings

ASSET_URL = "https://eor-api.example.com/assets"


# =============================================================================
# Record factories
# =============================================================================

def make_item(item_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in ITEM_SCHEMA.scalars}
    record.update(
        id=item_id,
        name=name,
        graphic=item_id,
        item_type=1,
        graphic_url=f"{ASSET_URL}/items/{item_id}.png",
    )
    record.update(fields)
    return record


def make_npc(npc_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in NPC_SCHEMA.scalars}
    record.update(
        id=npc_id,
        name=name,
        graphic=npc_id,
        npc_respawn_secs=60,
        npc_default_speed=9,
    )
    record.update(fields)
    return record


def make_map(map_id: int, name: str, width: int, height: int, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in MAP_SCHEMA.scalars}
    record.update(id=map_id, name=name, width=width, height=height)
    for array in MAP_SCHEMA.arrays:
        record[array] = []
    record.update(fields)
    return record


def make_quest(quest_id: int, title: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in QUEST_SCHEMA.scalars}
    record.update(
        id=quest_id,
        title=title,
        start_npcs=[],
        item_rewards_1=[],
        item_rewards_2=[],
        states=[],
    )
    record.update(fields)
    return record


def make_shop(name: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {"name": name, "npcs": [], "buys": [], "crafts": []}
    record.update(fields)
    return record


def make_class(class_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in CLASS_SCHEMA.scalars}
    record.update(id=class_id, name=name)
    record.update(fields)
    return record


def make_spell(spell_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {key: 0 for key in SPELL_SCHEMA.scalars}
    record.update(
        id=spell_id,
        name=name,
        shout=name.lower(),
        icon_url=f"{ASSET_URL}/spells/{spell_id}/icon.png",
        graphic_url=f"{ASSET_URL}/spells/{spell_id}/graphic.png",
    )
    record.update(fields)
    return record


def shop_npc(npc_name: str, map_id: int, map_name: str, x: int, y: int) -> Dict[str, Any]:
    return {"npc_name": npc_name, "map_id": map_id, "map_name": map_name, "x": x, "y": y}


def map_spawn(npc_id: int, x: int, y: int, speed: int = 0, time: int = 0, amount: int = 1) -> Dict[str, Any]:
    return {"id": npc_id, "x": x, "y": y, "speed": speed, "time": time, "amount": amount}


def map_item(item_id: int, x: int, y: int, slot: int = 0, amount: int = 1) -> Dict[str, Any]:
    return {"item_id": item_id, "x": x, "y": y, "key": 0, "slot": slot, "time": 0, "amount": amount}


def warp(x: int, y: int, destination_id: int) -> Dict[str, Any]:
    return {
        "x": x,
        "y": y,
        "destination_id": destination_id,
        "destination_x": 1,
        "destination_y": 1,
    }


# =============================================================================
# Sample dataset
# =============================================================================

def sample_collections() -> Dict[str, List[Dict[str, Any]]]:
    """A small world touching every relation kind.

    Dangling references are placed on purpose: NPC 999, item 999 and 404,
    shop "Ghost Shop", map 555 and the shop NPC "Nobody" do not exist.
    """
    items = [
        make_item(1, "Eons", item_type=2),
        make_item(
            2,
            "Wolf Pelt",
            item_sub_type=24,
            sell_price=4,
            drops=[
                {"npc_id": 10, "drop_percent": 25, "npc_url": f"{ASSET_URL}/npcs/10"},
                {"npc_id": 999, "drop_percent": 1, "npc_url": f"{ASSET_URL}/npcs/999"},
            ],
            shared=[{"npc_id": 11, "drop_percent": 5}],
            ingredientFor=[3, 404],
            soldBy=[{"soldByName": "Tailor"}],
            questRewards=[{"questName": "Pelt Hunt"}, {"questName": "Pelt Hunt"}],
        ),
        make_item(
            3,
            "Fur Cloak",
            item_type=12,
            craftables=[
                {
                    "shopName": "Tailor",
                    "craftEon": 10,
                    "craftGold": 500,
                    "craftIngredients": [
                        {"itemID": 2, "quantity": 3, "item_url": f"{ASSET_URL}/items/2"},
                    ],
                }
            ],
        ),
        make_item(4, "Iron Ore"),
        make_item(
            5,
            "Broken Sword",
            item_type=10,
            craftables=[
                {"shopName": "Ghost Shop", "craftEon": 1, "craftGold": 1, "craftIngredients": []},
            ],
        ),
        make_item(6, "Iron Ore-res"),
        make_item(7, "Health Potion", item_type=3, hp=50),
    ]

    npcs = [
        make_npc(
            10,
            "Wolf",
            behavior=2,
            npc_default_speed=7,
            level=4,
            drops=[
                {"itemID": 2, "drop_percent": 25, "item_url": f"{ASSET_URL}/items/2"},
                {"itemID": 999, "drop_percent": 1, "item_url": f"{ASSET_URL}/items/999"},
            ],
        ),
        make_npc(11, "Raven Lord", behavior=2, boss=1, npc_default_speed=5, level=30),
        make_npc(20, "Tailor Tom", behavior=6),
        make_npc(30, "Elder Mira", behavior=15, vendor_id=5),
    ]

    maps = [
        make_map(
            100,
            "Aeven",
            4,
            3,
            npcs=[
                map_spawn(10, 1, 1),
                map_spawn(30, 2, 0, speed=3, time=120),
                map_spawn(999, 0, 1),
            ],
            items=[
                map_item(2, 3, 2, slot=0),
                map_item(7, 3, 2, slot=1, amount=2),
                map_item(2, 0, 2),
            ],
            spec_tiles=[{"x": 3, "y": 2, "spec": 9}, {"x": 0, "y": 0, "spec": 0}],
            map_gathers=[
                {
                    "item_id": 4,
                    "x": 1,
                    "y": 2,
                    "type": 1,
                    "hit_count": 3,
                    "max_amount": 5,
                    "graphic_id": 20,
                }
            ],
            warp_tiles=[warp(0, 1, 101), warp(3, 0, 100), warp(2, 2, 555)],
            map_layers=[
                {"details": {"name": "Ground", "rows": 3, "columns": 4}},
                {"details": {"name": "Object", "rows": 3}, "tiles": [{"x": 3, "y": 2, "tile": 42}]},
            ],
            signs=[{"x": 0, "y": 2, "msg": {"title": "Welcome", "message": "Aeven harbor"}}],
        ),
        make_map(101, "", 2, 2, npcs=[map_spawn(10, 1, 1, speed=0, time=30)]),
    ]

    quests = [
        make_quest(
            200,
            "Pelt Hunt",
            start_npcs=[5],
            item_rewards_1=[{"item_id": 2, "amount": 2}],
            item_rewards_2=[{"item_id": 1, "amount": 100}],
            states=[{"state_id": 0, "npcs": [{"npc_type": 1, "npc_id": 30}]}],
        ),
        make_quest(201, "Lost Errand", start_npcs=[77], item_rewards_1=[{"item_id": 999, "amount": 1}]),
    ]

    shops = [
        make_shop(
            "Tailor",
            npcs=[
                shop_npc("tailor tom", 100, "Aeven", 2, 2),
                shop_npc("Tailor Tom", 101, "", 1, 1),
                shop_npc("Nobody", 100, "Aeven", 0, 0),
            ],
            buys=[{"item_id": 2, "price": 15}, {"item_id": 999, "price": 1}],
            crafts=[{"item_id": 3}, {"item_id": 4}],
        ),
    ]

    classes = [
        make_class(1, "Warrior", class_group=1, base_power=5, preview_weapon_item_id=5),
        make_class(2, "Priest", class_group=2, base_aura=5),
    ]

    spells = [
        make_spell(1, "Heal", direct_effect=2, **{"direct-low": 10, "direct-high": 20}),
        make_spell(2, "Fireball", direct_effect=1, **{"direct-low": 5, "direct-high": 15}),
    ]

    return {
        "classes": classes,
        "items": items,
        "maps": maps,
        "npcs": npcs,
        "quests": quests,
        "shops": shops,
        "spells": spells,
    }


def write_collection(data_dir: Path, name: str, records: Any) -> Path:
    """Write one collection dump with orjson."""
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / f"{name}.json"
    path.write_bytes(orjson.dumps(records))
    return path


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding all seven sample dumps."""
    directory = tmp_path / "data"
    for name, records in sample_collections().items():
        write_collection(directory, name, records)
    return directory


@pytest.fixture
def store(data_dir: Path) -> DatasetStore:
    return DatasetStore(data_dir)


@pytest.fixture
def resolver(store: DatasetStore) -> CrossReferenceResolver:
    return CrossReferenceResolver(store)


@pytest.fixture
def app_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    """AppSettings backed by a throwaway INI file."""
    monkeypatch.delenv("API_REFRESH_KEY", raising=False)
    return AppSettings(tmp_path / "eor_database.ini")


@pytest.fixture
def restore_logging():
    """Remove the handlers installed by setup_logging after a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        # pytest re-installs its own capture handlers for every test phase
        if type(handler).__module__.startswith("_pytest"):
            continue
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)

"""Tests for listings, pagination, aggregates and item descriptions."""

from pathlib import Path

import pytest

from conftest import make_item, write_collection

from eor_database.errors import InvalidPageError
from eor_database.game_data import DatasetStore
from eor_database.game_data.describe import describe_item
from eor_database.game_data.labels import (
    item_sub_type_label,
    item_type_label,
    light_mode_label,
    npc_speed_label,
    spell_target_restrict_label,
    weather_type_label,
)
from eor_database.game_data.listing import (
    NamedEntry,
    NpcListEntry,
    SearchParams,
    list_items,
    list_maps,
    list_npcs,
    list_spells,
    npc_speeds,
    paginate,
    parse_page,
    shop_names,
)
from eor_database.game_data.models import Item


class TestPagination:
    """Test page slicing and page validation."""

    def test_last_page_holds_remainder(self) -> None:
        result = paginate(list(range(45)), "3")
        assert result.count == 45
        assert result.records == [40, 41, 42, 43, 44]

    def test_page_after_last_is_empty(self) -> None:
        result = paginate(list(range(45)), 4)
        assert result.count == 45
        assert result.records == []

    @pytest.mark.parametrize("page", ["abc", "0", -1, "", True, None])
    def test_invalid_pages(self, page) -> None:
        with pytest.raises(InvalidPageError):
            parse_page(page)

    def test_listing_rejects_invalid_page(self, store: DatasetStore) -> None:
        with pytest.raises(InvalidPageError):
            list_npcs(store, SearchParams(page="x"))

    def test_listing_pages_over_filtered_items(self, tmp_path: Path) -> None:
        """Test count covers all filtered rows while records hold one page."""
        write_collection(
            tmp_path, "items", [make_item(i, f"Rock {i}") for i in range(1, 46)] + [make_item(99, "Gem")]
        )
        store = DatasetStore(tmp_path)

        result = list_items(store, SearchParams(name="rock", page="3"))
        assert result.count == 45
        assert [entry.id for entry in result.records] == [41, 42, 43, 44, 45]


class TestFilters:
    def test_name_filter_is_case_insensitive_substring(self, store: DatasetStore) -> None:
        result = list_npcs(store, SearchParams(name="rav"))
        assert result.count == 1
        assert result.records == [NpcListEntry(id=11, name="Raven Lord", type="Aggressive", level=30)]

    def test_type_filter(self, store: DatasetStore) -> None:
        result = list_items(store, SearchParams(type="3"))
        assert [entry.name for entry in result.records] == ["Health Potion"]
        assert result.records[0].meta == ["potion + 50hp"]

    def test_non_numeric_type_matches_nothing(self, store: DatasetStore) -> None:
        assert list_items(store, SearchParams(type="potion")).count == 0

    @pytest.mark.parametrize("type_filter", ["3abc", " 3", "+3"])
    def test_type_filter_reads_leading_integer(self, store: DatasetStore, type_filter: str) -> None:
        result = list_items(store, SearchParams(type=type_filter))
        assert [entry.name for entry in result.records] == ["Health Potion"]

    def test_all_types(self, store: DatasetStore) -> None:
        assert list_items(store, SearchParams(type="all")).count == 6

    def test_unnamed_map(self, store: DatasetStore) -> None:
        result = list_maps(store, SearchParams())
        assert result.records == [NamedEntry(100, "Aeven"), NamedEntry(101, "???")]

    def test_spell_effect_labels(self, store: DatasetStore) -> None:
        result = list_spells(store, SearchParams(type="2"))
        assert [(entry.name, entry.effect, entry.target, entry.restrict) for entry in result.records] == [
            ("Heal", "Heal", "Other", "Npc")
        ]


class TestAggregates:
    def test_shop_names_first_seen_order(self, store: DatasetStore) -> None:
        assert shop_names(store) == ["Tailor", "Ghost Shop"]

    def test_npc_speeds(self, store: DatasetStore) -> None:
        """Test distinct effective speeds with the first NPC seen at each."""
        speeds = npc_speeds(store)
        assert [(s.speed, s.label, s.npc_name) for s in speeds] == [
            (7, "Fast", "Wolf"),
            (3, "Ultra", "Elder Mira"),
        ]


class TestDescribeItem:
    """Test the short description lines of listing rows."""

    def _item(self, **fields) -> Item:
        return Item.from_dict(make_item(1, "Test", **fields))

    def test_general_craft_item(self) -> None:
        assert describe_item(self._item(item_type=1, item_sub_type=24)) == ["general craft item"]

    def test_currency(self) -> None:
        assert describe_item(self._item(item_type=2)) == ["currency"]

    def test_weapon_stats_and_requirements(self) -> None:
        meta = describe_item(
            self._item(
                item_type=10,
                min_damage=5,
                max_damage=9,
                power=2,
                required_level=10,
                sell_price=40,
            )
        )
        assert meta == [
            "normal weapon",
            "damage: 5 - 9",
            "stat+ 2pow",
            "req: 10LVL",
            "sell: 40",
        ]

    def test_gathering_tool_flag(self) -> None:
        meta = describe_item(self._item(item_type=10, item_sub_type=14))
        assert meta == ["normal weapon", "+minerable mining"]

    def test_uniqueness_suffix(self) -> None:
        assert describe_item(self._item(item_type=13, item_unique=40)) == ["normal hat (bound)"]

    def test_clothing_gender(self) -> None:
        assert describe_item(self._item(item_type=12, spec2=1)) == ["normal male clothing"]


class TestLabels:
    """Test display labels of enumerated codes."""

    def test_known_codes(self) -> None:
        assert item_type_label(2) == "Money"
        assert item_sub_type_label(24) == "craft"
        assert npc_speed_label(15) == "Fixed"
        assert spell_target_restrict_label(2) == "Opponent"
        assert light_mode_label(4) == "Outdoors"
        assert weather_type_label(8) == "Heavy Snow"

    def test_unknown_codes_are_not_rejected(self) -> None:
        assert item_type_label(99) == "Unknown"
        assert item_sub_type_label(0) == "unknown(0)"
        assert npc_speed_label(12) == "Unknown (12)"
        assert weather_type_label(1) == "Unknown (1)"

"""Tests for item cross references."""

import pytest

from eor_database.crossref import CrossReferenceResolver, RelationStatus
from eor_database.crossref import items as item_relations
from eor_database.crossref.rows import (
    ChestSpawnRow,
    GatherSpotRow,
    IngredientRow,
    ItemDropRow,
    NamedRef,
    QuestRewardRow,
    SoldByRow,
    VendorRow,
)
from eor_database.errors import ShopNotFoundError
from eor_database.game_data import DatasetStore


class TestItemDrops:
    def test_drop_and_shared_tables(self, resolver: CrossReferenceResolver) -> None:
        """Test drops come first, then shared drops, skipping unknown NPCs."""
        assert resolver.item_drops(2) == [
            ItemDropRow(npc_id=10, npc_name="Wolf", percent=25),
            ItemDropRow(npc_id=11, npc_name="Raven Lord", percent=5),
        ]

    def test_dangling_npc_is_reported_as_partial(self, store: DatasetStore) -> None:
        result = item_relations.item_drops(store, 2)
        assert result.status is RelationStatus.PARTIAL
        assert result.omitted == 1
        assert len(result) == 2

    def test_unknown_item(self, resolver: CrossReferenceResolver) -> None:
        assert resolver.item_drops(12345) == []


class TestItemIngredientFor:
    def test_resolves_known_items_only(self, resolver: CrossReferenceResolver) -> None:
        assert resolver.item_ingredient_for(2) == [NamedRef(3, "Fur Cloak")]


class TestItemCraftables:
    """Test recipes and the unknown-shop hard failure."""

    def test_recipe_with_ingredients_and_vendors(self, resolver: CrossReferenceResolver) -> None:
        (recipe,) = resolver.item_craftables(3)
        assert recipe.shop_name == "Tailor"
        assert (recipe.eons, recipe.gold) == (10, 500)
        assert recipe.ingredients == (IngredientRow(2, "Wolf Pelt", 3),)
        assert recipe.npcs == (
            VendorRow(npc_id=20, npc_name="Tailor Tom", graphic=20, map_id=100, map_name="Aeven", x=2, y=2),
            VendorRow(npc_id=20, npc_name="Tailor Tom", graphic=20, map_id=101, map_name="", x=1, y=1),
        )

    def test_unknown_shop_raises(self, resolver: CrossReferenceResolver) -> None:
        with pytest.raises(ShopNotFoundError) as exc_info:
            resolver.item_craftables(5)
        assert exc_info.value.shop_name == "Ghost Shop"
        assert exc_info.value.item_id == 5

    def test_unknown_shop_is_a_failed_result(self, store: DatasetStore) -> None:
        """Test the typed result tells a failure apart from omissions."""
        result = item_relations.item_craftables(store, 5)
        assert result.status is RelationStatus.FAILED
        assert not result.ok
        assert result.rows == ()
        assert isinstance(result.error, ShopNotFoundError)

    def test_item_without_recipes(self, resolver: CrossReferenceResolver) -> None:
        assert resolver.item_craftables(2) == []


class TestItemSoldBy:
    def test_one_row_per_vendor_location(self, resolver: CrossReferenceResolver) -> None:
        """Test every staffing NPC of a selling shop yields a row with the price."""
        assert resolver.item_sold_by(2) == [
            SoldByRow(npc_id=20, npc_name="Tailor Tom", map_id=100, map_name="Aeven", x=2, y=2, price=15),
            SoldByRow(npc_id=20, npc_name="Tailor Tom", map_id=101, map_name="", x=1, y=1, price=15),
        ]

    def test_unresolved_vendor_is_omitted(self, store: DatasetStore) -> None:
        result = item_relations.item_sold_by(store, 2)
        assert result.status is RelationStatus.PARTIAL
        assert result.omitted == 1


class TestItemQuestRewards:
    def test_deduplicated_titles(self, resolver: CrossReferenceResolver) -> None:
        """Test a title listed twice yields the reward once, with the quest-giver."""
        assert resolver.item_quest_rewards(2) == [
            QuestRewardRow(quest_id=200, quest_name="Pelt Hunt", npc_id=30, amount=2),
        ]


class TestItemGatherAndChests:
    def test_gather_spots_offset_graphic(self, resolver: CrossReferenceResolver) -> None:
        assert resolver.item_gather_spots(4) == [
            GatherSpotRow(item_id=4, map_id=100, map_name="Aeven", x=1, y=2, amount=5, graphic_id=120),
        ]

    def test_chest_spawns_only_on_chest_tiles(self, resolver: CrossReferenceResolver) -> None:
        """Test ground items outside chest tiles are not chest spawns."""
        assert resolver.item_chest_spawns(2) == [
            ChestSpawnRow(
                item_id=2,
                map_id=100,
                map_name="Aeven",
                x=3,
                y=2,
                amount=1,
                slot=0,
                time=0,
                key=0,
                graphic_id=42,
            ),
        ]


class TestCurrencyItem:
    def test_eons_has_no_relations(self, resolver: CrossReferenceResolver) -> None:
        """Test an item without relationship fields resolves to empty lists."""
        assert resolver.store.get_item(1).name == "Eons"
        results = resolver.relations("item", 1)
        assert set(results) == {
            "drops",
            "ingredient_for",
            "craftables",
            "sold_by",
            "quest_rewards",
            "gather_spots",
            "chest_spawns",
        }
        for result in results.values():
            assert result.status is RelationStatus.OK
            assert result.unwrap() == []

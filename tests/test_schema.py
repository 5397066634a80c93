"""Tests for collection dump validation."""

from conftest import make_class, make_item, make_map, make_quest, make_spell, map_spawn

from eor_database.errors import SchemaValidationError
from eor_database.game_data import Collection
from eor_database.game_data.schema import validate_collection


class TestRecordValidation:
    """Test field-level checks."""

    def test_valid_records_have_no_errors(self) -> None:
        assert validate_collection(Collection.ITEMS, [make_item(1, "Eons")]) == []
        assert validate_collection(Collection.MAPS, [make_map(1, "Aeven", 2, 2)]) == []

    def test_wrong_type(self) -> None:
        errors = validate_collection(Collection.ITEMS, [make_item(1, "Eons", weight="heavy")])
        assert errors == ["[0] (id=1).weight: expected number, got string"]

    def test_boolean_is_not_a_number(self) -> None:
        errors = validate_collection(Collection.ITEMS, [make_item(1, "Eons", spec1=True)])
        assert errors == ["[0] (id=1).spec1: expected number, got boolean"]

    def test_url_field(self) -> None:
        errors = validate_collection(Collection.ITEMS, [make_item(1, "Eons", graphic_url="1.png")])
        assert errors == ["[0] (id=1).graphic_url: expected url, got '1.png'"]

    def test_nested_array_entries(self) -> None:
        """Test errors inside nested arrays carry their path."""
        game_map = make_map(1, "Aeven", 2, 2, npcs=[{"id": 3, "x": 0, "y": 0, "speed": 0, "time": 0}])
        errors = validate_collection(Collection.MAPS, [game_map])
        assert errors == ["[0] (id=1).npcs[0]: missing required field 'amount'"]

    def test_optional_target_area_may_be_null(self) -> None:
        assert validate_collection(Collection.ITEMS, [make_item(1, "Eons", target_area=None)]) == []

    def test_not_an_array(self) -> None:
        errors = validate_collection(Collection.SHOPS, {"name": "Tailor"})
        assert errors == ["expected a JSON array, got object"]

    def test_record_not_an_object(self) -> None:
        assert validate_collection(Collection.SHOPS, [3]) == ["[0]: expected object, got number"]


class TestIntegerFields:
    """Test ids, codes, coordinates and sizes are whole and in range."""

    def test_fractional_id(self) -> None:
        errors = validate_collection(Collection.ITEMS, [make_item(8, "Gem", id=8.7)])
        assert errors == ["[0] (id=8.7).id: expected integer, got number"]

    def test_empty_map(self) -> None:
        errors = validate_collection(Collection.MAPS, [make_map(300, "Void", 0, 0)])
        assert errors == [
            "[0] (id=300).height: expected at least 1, got 0",
            "[0] (id=300).width: expected at least 1, got 0",
        ]

    def test_negative_coordinate(self) -> None:
        game_map = make_map(1, "Aeven", 2, 2, npcs=[map_spawn(10, -1, 0)])
        errors = validate_collection(Collection.MAPS, [game_map])
        assert errors == ["[0] (id=1).npcs[0].x: expected at least 0, got -1"]

    def test_integer_array_entries(self) -> None:
        errors = validate_collection(Collection.QUESTS, [make_quest(1, "Errand", start_npcs=[5, 5.5])])
        assert errors == ["[0] (id=1).start_npcs[1]: expected integer, got number"]

    def test_boolean_is_not_an_integer(self) -> None:
        errors = validate_collection(Collection.SPELLS, [make_spell(1, "Heal", element=False)])
        assert errors == ["[0] (id=1).element: expected integer, got boolean"]


class TestClassPreviewItems:
    """Test the per-slot preview_<slot>_item_id fields."""

    def test_valid_previews(self) -> None:
        record = make_class(1, "Warrior", preview_weapon_item_id=5, preview_armor_item_id=0)
        assert validate_collection(Collection.CLASSES, [record]) == []

    def test_null_preview(self) -> None:
        record = make_class(1, "Warrior", preview_weapon_item_id=None)
        errors = validate_collection(Collection.CLASSES, [record])
        assert errors == ["[0] (id=1).preview_weapon_item_id: expected integer, got null"]

    def test_string_preview(self) -> None:
        record = make_class(1, "Warrior", preview_shield_item_id="sword")
        errors = validate_collection(Collection.CLASSES, [record])
        assert errors == ["[0] (id=1).preview_shield_item_id: expected integer, got string"]


class TestSupersededRevisions:
    """Test records of an older schema revision are flagged, not accepted."""

    def test_item_pierce(self) -> None:
        record = make_item(1, "Eons", pierce=0)
        del record["item_sub_type"]
        errors = validate_collection(Collection.ITEMS, [record])
        assert errors[0] == (
            "[0] (id=1): field 'pierce' belongs to a superseded schema revision "
            "(expected 'item_sub_type')"
        )
        assert "[0] (id=1): missing required field 'item_sub_type'" in errors

    def test_class_type(self) -> None:
        record = make_class(1, "Warrior", class_type=1, classpicker_equip_1=4)
        del record["class_group"]
        errors = validate_collection(Collection.CLASSES, [record])
        assert any("'class_type' belongs to a superseded schema revision" in e for e in errors)
        assert any("'classpicker_equip_1' belongs to a superseded schema revision" in e for e in errors)

    def test_spell_damage_fields(self) -> None:
        record = make_spell(1, "Fireball", spell_type=1, min_damage=2, max_damage=4)
        for key in ("direct_effect", "direct-low", "direct-high"):
            del record[key]
        errors = validate_collection(Collection.SPELLS, [record])
        superseded = [e for e in errors if "superseded" in e]
        assert len(superseded) == 3

    def test_legacy_field_next_to_current_one_is_ignored(self) -> None:
        assert validate_collection(Collection.ITEMS, [make_item(1, "Eons", pierce=0)]) == []


class TestSchemaValidationError:
    def test_message_truncates_long_error_lists(self) -> None:
        errors = [f"[{i}]: missing required field 'id'" for i in range(25)]
        error = SchemaValidationError("items", errors)
        message = str(error)
        assert "25 error(s)" in message
        assert "[19]: missing" in message
        assert "[20]: missing" not in message
        assert "... and 5 more" in message
        assert len(error.errors) == 25

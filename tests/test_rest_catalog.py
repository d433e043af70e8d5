"""Tests for the rest option catalog."""

from __future__ import annotations

from companion.content.rest_options import (
    ALL_REST_OPTIONS,
    PATCH_WOUNDS_LONG_ID,
    PATCH_WOUNDS_SHORT_ID,
    PREPARE_SNACK_ID,
)
from companion.models.rest import RestOption, RestOptionCategory, RestType
from companion.skills.rest_catalog import (
    eligible_options,
    get_rest_option,
    is_eligible,
    selectable_options,
    standard_options,
)


def _ids(options: list[RestOption]) -> set[str]:
    return {o.id for o in options}


class TestCatalog:
    """Tests for the static catalog data."""

    def test_ids_unique(self):
        ids = [o.id for o in ALL_REST_OPTIONS]
        assert len(ids) == len(set(ids))

    def test_standard_options(self):
        short = standard_options(RestType.SHORT)
        assert all(o.category == RestOptionCategory.STANDARD for o in short)
        assert all(o.rest_type == RestType.SHORT for o in short)
        assert PATCH_WOUNDS_SHORT_ID in _ids(short)
        assert PATCH_WOUNDS_LONG_ID in _ids(standard_options(RestType.LONG))

    def test_standard_not_selectable(self):
        for option in standard_options(RestType.LONG):
            assert not option.is_selectable


class TestEligibility:
    """Tests for race and class filtering."""

    def test_race_and_class_filter(self):
        ids = _ids(eligible_options(RestType.SHORT, race="Elf", character_class="Wizard"))
        assert "short-race-elf-trance" in ids
        assert "short-class-wizard-arcane-recovery" in ids
        assert "short-race-human-versatile" not in ids
        assert "short-class-fighter-second-wind" not in ids

    def test_includes_standard_and_general(self):
        ids = _ids(eligible_options(RestType.SHORT, race="Elf", character_class="Wizard"))
        assert PATCH_WOUNDS_SHORT_ID in ids
        assert PREPARE_SNACK_ID in ids

    def test_rest_type_filter(self):
        options = eligible_options(RestType.LONG, race="Elf", character_class="Wizard")
        assert all(o.rest_type == RestType.LONG for o in options)

    def test_secondary_race_and_class(self):
        ids = _ids(
            eligible_options(
                RestType.SHORT,
                race="Human",
                character_class="Fighter",
                secondary_race="Dwarf",
                secondary_class="Rogue",
            )
        )
        assert "short-race-dwarf-stonecunning-rest" in ids
        assert "short-class-rogue-cunning-action-prep" in ids

    def test_mixed_race_unlocks_mixed_options(self):
        ids = _ids(
            eligible_options(RestType.SHORT, race="Mixed", secondary_race="Elf")
        )
        assert "short-race-mixed-adaptable" in ids
        assert "short-race-elf-trance" in ids

        human = _ids(eligible_options(RestType.SHORT, race="Human"))
        assert "short-race-mixed-adaptable" not in human

    def test_multiclass_unlocks_multiclass_options(self):
        ids = _ids(
            eligible_options(
                RestType.LONG,
                character_class="Multiclass",
                secondary_class="Cleric",
            )
        )
        assert "long-class-multiclass-combined" in ids
        assert "long-class-cleric-divine-intervention" in ids

    def test_custom_options(self):
        custom = RestOption(
            id="custom-campfire-tales",
            name="Campfire Tales",
            category=RestOptionCategory.CUSTOM,
            rest_type=RestType.LONG,
        )
        long_ids = _ids(eligible_options(RestType.LONG, race="Elf", custom_options=[custom]))
        short_ids = _ids(eligible_options(RestType.SHORT, race="Elf", custom_options=[custom]))
        assert custom.id in long_ids
        assert custom.id not in short_ids

    def test_disabled_options(self):
        ids = _ids(eligible_options(RestType.SHORT, disabled_option_ids=[PREPARE_SNACK_ID]))
        assert PREPARE_SNACK_ID not in ids

    def test_restricted_custom_option(self):
        custom = RestOption(
            id="custom-orc-feast",
            name="Orc Feast",
            category=RestOptionCategory.CUSTOM,
            rest_type=RestType.LONG,
            race_restriction="Orc",
        )
        assert is_eligible(custom, race="Orc")
        assert not is_eligible(custom, race="Elf")

    def test_selectable_options(self):
        options = eligible_options(RestType.SHORT, race="Elf")
        assert all(o.is_selectable for o in selectable_options(options))
        assert PATCH_WOUNDS_SHORT_ID not in _ids(selectable_options(options))


class TestLookup:
    """Tests for lookup by id."""

    def test_lookup_ignores_eligibility(self):
        option = get_rest_option("short-race-dwarf-stonecunning-rest")
        assert option is not None
        assert option.race_restriction == "Dwarf"

    def test_lookup_custom(self):
        custom = RestOption(
            id="custom-x",
            name="X",
            category=RestOptionCategory.CUSTOM,
            rest_type=RestType.SHORT,
        )
        assert get_rest_option("custom-x", [custom]) == custom

    def test_unknown(self):
        assert get_rest_option("nope") is None

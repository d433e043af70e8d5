"""Tests for the rest service."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from companion.content.rest_options import PREPARE_SNACK_ID, WORK_ON_PROJECT_SHORT_ID
from companion.db.memory import InMemoryRecordStore
from companion.models.character import Item, Project
from companion.models.condition import ConditionType, InjuryLocation
from companion.models.currency import Currency
from companion.models.rest import RestLocation, RestType, RoomType
from companion.services.characters import CharacterNotFoundError, CharacterRepository
from companion.services.rest import RestChoices, RestService
from companion.skills.rest import RestEffectsToApply, RestValidationReason


@pytest.fixture
def service() -> RestService:
    characters = CharacterRepository(InMemoryRecordStore())
    data = characters.create(
        "tok-1",
        race="Elf",
        character_class="Wizard",
        level=3,
        max_hp=18,
        inventory=[Item(id="rations", name="Rations", qty=1)],
        currency=Currency(gp=5),
    )
    data.character_stats.exhaustion.current_level = 4
    characters.save("tok-1", data)
    return RestService(characters)


class TestRestService:
    """Tests for resting characters in the record store."""

    def test_options_for_character(self, service: RestService):
        ids = {o.id for o in service.options_for("tok-1", RestType.SHORT)}
        assert "short-race-elf-trance" in ids
        assert "short-class-wizard-arcane-recovery" in ids
        assert "short-class-fighter-second-wind" not in ids

    def test_disabled_options_hidden(self, service: RestService):
        service.disabled_option_ids.add(PREPARE_SNACK_ID)
        ids = {o.id for o in service.options_for("tok-1", RestType.SHORT)}
        assert PREPARE_SNACK_ID not in ids

    def test_preview_writes_nothing(self, service: RestService):
        before = service.characters.require("tok-1")

        effects = service.preview(
            "tok-1",
            RestType.LONG,
            choices=RestChoices(rest_location=RestLocation.SETTLEMENT, room_type=RoomType.QUALITY),
        )

        assert isinstance(effects, RestEffectsToApply)
        assert effects.exhaustion_reduction == 3
        assert service.characters.require("tok-1") == before

    def test_take_rest_saves(self, service: RestService):
        now = datetime(2024, 6, 1, tzinfo=UTC)
        outcome = service.take_rest(
            "tok-1",
            RestType.LONG,
            choices=RestChoices(rest_location=RestLocation.SETTLEMENT, room_type=RoomType.QUALITY),
            now=now,
        )

        assert outcome.success
        stored = service.characters.require("tok-1")
        assert stored == outcome.character
        assert stored.character_stats.exhaustion.current_level == 1
        assert stored.currency == Currency(gp=2)
        assert stored.character_stats.rest_history.last_long_rest.timestamp == now

    def test_rejected_rest_leaves_record(self, service: RestService):
        before = service.characters.require("tok-1")

        outcome = service.take_rest(
            "tok-1",
            RestType.LONG,
            choices=RestChoices(rest_location=RestLocation.SETTLEMENT, room_type=RoomType.LUXURY),
        )

        assert not outcome.success
        assert outcome.error.reason == RestValidationReason.INSUFFICIENT_FUNDS
        assert service.characters.require("tok-1") == before

    def test_remembers_selection(self, service: RestService):
        service.take_rest("tok-1", RestType.SHORT, [PREPARE_SNACK_ID])

        assert service.recently_used("tok-1", RestType.SHORT) == [PREPARE_SNACK_ID]
        assert service.default_selection("tok-1", RestType.SHORT) == [PREPARE_SNACK_ID]

        service.disabled_option_ids.add(PREPARE_SNACK_ID)
        assert service.default_selection("tok-1", RestType.SHORT) == []

    def test_new_project_through_choices(self, service: RestService):
        project = Project(id="tome", name="Copy a spellbook", total_work_units=4)

        outcome = service.take_rest(
            "tok-1",
            RestType.SHORT,
            [WORK_ON_PROJECT_SHORT_ID],
            choices=RestChoices(new_project=project),
        )

        assert outcome.success
        stored = service.characters.require("tok-1").character_stats.get_project("tome")
        assert stored.completed_work_units == 1

    def test_unknown_token(self, service: RestService):
        with pytest.raises(CharacterNotFoundError):
            service.take_rest("ghost", RestType.SHORT)

    def test_default_injury_is_most_severe(self, service: RestService):
        assert service.default_injury("tok-1") is None

        data = service.characters.require("tok-1")
        data.character_stats.conditions.activate_injury(ConditionType.MINOR_INJURY)
        data.character_stats.conditions.activate_injury(
            ConditionType.SERIOUS_INJURY, InjuryLocation.LIMB
        )
        service.characters.save("tok-1", data)

        assert service.default_injury("tok-1") == ConditionType.SERIOUS_INJURY

"""Tests for condition and injury tracking."""

from __future__ import annotations

from datetime import UTC, datetime

from companion.models.condition import (
    CONDITIONS,
    INFECTION_THRESHOLD_DAYS,
    ConditionState,
    ConditionType,
    InjuryLocation,
    create_condition_state,
    get_condition_definition,
)
from companion.skills.injuries import (
    default_injury_target,
    injury_from_roll,
    injury_prompt_for_damage,
)

# --- Condition Flags ---


class TestConditionFlags:
    """Tests for the boolean condition map."""

    def test_every_condition_present_and_false(self):
        state = ConditionState()
        assert set(state.flags) == set(ConditionType)
        assert not any(state.flags.values())

    def test_partial_flags_filled(self):
        state = ConditionState(flags={ConditionType.PRONE: True})
        assert state.is_active(ConditionType.PRONE)
        assert len(state.flags) == len(ConditionType)

    def test_set_condition(self):
        state = ConditionState()
        state.set_condition(ConditionType.BLINDED, True)
        state.set_condition(ConditionType.POISONED, True)
        assert state.active_conditions() == [ConditionType.BLINDED, ConditionType.POISONED]
        assert state.count_active() == 2

        state.set_condition(ConditionType.BLINDED, False)
        assert state.active_conditions() == [ConditionType.POISONED]

    def test_factory(self):
        state = create_condition_state([ConditionType.STUNNED])
        assert state.is_active(ConditionType.STUNNED)

    def test_reference_table_covers_every_condition(self):
        assert {c.id for c in CONDITIONS} == set(ConditionType)
        definition = get_condition_definition(ConditionType.SERIOUS_INJURY)
        assert definition is not None
        assert definition.is_injury


# --- Injury Lifecycle ---


class TestInjuryActivation:
    """Tests for activating and removing injuries."""

    def test_activate_minor(self):
        state = ConditionState()
        assert state.activate_injury(ConditionType.MINOR_INJURY)
        assert state.is_active(ConditionType.MINOR_INJURY)
        data = state.injury_data[ConditionType.MINOR_INJURY]
        assert data.injury_hp == 2
        assert data.injury_days_since_rest == 0

    def test_starting_hp_by_tier(self):
        state = ConditionState()
        state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.LIMB)
        state.activate_injury(ConditionType.CRITICAL_INJURY, InjuryLocation.HEAD)
        assert state.injury_data[ConditionType.SERIOUS_INJURY].injury_hp == 4
        assert state.injury_data[ConditionType.CRITICAL_INJURY].injury_hp == 6

    def test_duplicate_activation_is_noop(self):
        """The first activation's location is kept."""
        state = ConditionState()
        assert state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.LIMB)
        assert not state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.TORSO)

        assert state.active_injuries() == [ConditionType.SERIOUS_INJURY]
        data = state.injury_data[ConditionType.SERIOUS_INJURY]
        assert data.injury_location == InjuryLocation.LIMB

    def test_located_tier_needs_location(self):
        state = ConditionState()
        assert not state.activate_injury(ConditionType.CRITICAL_INJURY)
        assert not state.is_active(ConditionType.CRITICAL_INJURY)
        assert ConditionType.CRITICAL_INJURY not in state.injury_data

    def test_deactivate(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        state.deactivate_injury(ConditionType.MINOR_INJURY)
        assert not state.is_active(ConditionType.MINOR_INJURY)
        assert ConditionType.MINOR_INJURY not in state.injury_data

    def test_set_condition_routes_injuries(self):
        state = ConditionState()
        state.set_condition(ConditionType.MINOR_INJURY, True)
        assert ConditionType.MINOR_INJURY in state.injury_data
        state.set_condition(ConditionType.MINOR_INJURY, False)
        assert ConditionType.MINOR_INJURY not in state.injury_data

    def test_active_injuries_most_severe_first(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        state.activate_injury(ConditionType.CRITICAL_INJURY, InjuryLocation.TORSO)
        assert state.active_injuries() == [
            ConditionType.CRITICAL_INJURY,
            ConditionType.MINOR_INJURY,
        ]


class TestInjuryTreatment:
    """Tests for treating injuries."""

    def test_partial_treatment(self):
        state = ConditionState()
        state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.LIMB)
        state.injury_data[ConditionType.SERIOUS_INJURY].injury_days_since_rest = 2

        remaining = state.treat_injury(ConditionType.SERIOUS_INJURY, 1)

        assert remaining == 3
        data = state.injury_data[ConditionType.SERIOUS_INJURY]
        assert data.injury_hp == 3
        assert data.injury_days_since_rest == 0

    def test_treatment_closes_injury(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        assert state.treat_injury(ConditionType.MINOR_INJURY, 5) == 0
        assert not state.is_active(ConditionType.MINOR_INJURY)
        assert ConditionType.MINOR_INJURY not in state.injury_data

    def test_treating_inactive_injury(self):
        assert ConditionState().treat_injury(ConditionType.MINOR_INJURY, 1) == 0


class TestInfection:
    """Tests for the untreated-injury infection trigger."""

    def test_infection_after_threshold(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        now = datetime(2024, 1, 1, tzinfo=UTC)

        results = [
            state.advance_untreated_day(ConditionType.MINOR_INJURY, now)
            for _ in range(INFECTION_THRESHOLD_DAYS)
        ]

        assert results == [False, False, True]
        assert state.is_active(ConditionType.INFECTION)
        assert state.injury_data[ConditionType.INFECTION].injury_hp == 0

    def test_infection_does_not_retrigger(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        for _ in range(3):
            state.advance_untreated_day(ConditionType.MINOR_INJURY)
        infected_at = state.injury_data[ConditionType.INFECTION].date_acquired

        assert not state.advance_untreated_day(ConditionType.MINOR_INJURY)
        assert state.injury_data[ConditionType.MINOR_INJURY].injury_days_since_rest == 4
        assert state.injury_data[ConditionType.INFECTION].date_acquired == infected_at

    def test_other_injuries_not_reset(self):
        state = ConditionState()
        state.activate_injury(ConditionType.MINOR_INJURY)
        state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.LIMB)
        state.advance_untreated_day(ConditionType.SERIOUS_INJURY)
        for _ in range(3):
            state.advance_untreated_day(ConditionType.MINOR_INJURY)

        assert state.injury_data[ConditionType.SERIOUS_INJURY].injury_days_since_rest == 1

    def test_inactive_injury_not_advanced(self):
        assert not ConditionState().advance_untreated_day(ConditionType.MINOR_INJURY)


# --- Injury Thresholds ---


class TestInjuryThresholds:
    """Tests for the damage-threshold advisory."""

    def test_small_hit(self):
        assert injury_prompt_for_damage(9) is None

    def test_minor_band(self):
        prompt = injury_prompt_for_damage(10)
        assert prompt is not None
        assert prompt.forced_tier == ConditionType.MINOR_INJURY
        assert not prompt.requires_roll
        assert injury_prompt_for_damage(19).forced_tier == ConditionType.MINOR_INJURY

    def test_roll_band(self):
        prompt = injury_prompt_for_damage(20)
        assert prompt.requires_roll
        assert prompt.forced_tier is None

    def test_roll_mapping(self):
        assert injury_from_roll(1) == ConditionType.MINOR_INJURY
        assert injury_from_roll(3) == ConditionType.MINOR_INJURY
        assert injury_from_roll(4) == ConditionType.SERIOUS_INJURY
        assert injury_from_roll(5) == ConditionType.SERIOUS_INJURY
        assert injury_from_roll(6) == ConditionType.CRITICAL_INJURY

    def test_default_target_is_most_severe(self):
        state = ConditionState()
        assert default_injury_target(state) is None
        state.activate_injury(ConditionType.MINOR_INJURY)
        state.activate_injury(ConditionType.SERIOUS_INJURY, InjuryLocation.TORSO)
        assert default_injury_target(state) == ConditionType.SERIOUS_INJURY

"""Tests for hit point editing."""

from __future__ import annotations

from companion.models.character import create_character
from companion.models.condition import ConditionType
from companion.skills.hit_points import apply_damage, heal, set_current_hp


def _stats(max_hp: int = 30, max_exhaustion: int = 10):
    return create_character(max_hp=max_hp, max_exhaustion=max_exhaustion).character_stats


class TestSetCurrentHp:
    """Tests for direct HP edits."""

    def test_clamped_to_range(self):
        stats = _stats()
        assert set_current_hp(stats, 50).new_hp == 30
        assert set_current_hp(stats, -5).new_hp == 0

    def test_drop_to_zero_adds_exhaustion(self):
        stats = _stats()
        result = set_current_hp(stats, 0)
        assert result.exhaustion_gained == 1
        assert stats.exhaustion.current_level == 1

    def test_staying_at_zero_adds_nothing(self):
        stats = _stats()
        set_current_hp(stats, 0)
        result = set_current_hp(stats, 0)
        assert result.exhaustion_gained == 0
        assert stats.exhaustion.current_level == 1

    def test_exhaustion_capped(self):
        stats = _stats(max_exhaustion=1)
        stats.exhaustion.current_level = 1
        result = set_current_hp(stats, 0)
        assert result.exhaustion_gained == 0
        assert stats.exhaustion.current_level == 1

    def test_injury_advisory(self):
        stats = _stats()
        assert set_current_hp(stats, 25).injury_prompt is None

        result = set_current_hp(stats, 13)
        assert result.damage_taken == 12
        assert result.injury_prompt.forced_tier == ConditionType.MINOR_INJURY

    def test_healing_has_no_advisory(self):
        stats = _stats()
        stats.current_hp = 5
        result = set_current_hp(stats, 30)
        assert result.damage_taken == 0
        assert result.injury_prompt is None


class TestDamageAndHealing:
    """Tests for damage and healing helpers."""

    def test_temp_hp_absorbs_first(self):
        stats = _stats()
        stats.temp_hp = 5
        result = apply_damage(stats, 8)
        assert result.temp_hp_absorbed == 5
        assert stats.temp_hp == 0
        assert stats.current_hp == 27

    def test_temp_hp_absorbs_all(self):
        stats = _stats()
        stats.temp_hp = 10
        result = apply_damage(stats, 4)
        assert stats.temp_hp == 6
        assert stats.current_hp == 30
        assert result.damage_taken == 0

    def test_big_hit_needs_roll(self):
        stats = _stats(max_hp=40)
        result = apply_damage(stats, 25)
        assert result.injury_prompt.requires_roll

    def test_heal_capped(self):
        stats = _stats()
        stats.current_hp = 25
        assert heal(stats, 10) == 5
        assert stats.current_hp == 30

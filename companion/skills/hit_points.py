"""
Hit Point Editing Skills.

Every HP edit goes through here so the exhaustion side-channel and the
injury-threshold advisory are applied consistently.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from companion.models.character import CharacterStats
from companion.skills.exhaustion import adjust, exhaustion_from_hp_change
from companion.skills.injuries import InjuryPrompt, injury_prompt_for_damage


class HpChangeResult(BaseModel):
    """Result of editing a character's hit points."""

    old_hp: int
    new_hp: int
    damage_taken: int = Field(default=0, description="HP lost by this edit (after temp HP)")
    temp_hp_absorbed: int = 0
    exhaustion_gained: int = 0
    exhaustion_level: int
    injury_prompt: InjuryPrompt | None = None


def set_current_hp(stats: CharacterStats, new_hp: int) -> HpChangeResult:
    """
    Set current HP directly, as the sheet's HP field does.

    HP is clamped to [0, max_hp]. Dropping from above 0 to exactly 0 adds
    one exhaustion level (capped at the track maximum).
    """
    old_hp = stats.current_hp
    clamped = max(0, min(new_hp, stats.max_hp))
    stats.current_hp = clamped

    gained = exhaustion_from_hp_change(old_hp, clamped)
    if gained:
        before = stats.exhaustion.current_level
        adjust(stats.exhaustion, gained)
        gained = stats.exhaustion.current_level - before

    damage = max(0, old_hp - clamped)
    return HpChangeResult(
        old_hp=old_hp,
        new_hp=clamped,
        damage_taken=damage,
        exhaustion_gained=gained,
        exhaustion_level=stats.exhaustion.current_level,
        injury_prompt=injury_prompt_for_damage(damage),
    )


def apply_damage(stats: CharacterStats, amount: int) -> HpChangeResult:
    """
    Take damage from a single hit, consuming temp HP first.

    The injury advisory is judged on the HP actually lost.
    """
    absorbed = min(stats.temp_hp, max(0, amount))
    stats.temp_hp -= absorbed
    remaining = max(0, amount) - absorbed

    result = set_current_hp(stats, stats.current_hp - remaining)
    result.temp_hp_absorbed = absorbed
    return result


def heal(stats: CharacterStats, amount: int) -> int:
    """
    Heal HP up to maximum.

    Returns actual HP healed.
    """
    space = stats.max_hp - stats.current_hp
    actual = max(0, min(amount, space))
    stats.current_hp += actual
    return actual

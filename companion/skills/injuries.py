"""
Injury Skills.

Damage-threshold policy and healing-target selection for the injury track.
The state machine itself lives on ConditionState.
"""

from __future__ import annotations

from pydantic import BaseModel

from companion.models.condition import INJURY_TIERS, ConditionState, ConditionType

MINOR_INJURY_DAMAGE = 10
ROLLED_INJURY_DAMAGE = 20


class InjuryPrompt(BaseModel):
    """Advisory raised after a single hit, for the UI to act on."""

    damage: int
    forced_tier: ConditionType | None = None
    requires_roll: bool = False


def injury_prompt_for_damage(damage: int) -> InjuryPrompt | None:
    """
    Classify a single hit against the injury thresholds.

    10-19 damage forces a minor injury notice. 20+ asks for a d6 roll,
    resolved with injury_from_roll. Smaller hits return None.
    """
    if damage >= ROLLED_INJURY_DAMAGE:
        return InjuryPrompt(damage=damage, requires_roll=True)
    if damage >= MINOR_INJURY_DAMAGE:
        return InjuryPrompt(damage=damage, forced_tier=ConditionType.MINOR_INJURY)
    return None


def injury_from_roll(d6_roll: int) -> ConditionType:
    """
    Map the d6 rolled for a 20+ damage hit to an injury tier.

    1-3 minor, 4-5 serious (needs a location), 6 critical (needs a location).
    """
    if d6_roll >= 6:
        return ConditionType.CRITICAL_INJURY
    if d6_roll >= 4:
        return ConditionType.SERIOUS_INJURY
    return ConditionType.MINOR_INJURY


def default_injury_target(conditions: ConditionState) -> ConditionType | None:
    """Most severe active injury, used to pre-select the healing target."""
    for tier in INJURY_TIERS:
        if conditions.is_active(tier):
            return tier
    return None

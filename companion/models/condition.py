"""
Condition, Injury and Exhaustion Models for the companion.

Tracks status-condition flags, per-injury healing trackers and the
exhaustion level of a character.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


# =============================================================================
# Condition Types
# =============================================================================


class ConditionType(str, Enum):
    """Standard SRD 5e conditions plus the injury track."""

    # SRD 5e Conditions
    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"

    # Injury Conditions
    MINOR_INJURY = "minorInjury"
    SERIOUS_INJURY = "seriousInjury"
    CRITICAL_INJURY = "criticalInjury"
    INFECTION = "infection"


class InjuryLocation(str, Enum):
    """Body location of a serious or critical injury."""

    LIMB = "limb"
    TORSO = "torso"
    HEAD = "head"


# Healing priority, most severe first
INJURY_TIERS: tuple[ConditionType, ...] = (
    ConditionType.CRITICAL_INJURY,
    ConditionType.SERIOUS_INJURY,
    ConditionType.MINOR_INJURY,
)

INJURY_STARTING_HP: dict[ConditionType, int] = {
    ConditionType.MINOR_INJURY: 2,
    ConditionType.SERIOUS_INJURY: 4,
    ConditionType.CRITICAL_INJURY: 6,
}

# Tiers that cannot be activated without a body location
LOCATED_TIERS = frozenset({ConditionType.SERIOUS_INJURY, ConditionType.CRITICAL_INJURY})

INFECTION_THRESHOLD_DAYS = 3


# =============================================================================
# Condition Reference Table
# =============================================================================


class ConditionDefinition(BaseModel):
    """Display name and rules text for a condition."""

    id: ConditionType
    name: str
    description: str
    is_injury: bool = False


CONDITIONS: list[ConditionDefinition] = [
    ConditionDefinition(
        id=ConditionType.BLINDED,
        name="Blinded",
        description=(
            "You automatically fail any ability check that requires sight. "
            "ATK against you have ADV; yours have DIS."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.CHARMED,
        name="Charmed",
        description="You can't harm the charmer, and the charmer has ADV on ability checks with you.",
    ),
    ConditionDefinition(
        id=ConditionType.DEAFENED,
        name="Deafened",
        description="You automatically fail any ability check that requires hearing.",
    ),
    ConditionDefinition(
        id=ConditionType.FRIGHTENED,
        name="Frightened",
        description="When the source can be seen, you have DIS on all checks & ATK.",
    ),
    ConditionDefinition(
        id=ConditionType.GRAPPLED,
        name="Grappled",
        description=(
            "Your speed is 0, and you have DIS on attack rolls against all but the grappler. "
            "The grappler can drag/carry you with half movement unless you are tiny "
            "or 2+ sizes smaller."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.INCAPACITATED,
        name="Incapacitated",
        description="You are inactive. You have no concentration. DIS on initiative.",
    ),
    ConditionDefinition(
        id=ConditionType.INVISIBLE,
        name="Invisible",
        description=(
            "ADV on initiative. ATK rolls have ADV. ATKs against you have DIS, "
            "unless the attacker can somehow see you."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.PARALYZED,
        name="Paralyzed",
        description=(
            "Your speed is 0. You fail all STR & DEX saves. ATKS against you have ADV "
            "and are CRIT if the attacker is within 5 feet of you."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.PETRIFIED,
        name="Petrified",
        description=(
            "You and all of your current belongings become a solid inanimate substance. "
            "Your weight increases 10x, and you cease aging."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.POISONED,
        name="Poisoned",
        description="You have DIS on ATK and ability checks.",
    ),
    ConditionDefinition(
        id=ConditionType.PRONE,
        name="Prone",
        description=(
            "You may crawl (half speed) or stand for half total speed. If your speed is 0, "
            "you cannot right yourself. You have DIS on ATK, and ATK against you has ADV "
            "if within 5 feet of you. Otherwise, that ATK has DIS."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.RESTRAINED,
        name="Restrained",
        description="Speed is 0. ATK against you have ADV, your ATK have DIS. DIS on DEX saves.",
    ),
    ConditionDefinition(
        id=ConditionType.STUNNED,
        name="Stunned",
        description="You are incapacitated and fail STR & DEX saves. ATK against you have ADV.",
    ),
    ConditionDefinition(
        id=ConditionType.UNCONSCIOUS,
        name="Unconscious",
        description=(
            "You drop everything and go prone. ATK against you have ADV. "
            "If within 5 feet, ATK against you are CRIT. You fail STR & DEX saves."
        ),
    ),
    ConditionDefinition(
        id=ConditionType.MINOR_INJURY,
        name="Minor Injury",
        description=(
            "Temporary cosmetic damage only (no mechanical penalty). "
            "Triggered when HP decreases by 10+ in one hit."
        ),
        is_injury=True,
    ),
    ConditionDefinition(
        id=ConditionType.SERIOUS_INJURY,
        name="Serious Injury",
        description=(
            "Leaves a permanent scar. Effects vary by location: Limb (DIS on STR & DEX rolls), "
            "Torso (DIS on STR & CON rolls), Head (DIS on CON, WIS & INT rolls). "
            "Triggered by rolling 4-5 on d6 when taking 20+ damage."
        ),
        is_injury=True,
    ),
    ConditionDefinition(
        id=ConditionType.CRITICAL_INJURY,
        name="Critical Injury",
        description=(
            "Large permanent scar with location effects (same as Serious Injury). "
            "Additionally: DIS on ALL attack rolls, DIS on Death Saves, HP maximum cut by 25%. "
            "Triggered by rolling 6 on d6 when taking 20+ damage."
        ),
        is_injury=True,
    ),
    ConditionDefinition(
        id=ConditionType.INFECTION,
        name="Infection",
        description=(
            "If any injury goes 3 long rests without treatment, add this condition. "
            "Each long rest with the injury, roll a Death Save. 3 failed saves = death. "
            "DC 15 Medicine check can override a failed save. Cured by 3 DC 15 Medicine "
            "checks, 3 passed death saves, or professional medical treatment."
        ),
        is_injury=True,
    ),
]


def get_condition_definition(condition_type: ConditionType) -> ConditionDefinition | None:
    """Look up the reference entry for a condition."""
    for definition in CONDITIONS:
        if definition.id == condition_type:
            return definition
    return None


# =============================================================================
# Injury Tracking
# =============================================================================


class InjuryConditionData(BaseModel):
    """Healing tracker for one active injury tier (or infection)."""

    injury_location: InjuryLocation | None = Field(default=None)
    injury_hp: int = Field(ge=0, description="Treatment points left before the injury closes")
    injury_days_since_rest: int = Field(
        default=0, ge=0, description="Long rests since the injury was last treated"
    )
    date_acquired: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ConditionState(BaseModel):
    """
    Condition flags and injury trackers for one character.

    Holds exactly one boolean per ConditionType. Injury tiers are singletons:
    a second activation of an active tier is ignored.
    """

    flags: dict[ConditionType, bool] = Field(default_factory=dict)
    injury_data: dict[ConditionType, InjuryConditionData] = Field(default_factory=dict)

    @model_validator(mode="after")
    def fill_missing_flags(self) -> ConditionState:
        for condition_type in ConditionType:
            self.flags.setdefault(condition_type, False)
        return self

    def is_active(self, condition_type: ConditionType) -> bool:
        return self.flags.get(condition_type, False)

    def active_conditions(self) -> list[ConditionType]:
        """Active conditions in declaration order."""
        return [c for c in ConditionType if self.flags.get(c, False)]

    def count_active(self) -> int:
        return sum(1 for active in self.flags.values() if active)

    def active_injuries(self) -> list[ConditionType]:
        """Active injury tiers, most severe first (infection excluded)."""
        return [tier for tier in INJURY_TIERS if self.is_active(tier)]

    def set_condition(self, condition_type: ConditionType, active: bool) -> None:
        """
        Toggle a condition flag.

        Injury tiers and infection go through activate/deactivate so their
        trackers stay in step with the flag.
        """
        if condition_type in INJURY_STARTING_HP or condition_type == ConditionType.INFECTION:
            if active:
                self.activate_injury(condition_type)
            else:
                self.deactivate_injury(condition_type)
            return
        self.flags[condition_type] = active

    def activate_injury(
        self,
        tier: ConditionType,
        location: InjuryLocation | None = None,
        now: datetime | None = None,
    ) -> bool:
        """
        Activate an injury tier (or infection).

        Returns:
            True if the injury was activated, False if it was already active
            or a required location was missing.
        """
        if self.is_active(tier):
            logger.debug("Ignoring duplicate activation of %s", tier.value)
            return False
        if tier in LOCATED_TIERS and location is None:
            logger.debug("Refusing to activate %s without a location", tier.value)
            return False

        self.flags[tier] = True
        self.injury_data[tier] = InjuryConditionData(
            injury_location=location,
            injury_hp=INJURY_STARTING_HP.get(tier, 0),
            injury_days_since_rest=0,
            date_acquired=now or datetime.now(UTC),
        )
        return True

    def deactivate_injury(self, tier: ConditionType) -> None:
        """Clear the flag and drop the tracker."""
        self.flags[tier] = False
        self.injury_data.pop(tier, None)

    def treat_injury(self, tier: ConditionType, heal_amount: int) -> int:
        """
        Apply treatment to an active injury.

        Returns:
            Remaining injury HP (0 means the injury closed and was removed).
        """
        data = self.injury_data.get(tier)
        if not self.is_active(tier) or data is None:
            return 0

        new_hp = max(0, data.injury_hp - heal_amount)
        if new_hp == 0:
            self.deactivate_injury(tier)
            return 0

        data.injury_hp = new_hp
        data.injury_days_since_rest = 0
        return new_hp

    def advance_untreated_day(self, tier: ConditionType, now: datetime | None = None) -> bool:
        """
        Count one untreated long rest against an active injury.

        Returns:
            True if this call activated the infection condition.
        """
        data = self.injury_data.get(tier)
        if not self.is_active(tier) or data is None:
            return False

        data.injury_days_since_rest += 1
        if (
            data.injury_days_since_rest >= INFECTION_THRESHOLD_DAYS
            and not self.is_active(ConditionType.INFECTION)
        ):
            return self.activate_injury(ConditionType.INFECTION, now=now)
        return False


# =============================================================================
# Exhaustion
# =============================================================================


DEFAULT_EXHAUSTION_EFFECTS: tuple[str, ...] = (
    "No effect",
    "Disadvantage on ability checks",
    "Speed halved",
    "Disadvantage on attack rolls and saving throws",
    "Hit point maximum halved",
    "Speed reduced to 0",
    "Death",
)


class ExhaustionState(BaseModel):
    """Bounded exhaustion track with optional GM-defined effect text."""

    current_level: int = Field(default=0, ge=0)
    max_levels: int = Field(default=10, ge=1)
    custom_effects: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def level_within_max(self) -> ExhaustionState:
        if self.current_level > self.max_levels:
            self.current_level = self.max_levels
        return self


def create_condition_state(active: list[ConditionType] | None = None) -> ConditionState:
    """
    Factory function to create a condition state.

    Args:
        active: Non-injury conditions to start active

    Returns:
        ConditionState with every flag present
    """
    state = ConditionState()
    for condition_type in active or []:
        state.set_condition(condition_type, True)
    return state

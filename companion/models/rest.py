"""
Rest Models for the companion.

Defines rest options and their effects, lodging, and the per-character
rest history including the wilderness streak.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Rest Types and Lodging
# =============================================================================


class RestType(str, Enum):
    """Length of a rest."""

    SHORT = "short"
    LONG = "long"


class RestLocation(str, Enum):
    """Where a long rest is taken."""

    WILDERNESS = "wilderness"
    SETTLEMENT = "settlement"


class RoomType(str, Enum):
    """Lodging quality for a settlement long rest."""

    FREE = "free"
    BASIC = "basic"
    QUALITY = "quality"
    LUXURY = "luxury"


class RoomOption(BaseModel):
    """Price and exhaustion relief of a lodging tier."""

    room_type: RoomType
    cost_gp: int = Field(ge=0)
    exhaustion_reduction: int = Field(ge=0)


# The table skips a reduction of 4 between quality and luxury
ROOM_OPTIONS: dict[RoomType, RoomOption] = {
    RoomType.FREE: RoomOption(room_type=RoomType.FREE, cost_gp=0, exhaustion_reduction=1),
    RoomType.BASIC: RoomOption(room_type=RoomType.BASIC, cost_gp=1, exhaustion_reduction=2),
    RoomType.QUALITY: RoomOption(room_type=RoomType.QUALITY, cost_gp=3, exhaustion_reduction=3),
    RoomType.LUXURY: RoomOption(room_type=RoomType.LUXURY, cost_gp=6, exhaustion_reduction=5),
}

SELECTION_LIMITS: dict[RestType, int] = {
    RestType.SHORT: 1,
    RestType.LONG: 2,
}

WILDERNESS_STREAK_LIMIT = 7
WILDERNESS_EXHAUSTION_REDUCTION = 1


# =============================================================================
# Rest Option Effects
# =============================================================================


class TempHpEffect(BaseModel):
    """
    Temporary hit points, optionally paid for with rations.

    With ration_cost set the option eats that many rations. With ration_prompt
    the player picks how many rations to eat. Either way the temp HP granted
    is value x rations eaten.
    """

    kind: Literal["temp_hp"] = "temp_hp"
    value: int = Field(ge=0)
    ration_cost: int | None = Field(default=None, ge=1)
    ration_prompt: bool = False


class HeroicInspirationEffect(BaseModel):
    """Grants heroic inspiration."""

    kind: Literal["heroic_inspiration"] = "heroic_inspiration"


class HealInjuryEffect(BaseModel):
    """Treats the designated injury by a number of injury HP."""

    kind: Literal["heal_injury"] = "heal_injury"
    levels: int = Field(default=1, ge=1)


class WorkOnProjectEffect(BaseModel):
    """Adds work units to a downtime project."""

    kind: Literal["work_on_project"] = "work_on_project"
    work_units: int = Field(ge=1)
    race_bonus: dict[str, int] = Field(
        default_factory=dict, description="Race -> work units replacing the base amount"
    )

    def units_for(self, race: str | None) -> int:
        if race is not None and race in self.race_bonus:
            return self.race_bonus[race]
        return self.work_units


RestEffect = Annotated[
    TempHpEffect | HeroicInspirationEffect | HealInjuryEffect | WorkOnProjectEffect,
    Field(discriminator="kind"),
]


# =============================================================================
# Rest Options
# =============================================================================


class RestOptionCategory(str, Enum):
    """How an option becomes available."""

    STANDARD = "standard"  # Auto-applied, never selected
    GENERAL = "general"  # Selectable by every character
    RACE = "race"
    CLASS = "class"
    CUSTOM = "custom"  # GM-defined


class RestOption(BaseModel):
    """A catalog entry describing one rest benefit."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    category: RestOptionCategory
    rest_type: RestType
    race_restriction: str | None = None
    class_restriction: str | None = None
    effect: RestEffect | None = None

    @property
    def is_selectable(self) -> bool:
        return self.category != RestOptionCategory.STANDARD


# =============================================================================
# Rest History
# =============================================================================


class RestRecord(BaseModel):
    """What happened on the most recent rest of one type."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    chosen_option_ids: list[str] = Field(default_factory=list)
    location: RestLocation | None = None
    room_type: RoomType | None = None


class RestHistory(BaseModel):
    """Rest bookkeeping for one character."""

    last_short_rest: RestRecord | None = None
    last_long_rest: RestRecord | None = None
    heroic_inspiration_gained_today: bool = False
    consecutive_wilderness_rests: int = Field(default=0, ge=0)
    wilderness_exhaustion_blocked: bool = False

    def last_rest(self, rest_type: RestType) -> RestRecord | None:
        if rest_type == RestType.SHORT:
            return self.last_short_rest
        return self.last_long_rest

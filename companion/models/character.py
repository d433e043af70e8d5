"""
Character Data Models for the companion.

CharacterData is the unit of read/write for a token: inventory, purse,
merchant shop and the character sheet stats.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from companion.models.condition import ConditionState, ExhaustionState
from companion.models.currency import Currency
from companion.models.resources import HitDice, SuperiorityDice
from companion.models.rest import RestHistory

# =============================================================================
# Items
# =============================================================================


class PackType(str, Enum):
    """Backpack archetype, which sets carrying capacity and slots."""

    NPC = "NPC"
    SIMPLE = "Simple"
    STANDARD = "Standard"
    WARRIOR = "Warrior"
    EXPLORER = "Explorer"
    TINKERER = "Tinkerer"
    TRAVEL = "Travel"
    SHADOW = "Shadow"
    MULE = "Mule"
    UTILITY = "Utility"


EquippedSlot = Literal["weapon", "armor", "clothing", "jewelry", "utility"]


class Item(BaseModel):
    """
    An inventory stack.

    The value is free text such as "10 gp" and is parsed on demand.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    qty: int = Field(default=1, ge=0)
    value: str = Field(default="", description="Price per unit, e.g. '10 gp'")
    weight: float = Field(default=0.0, ge=0)
    category: str = "Other"
    type: str = ""
    notes: str = ""
    equipped_slot: EquippedSlot | None = None
    requires_attunement: bool = False
    is_attuned: bool = False
    charges: int | None = None
    max_charges: int | None = None


class MerchantItem(Item):
    """A shop listing. sell_price overrides the item value when set."""

    sell_price: str | None = None

    @property
    def listed_price(self) -> str:
        return self.sell_price or self.value


class MerchantShop(BaseModel):
    """Stock and pricing rules of a merchant token."""

    buyback_rate: float = Field(default=0.8, gt=0, le=1)
    items: list[MerchantItem] = Field(default_factory=list)


# =============================================================================
# Projects
# =============================================================================


class Project(BaseModel):
    """A downtime project advanced by resting."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    total_work_units: int = Field(ge=1)
    completed_work_units: int = Field(default=0, ge=0)
    is_completed: bool = False

    @model_validator(mode="after")
    def sync_completion(self) -> Project:
        if self.completed_work_units >= self.total_work_units:
            self.completed_work_units = self.total_work_units
            self.is_completed = True
        return self

    def add_work(self, units: int) -> int:
        """
        Add work units, capped at the project total.

        Returns the units actually added.
        """
        space = self.total_work_units - self.completed_work_units
        actual = max(0, min(units, space))
        self.completed_work_units += actual
        if self.completed_work_units >= self.total_work_units:
            self.is_completed = True
        return actual


# =============================================================================
# Character
# =============================================================================


class CharacterStats(BaseModel):
    """The character sheet block of CharacterData."""

    race: str = "Human"
    character_class: str = "Fighter"
    secondary_race: str | None = None
    secondary_class: str | None = None
    level: int = Field(default=1, ge=1)
    current_hp: int = Field(default=0, ge=0)
    max_hp: int = Field(default=0, ge=0)
    temp_hp: int = Field(default=0, ge=0)
    armor_class: int = 10
    heroic_inspiration: bool = False
    conditions: ConditionState = Field(default_factory=ConditionState)
    exhaustion: ExhaustionState = Field(default_factory=ExhaustionState)
    rest_history: RestHistory = Field(default_factory=RestHistory)
    hit_dice: HitDice | None = None
    superiority_dice: SuperiorityDice | None = None
    projects: list[Project] = Field(default_factory=list)

    @model_validator(mode="after")
    def hp_not_exceeds_max(self) -> CharacterStats:
        if self.current_hp > self.max_hp:
            self.current_hp = self.max_hp
        return self

    def get_project(self, project_id: str) -> Project | None:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None


class CharacterData(BaseModel):
    """Everything stored on one token."""

    pack_type: PackType = PackType.STANDARD
    inventory: list[Item] = Field(default_factory=list)
    currency: Currency = Field(default_factory=Currency)
    favorites: list[str] = Field(default_factory=list)
    condition: str = Field(default="", description="Free-text condition note")
    claimed_by: str | None = Field(default=None, description="Player id owning this token")
    merchant_shop: MerchantShop | None = None
    character_stats: CharacterStats = Field(default_factory=CharacterStats)

    def get_item(self, item_id: str) -> Item | None:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None


def create_character(
    race: str = "Human",
    character_class: str = "Fighter",
    level: int = 1,
    max_hp: int = 10,
    hit_die: str = "d8",
    superiority_dice: int = 0,
    pack_type: PackType = PackType.STANDARD,
    inventory: list[Item] | None = None,
    currency: Currency | None = None,
    claimed_by: str | None = None,
    max_exhaustion: int = 10,
) -> CharacterData:
    """
    Factory function to create a fresh character at full health.

    Args:
        race: Primary race
        character_class: Primary class
        level: Character level (also the number of hit dice)
        max_hp: Hit point maximum
        hit_die: Hit die size
        superiority_dice: Size of the superiority dice pool (0 for none)
        pack_type: Backpack archetype
        inventory: Starting items
        currency: Starting purse
        claimed_by: Owning player id
        max_exhaustion: Number of exhaustion levels on the track

    Returns:
        Configured CharacterData
    """
    stats = CharacterStats(
        race=race,
        character_class=character_class,
        level=level,
        current_hp=max_hp,
        max_hp=max_hp,
        exhaustion=ExhaustionState(max_levels=max_exhaustion),
        hit_dice=HitDice(die_type=hit_die, maximum=level, current=level),
        superiority_dice=(
            SuperiorityDice(maximum=superiority_dice, current=superiority_dice)
            if superiority_dice
            else None
        ),
    )
    return CharacterData(
        pack_type=pack_type,
        inventory=inventory or [],
        currency=currency or Currency(),
        claimed_by=claimed_by,
        character_stats=stats,
    )

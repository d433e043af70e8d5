"""
Core Data Models for the tabletop companion.

These models define the character record shared through the host's
metadata store: inventory and purse, conditions and injuries, exhaustion,
rest history, and the shared trade record.
"""

from companion.models.character import (
    CharacterData,
    CharacterStats,
    Item,
    MerchantItem,
    MerchantShop,
    PackType,
    Project,
    create_character,
)
from companion.models.condition import (
    CONDITIONS,
    DEFAULT_EXHAUSTION_EFFECTS,
    INFECTION_THRESHOLD_DAYS,
    INJURY_STARTING_HP,
    INJURY_TIERS,
    ConditionDefinition,
    ConditionState,
    ConditionType,
    ExhaustionState,
    InjuryConditionData,
    InjuryLocation,
    create_condition_state,
    get_condition_definition,
)
from companion.models.currency import COPPER_RATES, Currency, CurrencyAmount, Denomination
from companion.models.resources import HitDice, SuperiorityDice
from companion.models.rest import (
    ROOM_OPTIONS,
    SELECTION_LIMITS,
    WILDERNESS_STREAK_LIMIT,
    HealInjuryEffect,
    HeroicInspirationEffect,
    RestEffect,
    RestHistory,
    RestLocation,
    RestOption,
    RestOptionCategory,
    RestRecord,
    RestType,
    RoomOption,
    RoomType,
    TempHpEffect,
    WorkOnProjectEffect,
)
from companion.models.trade import ActiveTrade, TradeParty, TradeStatus, create_trade

__all__ = [
    # Character
    "CharacterData",
    "CharacterStats",
    "Item",
    "MerchantItem",
    "MerchantShop",
    "PackType",
    "Project",
    "create_character",
    # Conditions
    "CONDITIONS",
    "DEFAULT_EXHAUSTION_EFFECTS",
    "INFECTION_THRESHOLD_DAYS",
    "INJURY_STARTING_HP",
    "INJURY_TIERS",
    "ConditionDefinition",
    "ConditionState",
    "ConditionType",
    "ExhaustionState",
    "InjuryConditionData",
    "InjuryLocation",
    "create_condition_state",
    "get_condition_definition",
    # Currency
    "COPPER_RATES",
    "Currency",
    "CurrencyAmount",
    "Denomination",
    # Resources
    "HitDice",
    "SuperiorityDice",
    # Rest
    "ROOM_OPTIONS",
    "SELECTION_LIMITS",
    "WILDERNESS_STREAK_LIMIT",
    "HealInjuryEffect",
    "HeroicInspirationEffect",
    "RestEffect",
    "RestHistory",
    "RestLocation",
    "RestOption",
    "RestOptionCategory",
    "RestRecord",
    "RestType",
    "RoomOption",
    "RoomType",
    "TempHpEffect",
    "WorkOnProjectEffect",
    # Trade
    "ActiveTrade",
    "TradeParty",
    "TradeStatus",
    "create_trade",
]

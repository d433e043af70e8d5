"""
Default Rest Option Catalog.

Static reference data for the rest system, grouped by rest type and
category. Tiefling, Goblin and Fairy race options and Druid, Paladin and
Monk class options are left for GM custom options.
"""

from __future__ import annotations

from companion.models.rest import (
    HealInjuryEffect,
    HeroicInspirationEffect,
    RestOption,
    RestOptionCategory,
    RestType,
    TempHpEffect,
    WorkOnProjectEffect,
)

PATCH_WOUNDS_SHORT_ID = "short-standard-patch-wounds"
PATCH_WOUNDS_LONG_ID = "long-standard-patch-wounds"
PREPARE_SNACK_ID = "short-general-prepare-snack"
HEARTY_MEAL_ID = "long-general-hearty-meal"
WORK_ON_PROJECT_SHORT_ID = "short-general-work-on-project"
WORK_ON_PROJECT_LONG_ID = "long-general-work-on-project"


def _option(
    option_id: str,
    name: str,
    description: str,
    category: RestOptionCategory,
    rest_type: RestType,
    **extra,
) -> RestOption:
    return RestOption(
        id=option_id,
        name=name,
        description=description,
        category=category,
        rest_type=rest_type,
        **extra,
    )


# =============================================================================
# Short Rest
# =============================================================================

SHORT_REST_STANDARD_OPTIONS: list[RestOption] = [
    _option(
        "short-standard-hit-dice",
        "Spend Hit Dice",
        "You can spend one or more Hit Dice to heal. Roll each die and add your "
        "Constitution modifier to regain hit points.",
        RestOptionCategory.STANDARD,
        RestType.SHORT,
    ),
    _option(
        "short-standard-recharge-abilities",
        "Recharge Abilities",
        "Some class features and abilities recharge after a short rest. "
        "Superiority dice are fully restored.",
        RestOptionCategory.STANDARD,
        RestType.SHORT,
    ),
    _option(
        "short-standard-attune-item",
        "Attune to Magic Item",
        "You can spend the short rest attuning to a magic item, focusing on it while "
        "maintaining physical contact.",
        RestOptionCategory.STANDARD,
        RestType.SHORT,
    ),
    _option(
        PATCH_WOUNDS_SHORT_ID,
        "Patch Wounds",
        "Clean and bind your worst injury, reducing its injury HP by 1.",
        RestOptionCategory.STANDARD,
        RestType.SHORT,
        effect=HealInjuryEffect(levels=1),
    ),
]

SHORT_REST_GENERAL_OPTIONS: list[RestOption] = [
    _option(
        PREPARE_SNACK_ID,
        "Prepare a Snack",
        "Eat 1 ration to gain 2 temporary hit points.",
        RestOptionCategory.GENERAL,
        RestType.SHORT,
        effect=TempHpEffect(value=2, ration_cost=1),
    ),
    _option(
        WORK_ON_PROJECT_SHORT_ID,
        "Work on Project",
        "Spend the rest on a downtime project, adding 1 work unit.",
        RestOptionCategory.GENERAL,
        RestType.SHORT,
        effect=WorkOnProjectEffect(work_units=1),
    ),
]

SHORT_REST_RACE_OPTIONS: list[RestOption] = [
    _option(
        "short-race-human-versatile",
        "Human Versatility",
        "Humans can spend a short rest practicing a skill, gaining advantage on the next "
        "check with that skill within 1 hour.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Human",
    ),
    _option(
        "short-race-elf-trance",
        "Elven Trance",
        "Elves only need 4 hours to complete a short rest, meditating in a trance-like "
        "state while remaining aware of surroundings.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Elf",
    ),
    _option(
        "short-race-dragonborn-breath-recovery",
        "Draconic Recovery",
        "Dragonborn can meditate on their draconic heritage to regain their breath "
        "weapon if expended.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Dragonborn",
    ),
    _option(
        "short-race-orc-aggressive-rest",
        "Aggressive Recovery",
        "Orcs can channel their aggressive nature during rest. Gain temporary HP equal to "
        "your Constitution modifier until your next rest.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Orc",
    ),
    _option(
        "short-race-halfling-second-breakfast",
        "Second Breakfast",
        "Halflings who eat a proper meal during a short rest regain an additional 1d4 HP "
        "when spending Hit Dice.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Halfling",
    ),
    _option(
        "short-race-dwarf-stonecunning-rest",
        "Dwarven Resilience",
        "Dwarves can spend the short rest tending to their equipment. Gain +1 AC against "
        "the next attack before your next rest.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Dwarf",
    ),
    _option(
        "short-race-mixed-adaptable",
        "Adaptable Heritage",
        "Mixed-race characters can choose one short rest benefit from either of their "
        "parent races.",
        RestOptionCategory.RACE,
        RestType.SHORT,
        race_restriction="Mixed",
    ),
]

SHORT_REST_CLASS_OPTIONS: list[RestOption] = [
    _option(
        "short-class-fighter-second-wind",
        "Second Wind",
        "Fighters regain Second Wind usage after a short rest. Use a bonus action to "
        "regain 1d10 + fighter level HP.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Fighter",
    ),
    _option(
        "short-class-fighter-action-surge",
        "Action Surge Recovery",
        "Fighters regain their Action Surge usage after a short rest.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Fighter",
    ),
    _option(
        "short-class-ranger-natural-recovery",
        "Natural Recovery",
        "Rangers can attune to their surroundings, gaining advantage on the next Survival "
        "or Nature check within 1 hour.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Ranger",
    ),
    _option(
        "short-class-bard-song-of-rest",
        "Song of Rest",
        "Bards can use soothing music during a short rest. Allies who spend Hit Dice "
        "regain extra HP: 1d6 (level 2+), 1d8 (level 9+), 1d10 (level 13+), "
        "1d12 (level 17+).",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Bard",
    ),
    _option(
        "short-class-wizard-arcane-recovery",
        "Arcane Recovery",
        "Wizards can recover spell slots during a short rest. Recover slots with combined "
        "level equal to half wizard level (rounded up). Once per long rest.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Wizard",
    ),
    _option(
        "short-class-warlock-pact-magic",
        "Pact Magic Recovery",
        "Warlocks regain all expended spell slots after a short rest.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Warlock",
    ),
    _option(
        "short-class-rogue-cunning-action-prep",
        "Cunning Preparation",
        "Rogues can spend a short rest studying their environment. Gain advantage on the "
        "next Stealth or Sleight of Hand check within 1 hour.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Rogue",
    ),
    _option(
        "short-class-barbarian-rage-recovery",
        "Primal Recovery",
        "Barbarians can meditate on their rage. If you have no rages remaining, regain one "
        "use of Rage after this short rest (once per long rest).",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Barbarian",
    ),
    _option(
        "short-class-cleric-channel-divinity",
        "Channel Divinity Recovery",
        "Clerics can pray during a short rest to regain one use of Channel Divinity.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Cleric",
    ),
    _option(
        "short-class-multiclass-versatile",
        "Multiclass Versatility",
        "Multiclass characters can choose short rest benefits from any of their classes.",
        RestOptionCategory.CLASS,
        RestType.SHORT,
        class_restriction="Multiclass",
    ),
]


# =============================================================================
# Long Rest
# =============================================================================

LONG_REST_STANDARD_OPTIONS: list[RestOption] = [
    _option(
        "long-standard-full-hp",
        "Full HP Recovery",
        "You regain all lost hit points at the end of a long rest.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
    ),
    _option(
        "long-standard-hit-dice-recovery",
        "Hit Dice Recovery",
        "You regain half of your spent Hit Dice, rounded up.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
    ),
    _option(
        "long-standard-spell-slots",
        "Spell Slot Recovery",
        "Spellcasters regain all expended spell slots at the end of a long rest.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
    ),
    _option(
        "long-standard-class-features",
        "Class Feature Recovery",
        "Most class features that have limited uses are restored after a long rest.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
    ),
    _option(
        "long-standard-exhaustion",
        "Reduce Exhaustion",
        "Resting in the wilderness reduces exhaustion by 1 (not after 7 wilderness rests "
        "in a row). Lodging in a settlement reduces it by the room's amount.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
    ),
    _option(
        "long-standard-heroic-inspiration",
        "Heroic Inspiration",
        "At the end of a long rest, if you do not have Heroic Inspiration, you gain it.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
        effect=HeroicInspirationEffect(),
    ),
    _option(
        PATCH_WOUNDS_LONG_ID,
        "Patch Wounds",
        "Properly treat your worst injury, reducing its injury HP by 2.",
        RestOptionCategory.STANDARD,
        RestType.LONG,
        effect=HealInjuryEffect(levels=2),
    ),
]

LONG_REST_GENERAL_OPTIONS: list[RestOption] = [
    _option(
        HEARTY_MEAL_ID,
        "Hearty Meal",
        "Eat as many rations as you like (at least 1), gaining 2 temporary hit points "
        "per ration.",
        RestOptionCategory.GENERAL,
        RestType.LONG,
        effect=TempHpEffect(value=2, ration_prompt=True),
    ),
    _option(
        WORK_ON_PROJECT_LONG_ID,
        "Work on Project",
        "Spend part of the rest on a downtime project, adding 2 work units "
        "(3 for Elves, who need less sleep).",
        RestOptionCategory.GENERAL,
        RestType.LONG,
        effect=WorkOnProjectEffect(work_units=2, race_bonus={"Elf": 3}),
    ),
]

LONG_REST_RACE_OPTIONS: list[RestOption] = [
    _option(
        "long-race-human-determined",
        "Human Determination",
        "Humans gain an extra Hit Die worth of temporary HP after a long rest that lasts "
        "until the next long rest.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Human",
    ),
    _option(
        "long-race-elf-trance",
        "Elven Trance (Long)",
        "Elves only need 4 hours to gain the benefits of a long rest, remaining "
        "semiconscious during this time.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Elf",
    ),
    _option(
        "long-race-dragonborn-draconic-might",
        "Draconic Might",
        "Dragonborn can channel their draconic ancestry. After a long rest, your breath "
        "weapon deals an extra die of damage on its next use.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Dragonborn",
    ),
    _option(
        "long-race-orc-relentless",
        "Relentless Endurance Refresh",
        "Orcs regain use of Relentless Endurance after a long rest, allowing them to drop "
        "to 1 HP instead of 0 once.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Orc",
    ),
    _option(
        "long-race-halfling-lucky-rest",
        "Halfling Luck Refresh",
        "Halflings feel particularly lucky after a good rest. Your Lucky trait allows you "
        "to reroll two 1s on your next ability check.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Halfling",
    ),
    _option(
        "long-race-dwarf-stout-constitution",
        "Dwarven Fortitude",
        "Dwarves recover particularly well. Regain all Hit Dice instead of half after a "
        "long rest.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Dwarf",
    ),
    _option(
        "long-race-mixed-dual-heritage",
        "Dual Heritage",
        "Mixed-race characters can choose one long rest benefit from either of their "
        "parent races.",
        RestOptionCategory.RACE,
        RestType.LONG,
        race_restriction="Mixed",
    ),
]

LONG_REST_CLASS_OPTIONS: list[RestOption] = [
    _option(
        "long-class-fighter-indomitable",
        "Indomitable Recovery",
        "Fighters regain all uses of Indomitable after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Fighter",
    ),
    _option(
        "long-class-ranger-prepared",
        "Ranger Preparation",
        "Rangers can spend part of the long rest preparing new spells. Choose your "
        "prepared spells from the ranger spell list.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Ranger",
    ),
    _option(
        "long-class-bard-inspiration",
        "Bardic Inspiration Recovery",
        "Bards regain all expended uses of Bardic Inspiration after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Bard",
    ),
    _option(
        "long-class-wizard-spell-preparation",
        "Spell Preparation",
        "Wizards can prepare a new set of spells during a long rest. Choose from your "
        "spellbook.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Wizard",
    ),
    _option(
        "long-class-warlock-mystic-arcanum",
        "Mystic Arcanum Recovery",
        "Warlocks regain uses of Mystic Arcanum spells after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Warlock",
    ),
    _option(
        "long-class-rogue-stroke-of-luck",
        "Stroke of Luck Recovery",
        "Rogues (level 20) regain use of Stroke of Luck after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Rogue",
    ),
    _option(
        "long-class-barbarian-rage-full",
        "Full Rage Recovery",
        "Barbarians regain all expended uses of Rage after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Barbarian",
    ),
    _option(
        "long-class-cleric-divine-intervention",
        "Divine Intervention Recovery",
        "Clerics regain use of Divine Intervention after a long rest (if successful on "
        "previous use, must wait 7 days).",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Cleric",
    ),
    _option(
        "long-class-multiclass-combined",
        "Multiclass Recovery",
        "Multiclass characters regain all class-specific resources from each of their "
        "classes after a long rest.",
        RestOptionCategory.CLASS,
        RestType.LONG,
        class_restriction="Multiclass",
    ),
]


# =============================================================================
# Combined
# =============================================================================

ALL_SHORT_REST_OPTIONS: list[RestOption] = [
    *SHORT_REST_STANDARD_OPTIONS,
    *SHORT_REST_GENERAL_OPTIONS,
    *SHORT_REST_RACE_OPTIONS,
    *SHORT_REST_CLASS_OPTIONS,
]

ALL_LONG_REST_OPTIONS: list[RestOption] = [
    *LONG_REST_STANDARD_OPTIONS,
    *LONG_REST_GENERAL_OPTIONS,
    *LONG_REST_RACE_OPTIONS,
    *LONG_REST_CLASS_OPTIONS,
]

ALL_REST_OPTIONS: list[RestOption] = [*ALL_SHORT_REST_OPTIONS, *ALL_LONG_REST_OPTIONS]

"""
Rest Option Catalog Skills.

Filters the static catalog by rest type and race/class eligibility, merging
in GM custom options and dropping GM-disabled ones.
"""

from __future__ import annotations

from collections.abc import Iterable

from companion.content.rest_options import (
    ALL_LONG_REST_OPTIONS,
    ALL_REST_OPTIONS,
    ALL_SHORT_REST_OPTIONS,
)
from companion.models.rest import RestOption, RestOptionCategory, RestType

MIXED_RACE = "Mixed"
MULTICLASS = "Multiclass"


def _catalog(rest_type: RestType) -> list[RestOption]:
    return ALL_SHORT_REST_OPTIONS if rest_type == RestType.SHORT else ALL_LONG_REST_OPTIONS


def standard_options(rest_type: RestType) -> list[RestOption]:
    """Auto-applied options for a rest type."""
    return [o for o in _catalog(rest_type) if o.category == RestOptionCategory.STANDARD]


def _race_matches(
    option: RestOption,
    race: str | None,
    secondary_race: str | None,
) -> bool:
    restriction = option.race_restriction
    if restriction is None:
        return False
    if race and restriction == race:
        return True
    if secondary_race and restriction == secondary_race:
        return True
    return race == MIXED_RACE and restriction == MIXED_RACE


def _class_matches(
    option: RestOption,
    character_class: str | None,
    secondary_class: str | None,
) -> bool:
    restriction = option.class_restriction
    if restriction is None:
        return False
    if character_class and restriction == character_class:
        return True
    if secondary_class and restriction == secondary_class:
        return True
    return character_class == MULTICLASS and restriction == MULTICLASS


def is_eligible(
    option: RestOption,
    race: str | None = None,
    character_class: str | None = None,
    secondary_race: str | None = None,
    secondary_class: str | None = None,
) -> bool:
    """Whether a character may see an option (rest type not checked)."""
    if option.category in (
        RestOptionCategory.STANDARD,
        RestOptionCategory.GENERAL,
        RestOptionCategory.CUSTOM,
    ):
        if option.race_restriction or option.class_restriction:
            return _race_matches(option, race, secondary_race) or _class_matches(
                option, character_class, secondary_class
            )
        return True
    if option.category == RestOptionCategory.RACE:
        return _race_matches(option, race, secondary_race)
    if option.category == RestOptionCategory.CLASS:
        return _class_matches(option, character_class, secondary_class)
    return False


def eligible_options(
    rest_type: RestType,
    race: str | None = None,
    character_class: str | None = None,
    secondary_race: str | None = None,
    secondary_class: str | None = None,
    custom_options: Iterable[RestOption] = (),
    disabled_option_ids: Iterable[str] = (),
) -> list[RestOption]:
    """
    Options a character can see for a rest, standard options included.

    Args:
        rest_type: Short or long
        race: Primary race; "Mixed" unlocks Mixed-restricted options
        character_class: Primary class; "Multiclass" unlocks Multiclass options
        secondary_race: Second parent race of a Mixed character
        secondary_class: Second class of a multiclass character
        custom_options: GM-defined options, filtered to this rest type
        disabled_option_ids: Options the GM has switched off

    Returns:
        Eligible options in catalog order, custom options last
    """
    disabled = set(disabled_option_ids)
    candidates = [
        *_catalog(rest_type),
        *(o for o in custom_options if o.rest_type == rest_type),
    ]
    return [
        option
        for option in candidates
        if option.id not in disabled
        and is_eligible(option, race, character_class, secondary_race, secondary_class)
    ]


def selectable_options(options: Iterable[RestOption]) -> list[RestOption]:
    """Drop the auto-applied options from a list."""
    return [o for o in options if o.is_selectable]


def get_rest_option(
    option_id: str,
    custom_options: Iterable[RestOption] = (),
) -> RestOption | None:
    """
    Look up any option by id, regardless of eligibility.

    Used to resolve remembered selections that may no longer be eligible.
    """
    for option in ALL_REST_OPTIONS:
        if option.id == option_id:
            return option
    for option in custom_options:
        if option.id == option_id:
            return option
    return None

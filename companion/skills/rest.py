"""
Rest Resolution Skills.

Turns a rest choice (rest type, selected options, location and lodging)
into a validated bundle of effects, then applies that bundle to a
character snapshot. Resolution is pure; application works on a copy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from companion.models.character import CharacterData, Project
from companion.models.condition import ConditionType
from companion.models.currency import COPPER_RATES, Currency, Denomination
from companion.models.resources import HitDice
from companion.models.rest import (
    ROOM_OPTIONS,
    SELECTION_LIMITS,
    WILDERNESS_EXHAUSTION_REDUCTION,
    WILDERNESS_STREAK_LIMIT,
    HealInjuryEffect,
    HeroicInspirationEffect,
    RestHistory,
    RestLocation,
    RestOption,
    RestRecord,
    RestType,
    RoomType,
    TempHpEffect,
    WorkOnProjectEffect,
)
from companion.skills.currency import deduct, total_copper
from companion.skills.exhaustion import adjust
from companion.skills.inventory import deduct_rations, total_rations
from companion.skills.rest_catalog import get_rest_option, is_eligible, standard_options

logger = logging.getLogger(__name__)


# =============================================================================
# Validation
# =============================================================================


class RestValidationReason(str, Enum):
    """Why a rest choice was rejected."""

    SELECTION_LIMIT_EXCEEDED = "selection_limit_exceeded"
    MISSING_REST_LOCATION = "missing_rest_location"
    MISSING_ROOM_TYPE = "missing_room_type"
    INVALID_RATION_CHOICE = "invalid_ration_choice"
    INSUFFICIENT_RATIONS = "insufficient_rations"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    MISSING_INJURY_SELECTION = "missing_injury_selection"
    INVALID_INJURY_SELECTION = "invalid_injury_selection"
    MISSING_PROJECT = "missing_project"


class RestValidationError(BaseModel):
    """A rejected rest choice. Nothing about the character changes."""

    reason: RestValidationReason
    message: str
    option_id: str | None = None


# =============================================================================
# Context and Effects
# =============================================================================


class RestContext(BaseModel):
    """
    Everything resolution needs to know about the resting character.

    Built from a character snapshot plus the player's answers to the rest
    dialog (location, room, ration counts, injury and project choices).
    """

    race: str | None = None
    character_class: str | None = None
    secondary_race: str | None = None
    secondary_class: str | None = None

    available_rations: int = Field(default=0, ge=0)
    ration_choices: dict[str, int] = Field(
        default_factory=dict, description="Option id -> rations the player chose to eat"
    )
    currency: Currency = Field(default_factory=Currency)
    hit_dice: HitDice | None = None
    exhaustion_level: int = Field(default=0, ge=0)
    rest_history: RestHistory = Field(default_factory=RestHistory)

    rest_location: RestLocation | None = None
    room_type: RoomType | None = None

    active_injuries: list[ConditionType] = Field(default_factory=list)
    injury_to_heal: ConditionType | None = None

    projects: list[Project] = Field(default_factory=list)
    project_id: str | None = None
    new_project: Project | None = None

    custom_options: list[RestOption] = Field(default_factory=list)
    disabled_option_ids: list[str] = Field(default_factory=list)


def build_rest_context(
    data: CharacterData,
    rest_location: RestLocation | None = None,
    room_type: RoomType | None = None,
    ration_choices: dict[str, int] | None = None,
    injury_to_heal: ConditionType | None = None,
    project_id: str | None = None,
    new_project: Project | None = None,
    custom_options: Iterable[RestOption] = (),
    disabled_option_ids: Iterable[str] = (),
) -> RestContext:
    """Snapshot the parts of a character that rest resolution reads."""
    stats = data.character_stats
    return RestContext(
        race=stats.race,
        character_class=stats.character_class,
        secondary_race=stats.secondary_race,
        secondary_class=stats.secondary_class,
        available_rations=total_rations(data.inventory),
        ration_choices=dict(ration_choices or {}),
        currency=data.currency.model_copy(),
        hit_dice=stats.hit_dice.model_copy() if stats.hit_dice else None,
        exhaustion_level=stats.exhaustion.current_level,
        rest_history=stats.rest_history.model_copy(deep=True),
        rest_location=rest_location,
        room_type=room_type,
        active_injuries=stats.conditions.active_injuries(),
        injury_to_heal=injury_to_heal,
        projects=[p.model_copy() for p in stats.projects],
        project_id=project_id,
        new_project=new_project,
        custom_options=list(custom_options),
        disabled_option_ids=list(disabled_option_ids),
    )


class InjuryHealing(BaseModel):
    """Treatment to apply to one injury tier."""

    tier: ConditionType
    amount: int = Field(ge=1)


class ProjectWork(BaseModel):
    """Work units to add to an existing or new project."""

    project_id: str | None = None
    new_project: Project | None = None
    work_units: int = Field(ge=1)


class RestEffectsToApply(BaseModel):
    """
    The validated outcome of a rest, ready to be applied.

    Resolution never mutates anything; every change a rest makes is listed
    here so it can be shown to the player before it is committed.
    """

    rest_type: RestType
    selected_option_ids: list[str] = Field(
        default_factory=list, description="Player choices, remembered for next time"
    )
    applied_option_ids: list[str] = Field(
        default_factory=list, description="Standard and selected options that took effect"
    )

    temp_hp: int = Field(default=0, ge=0)
    heroic_inspiration: bool = False
    restore_full_hp: bool = False
    hit_dice_to_recover: int = Field(default=0, ge=0)
    restore_superiority_dice: bool = True

    rations_to_deduct: int = Field(default=0, ge=0)
    lodging_cost_cp: int = Field(default=0, ge=0)

    injury_healing: InjuryHealing | None = None
    untreated_injuries: list[ConditionType] = Field(default_factory=list)
    project_work: ProjectWork | None = None

    rest_location: RestLocation | None = None
    room_type: RoomType | None = None
    exhaustion_reduction: int = Field(default=0, ge=0)
    streak_exhaustion: int = Field(default=0, ge=0)
    consecutive_wilderness_rests: int = Field(default=0, ge=0)
    wilderness_exhaustion_blocked: bool = False


# =============================================================================
# Selection
# =============================================================================


def selection_limit(rest_type: RestType) -> int:
    """How many options a player may pick: 1 on a short rest, 2 on a long rest."""
    return SELECTION_LIMITS[rest_type]


def toggle_selection(
    selected: Iterable[str],
    option_id: str,
    rest_type: RestType,
) -> list[str]:
    """
    Toggle an option in a selection.

    Deselecting always works. Selecting past the limit is a no-op and the
    selection comes back unchanged.
    """
    current = list(selected)
    if option_id in current:
        return [o for o in current if o != option_id]
    if len(current) >= selection_limit(rest_type):
        logger.debug("Selection full for %s rest, ignoring %s", rest_type.value, option_id)
        return current
    return [*current, option_id]


def recently_used_option_ids(history: RestHistory, rest_type: RestType) -> list[str]:
    """Options chosen on the last rest of this type."""
    record = history.last_rest(rest_type)
    return list(record.chosen_option_ids) if record else []


def default_selection(
    history: RestHistory,
    rest_type: RestType,
    eligible: Iterable[RestOption],
) -> list[str]:
    """
    Preselect last rest's choices that are still on offer.

    Choices no longer eligible are dropped and the result never exceeds
    the selection limit.
    """
    offered = {o.id for o in eligible if o.is_selectable}
    remembered = [o for o in recently_used_option_ids(history, rest_type) if o in offered]
    return remembered[: selection_limit(rest_type)]


# =============================================================================
# Resolution
# =============================================================================


def _selected_options(
    rest_type: RestType,
    selected_option_ids: Iterable[str],
    custom_options: list[RestOption],
) -> list[RestOption]:
    """
    Look up selected ids, dropping unknown, standard and wrong-type ids.

    Eligibility is not rechecked so that a remembered option still
    resolves after the character changes race or class.
    """
    seen: set[str] = set()
    options: list[RestOption] = []
    for option_id in selected_option_ids:
        if option_id in seen:
            continue
        seen.add(option_id)
        option = get_rest_option(option_id, custom_options)
        if option is None:
            logger.debug("Ignoring unknown rest option %s", option_id)
            continue
        if option.rest_type != rest_type or not option.is_selectable:
            continue
        options.append(option)
    return options


def _error(
    reason: RestValidationReason,
    message: str,
    option_id: str | None = None,
) -> RestValidationError:
    logger.debug("Rest rejected: %s (%s)", reason.value, message)
    return RestValidationError(reason=reason, message=message, option_id=option_id)


def resolve_rest(
    rest_type: RestType,
    selected_option_ids: Iterable[str],
    context: RestContext,
) -> RestEffectsToApply | RestValidationError:
    """
    Resolve a rest choice into the effects it would have.

    Args:
        rest_type: Short or long
        selected_option_ids: The player's picks (standard options are implied)
        context: Character snapshot and dialog answers

    Returns:
        RestEffectsToApply on success, or RestValidationError naming the
        first problem found

    Rules:
        - Standard options always apply; picks are limited to 1 (short) or 2 (long)
        - Long rests need a location; settlement rests need a room the purse covers
        - Wilderness long rests reduce exhaustion by 1 while unblocked; the rest
          that brings the streak to 7 also adds one level of exhaustion (applied
          after the reduction) and blocks reduction from then on
        - A settlement rest resets the wilderness streak
        - Long rests restore HP, half the missing hit dice, and superiority dice
    """
    selected = _selected_options(rest_type, selected_option_ids, context.custom_options)
    limit = selection_limit(rest_type)
    if len(selected) > limit:
        return _error(
            RestValidationReason.SELECTION_LIMIT_EXCEEDED,
            f"A {rest_type.value} rest allows {limit} option(s), got {len(selected)}",
        )

    is_long = rest_type == RestType.LONG
    room = None
    if is_long:
        if context.rest_location is None:
            return _error(RestValidationReason.MISSING_REST_LOCATION, "Choose where to rest")
        if context.rest_location == RestLocation.SETTLEMENT:
            if context.room_type is None:
                return _error(RestValidationReason.MISSING_ROOM_TYPE, "Choose a room")
            room = ROOM_OPTIONS[context.room_type]

    disabled = set(context.disabled_option_ids)
    standard = [
        o
        for o in standard_options(rest_type)
        if o.id not in disabled
        and is_eligible(
            o,
            context.race,
            context.character_class,
            context.secondary_race,
            context.secondary_class,
        )
    ]

    temp_hp = 0
    rations = 0
    heroic = False
    heal_levels = 0
    work_units = 0
    applied: list[str] = []

    for option in [*standard, *selected]:
        effect = option.effect
        applied.append(option.id)
        if effect is None:
            continue
        if isinstance(effect, TempHpEffect):
            eaten = effect.ration_cost
            if effect.ration_prompt:
                eaten = context.ration_choices.get(option.id)
                if eaten is None or eaten < 1:
                    return _error(
                        RestValidationReason.INVALID_RATION_CHOICE,
                        f"Choose how many rations to eat for {option.name}",
                        option.id,
                    )
            if eaten is None:
                temp_hp += effect.value
            else:
                temp_hp += effect.value * eaten
                rations += eaten
        elif isinstance(effect, HeroicInspirationEffect):
            if is_long or not context.rest_history.heroic_inspiration_gained_today:
                heroic = True
        elif isinstance(effect, HealInjuryEffect):
            heal_levels += effect.levels
        elif isinstance(effect, WorkOnProjectEffect):
            work_units += effect.units_for(context.race)
        else:
            raise TypeError(f"Unhandled rest effect: {type(effect).__name__}")

    if rations > context.available_rations:
        return _error(
            RestValidationReason.INSUFFICIENT_RATIONS,
            f"Need {rations} ration(s), have {context.available_rations}",
        )

    injury_healing = None
    if heal_levels and context.active_injuries:
        target = context.injury_to_heal
        if target is None:
            if len(context.active_injuries) > 1:
                return _error(
                    RestValidationReason.MISSING_INJURY_SELECTION,
                    "Choose which injury to treat",
                )
            target = context.active_injuries[0]
        elif target not in context.active_injuries:
            return _error(
                RestValidationReason.INVALID_INJURY_SELECTION,
                f"{target.value} is not an active injury",
            )
        injury_healing = InjuryHealing(tier=target, amount=heal_levels)

    project_work = None
    if work_units:
        if context.project_id is not None:
            if not any(p.id == context.project_id for p in context.projects):
                return _error(
                    RestValidationReason.MISSING_PROJECT,
                    f"No project with id {context.project_id}",
                )
            project_work = ProjectWork(project_id=context.project_id, work_units=work_units)
        elif context.new_project is not None:
            project_work = ProjectWork(new_project=context.new_project, work_units=work_units)
        else:
            return _error(RestValidationReason.MISSING_PROJECT, "Choose a project to work on")

    effects = RestEffectsToApply(
        rest_type=rest_type,
        selected_option_ids=[o.id for o in selected],
        applied_option_ids=applied,
        temp_hp=temp_hp,
        heroic_inspiration=heroic,
        rations_to_deduct=rations,
        injury_healing=injury_healing,
        project_work=project_work,
        consecutive_wilderness_rests=context.rest_history.consecutive_wilderness_rests,
        wilderness_exhaustion_blocked=context.rest_history.wilderness_exhaustion_blocked,
    )

    if not is_long:
        return effects

    effects.restore_full_hp = True
    effects.rest_location = context.rest_location
    if context.hit_dice is not None:
        effects.hit_dice_to_recover = context.hit_dice.long_rest_recovery()
    healed = injury_healing.tier if injury_healing else None
    effects.untreated_injuries = [t for t in context.active_injuries if t != healed]

    if room is not None:
        cost_cp = room.cost_gp * COPPER_RATES[Denomination.GP]
        if total_copper(context.currency) < cost_cp:
            return _error(
                RestValidationReason.INSUFFICIENT_FUNDS,
                f"A {room.room_type.value} room costs {room.cost_gp} gp",
            )
        effects.room_type = room.room_type
        effects.lodging_cost_cp = cost_cp
        effects.exhaustion_reduction = room.exhaustion_reduction
        effects.consecutive_wilderness_rests = 0
        effects.wilderness_exhaustion_blocked = False
        return effects

    history = context.rest_history
    blocked = history.wilderness_exhaustion_blocked
    streak = history.consecutive_wilderness_rests + 1
    if not blocked:
        effects.exhaustion_reduction = WILDERNESS_EXHAUSTION_REDUCTION
        if streak >= WILDERNESS_STREAK_LIMIT:
            # Still unblocked, so the completing rest reduces first, then adds a level
            effects.streak_exhaustion = 1
            blocked = True
    effects.consecutive_wilderness_rests = streak
    effects.wilderness_exhaustion_blocked = blocked
    return effects


# =============================================================================
# Application
# =============================================================================


def apply_rest_effects(
    data: CharacterData,
    effects: RestEffectsToApply,
    now: datetime | None = None,
) -> CharacterData:
    """
    Apply resolved rest effects to a copy of a character.

    The input is never modified; callers persist the returned snapshot as
    a whole.

    Raises:
        ValueError: If the character can no longer pay for the room (the
            effects were resolved against a different snapshot)
    """
    now = now or datetime.now(UTC)
    updated = data.model_copy(deep=True)
    stats = updated.character_stats
    history = stats.rest_history
    is_long = effects.rest_type == RestType.LONG

    if effects.lodging_cost_cp and not deduct(updated.currency, effects.lodging_cost_cp):
        raise ValueError(f"Cannot pay {effects.lodging_cost_cp} cp for lodging")
    if effects.rations_to_deduct:
        updated.inventory = deduct_rations(updated.inventory, effects.rations_to_deduct)

    if effects.restore_full_hp:
        stats.current_hp = stats.max_hp
    if effects.temp_hp:
        stats.temp_hp = max(stats.temp_hp, effects.temp_hp)

    if is_long:
        history.heroic_inspiration_gained_today = False
    if effects.heroic_inspiration:
        stats.heroic_inspiration = True
        history.heroic_inspiration_gained_today = True

    if effects.hit_dice_to_recover and stats.hit_dice is not None:
        stats.hit_dice.recover(effects.hit_dice_to_recover)
    if effects.restore_superiority_dice and stats.superiority_dice is not None:
        stats.superiority_dice.restore_all()

    if effects.injury_healing is not None:
        stats.conditions.treat_injury(effects.injury_healing.tier, effects.injury_healing.amount)
    for tier in effects.untreated_injuries:
        if stats.conditions.advance_untreated_day(tier, now):
            logger.info("Untreated %s became infected", tier.value)

    if effects.exhaustion_reduction:
        adjust(stats.exhaustion, -effects.exhaustion_reduction)
    if effects.streak_exhaustion:
        adjust(stats.exhaustion, effects.streak_exhaustion)

    work = effects.project_work
    if work is not None:
        project = stats.get_project(work.project_id) if work.project_id else None
        if project is None and work.new_project is not None:
            project = work.new_project.model_copy()
            stats.projects.append(project)
        if project is not None:
            project.add_work(work.work_units)

    record = RestRecord(
        timestamp=now,
        chosen_option_ids=list(effects.selected_option_ids),
        location=effects.rest_location,
        room_type=effects.room_type,
    )
    if is_long:
        history.last_long_rest = record
        history.consecutive_wilderness_rests = effects.consecutive_wilderness_rests
        history.wilderness_exhaustion_blocked = effects.wilderness_exhaustion_blocked
    else:
        history.last_short_rest = record

    return updated

"""
Exhaustion Track Skills.

Effect lookup and clamped level changes for the exhaustion track.
"""

from __future__ import annotations

from companion.models.condition import DEFAULT_EXHAUSTION_EFFECTS, ExhaustionState

NO_EFFECT = "No effect"


def effect_at(level: int | None, custom_effects: list[str] | None = None) -> str:
    """
    Get the effect text for an exhaustion level.

    A non-empty GM-defined entry wins; otherwise the default table is used.
    Levels outside the table read as "No effect".
    """
    if level is None or level < 0:
        return NO_EFFECT
    if custom_effects and level < len(custom_effects) and custom_effects[level]:
        return custom_effects[level]
    if level < len(DEFAULT_EXHAUSTION_EFFECTS):
        return DEFAULT_EXHAUSTION_EFFECTS[level]
    return NO_EFFECT


def adjust_exhaustion(level: int, delta: int, max_levels: int) -> int:
    """Shift a level by delta, clamped to [0, max_levels]."""
    return max(0, min(max_levels, level + delta))


def adjust(state: ExhaustionState, delta: int) -> int:
    """
    Apply a level change to an exhaustion track in place.

    Returns:
        The new level.
    """
    state.current_level = adjust_exhaustion(state.current_level, delta, state.max_levels)
    return state.current_level


def current_effect(state: ExhaustionState) -> str:
    """Effect text for the track's current level."""
    return effect_at(state.current_level, state.custom_effects)


def exhaustion_from_hp_change(old_hp: int, new_hp: int) -> int:
    """Levels gained from an HP edit: 1 when HP drops from above 0 to exactly 0."""
    return 1 if old_hp > 0 and new_hp == 0 else 0

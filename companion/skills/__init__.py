"""
Stateless Skills for the tabletop companion.

Skills are pure rules functions that:
- Take structured input (Pydantic models)
- Apply the table's rules (currency, conditions, rests, trades)
- Return structured output
- NEVER touch the record store
"""

from companion.skills.currency import (
    breakdown,
    from_copper,
    parse_currency,
    to_copper,
    total_copper,
    value_to_copper,
)
from companion.skills.exhaustion import adjust_exhaustion, current_effect, effect_at
from companion.skills.hit_points import HpChangeResult, apply_damage, heal, set_current_hp
from companion.skills.injuries import InjuryPrompt, injury_from_roll, injury_prompt_for_damage
from companion.skills.inventory import (
    PackLoad,
    calculate_pack_load,
    deduct_rations,
    find_rations,
    total_rations,
)
from companion.skills.rest import (
    RestContext,
    RestEffectsToApply,
    RestValidationError,
    RestValidationReason,
    apply_rest_effects,
    build_rest_context,
    default_selection,
    recently_used_option_ids,
    resolve_rest,
    selection_limit,
    toggle_selection,
)
from companion.skills.rest_catalog import (
    eligible_options,
    get_rest_option,
    selectable_options,
    standard_options,
)
from companion.skills.trade import (
    TradeSettlement,
    calculate_buyback,
    settle_merchant,
    settle_p2p,
)

__all__ = [
    # Currency
    "breakdown",
    "from_copper",
    "parse_currency",
    "to_copper",
    "total_copper",
    "value_to_copper",
    # Exhaustion
    "adjust_exhaustion",
    "current_effect",
    "effect_at",
    # Hit points and injuries
    "HpChangeResult",
    "InjuryPrompt",
    "apply_damage",
    "heal",
    "injury_from_roll",
    "injury_prompt_for_damage",
    "set_current_hp",
    # Inventory
    "PackLoad",
    "calculate_pack_load",
    "deduct_rations",
    "find_rations",
    "total_rations",
    # Rest
    "RestContext",
    "RestEffectsToApply",
    "RestValidationError",
    "RestValidationReason",
    "apply_rest_effects",
    "build_rest_context",
    "default_selection",
    "eligible_options",
    "get_rest_option",
    "recently_used_option_ids",
    "resolve_rest",
    "selectable_options",
    "selection_limit",
    "standard_options",
    "toggle_selection",
    # Trade
    "TradeSettlement",
    "calculate_buyback",
    "settle_merchant",
    "settle_p2p",
]

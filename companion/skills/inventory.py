"""
Inventory Skills.

Ration bookkeeping and pack load (weight and equipment slots).
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from companion.models.character import CharacterData, Item, PackType

# =============================================================================
# Rations
# =============================================================================

RATION_KEYWORDS = ("ration", "food")


def is_ration(item: Item) -> bool:
    """Items named like rations or food count as rations."""
    name = item.name.lower()
    return any(keyword in name for keyword in RATION_KEYWORDS)


def find_rations(inventory: list[Item]) -> list[tuple[int, Item]]:
    """Ration stacks with their inventory positions."""
    return [(index, item) for index, item in enumerate(inventory) if is_ration(item)]


def total_rations(inventory: list[Item]) -> int:
    """Total rations across all ration stacks."""
    return sum(item.qty for _, item in find_rations(inventory))


def deduct_rations(inventory: list[Item], amount: int) -> list[Item]:
    """
    Eat rations from the inventory.

    Stacks are drawn down in inventory order and emptied stacks are
    dropped. The input list is not modified.

    Returns:
        The updated inventory
    """
    remaining = amount
    updated: list[Item] = []
    for item in inventory:
        if remaining > 0 and is_ration(item):
            taken = min(item.qty, remaining)
            remaining -= taken
            left = item.qty - taken
            if left <= 0:
                continue
            updated.append(item.model_copy(update={"qty": left}))
        else:
            updated.append(item)
    return updated


# =============================================================================
# Pack Load
# =============================================================================

BASE_SLOTS: dict[str, int] = {
    "weapon": 4,
    "armor": 4,
    "clothing": 4,
    "jewelry": 4,
}


class PackStats(BaseModel):
    """Capacity and slot layout of a pack archetype."""

    capacity: int
    utility_slots: int
    slot_modifiers: dict[str, int] = Field(default_factory=dict)
    rules: list[str] = Field(default_factory=list)


PACK_DEFINITIONS: dict[PackType, PackStats] = {
    PackType.NPC: PackStats(capacity=100, utility_slots=0),
    PackType.SIMPLE: PackStats(capacity=25, utility_slots=3),
    PackType.STANDARD: PackStats(capacity=55, utility_slots=4, slot_modifiers={"armor": -1}),
    PackType.WARRIOR: PackStats(
        capacity=30,
        utility_slots=6,
        slot_modifiers={"weapon": 1, "armor": 1},
        rules=["1H Weapon in Utility"],
    ),
    PackType.EXPLORER: PackStats(
        capacity=30,
        utility_slots=6,
        slot_modifiers={"clothing": 1},
        rules=["Tool/Kit in Utility"],
    ),
    PackType.TINKERER: PackStats(capacity=20, utility_slots=10, rules=["Tool/Kit in Utility"]),
    PackType.TRAVEL: PackStats(
        capacity=55,
        utility_slots=8,
        slot_modifiers={"weapon": -2},
        rules=["Camp Items in Utility"],
    ),
    PackType.SHADOW: PackStats(
        capacity=15,
        utility_slots=10,
        slot_modifiers={"armor": -2},
        rules=["Tool/Kit in Utility", "1H Weapon in Utility"],
    ),
    PackType.MULE: PackStats(
        capacity=150,
        utility_slots=1,
        slot_modifiers={"weapon": -3, "armor": -3},
    ),
    PackType.UTILITY: PackStats(capacity=10, utility_slots=14, rules=["Items < 2u in Utility"]),
}

FREE_COINS = 30
COINS_PER_WEIGHT_UNIT = 10


class PackLoad(BaseModel):
    """Computed load of a character's pack."""

    max_slots: dict[str, int]
    used_slots: dict[str, int]
    inventory_weight: float
    coin_weight: int
    total_coins: int
    total_weight: float
    max_capacity: int
    is_overburdened: bool


def slot_cost(item: Item) -> int:
    """Slots an equipped item takes up."""
    if item.equipped_slot == "weapon" and item.category == "Two-Handed Weapon":
        return 2
    if item.equipped_slot == "armor":
        if item.category == "Medium Armor":
            return 2
        if item.category == "Heavy Armor":
            return 3
    return 1


def coin_weight(total_coins: int, pack_type: PackType) -> int:
    """Weight of carried coins; players carry the first 30 for free."""
    free = 0 if pack_type == PackType.NPC else FREE_COINS
    if total_coins <= free:
        return 0
    return math.ceil((total_coins - free) / COINS_PER_WEIGHT_UNIT)


def calculate_pack_load(data: CharacterData) -> PackLoad:
    """
    Work out weight and slot usage for a character.

    Equipped items use slots instead of weight; unequipped items weigh
    weight x qty.
    """
    stats = PACK_DEFINITIONS.get(data.pack_type, PACK_DEFINITIONS[PackType.STANDARD])

    max_slots = {
        slot: base + stats.slot_modifiers.get(slot, 0) for slot, base in BASE_SLOTS.items()
    }
    max_slots["utility"] = stats.utility_slots
    used_slots = {slot: 0 for slot in max_slots}

    inventory_weight = 0.0
    for item in data.inventory:
        if item.equipped_slot is None:
            inventory_weight += item.weight * item.qty
        elif item.equipped_slot in used_slots:
            used_slots[item.equipped_slot] += slot_cost(item)

    coins = data.currency.coin_count()
    coins_weight = coin_weight(coins, data.pack_type)
    total_weight = inventory_weight + coins_weight

    return PackLoad(
        max_slots=max_slots,
        used_slots=used_slots,
        inventory_weight=inventory_weight,
        coin_weight=coins_weight,
        total_coins=coins,
        total_weight=total_weight,
        max_capacity=stats.capacity,
        is_overburdened=total_weight > stats.capacity,
    )

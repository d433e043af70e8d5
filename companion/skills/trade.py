"""
Trade Settlement Skills.

Values two sides of a trade in copper and reports who owes whom. These are
pure calculations; moving items and coins is left to the trade service.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel, Field

from companion.models.character import Item, MerchantItem
from companion.models.currency import CurrencyAmount, Denomination
from companion.skills.currency import from_copper, value_to_copper

DEFAULT_BUYBACK_RATE = 0.8

# Float copper values are rounded to this many places before ceil/floor
_COPPER_PRECISION = 6


class TradeSettlement(BaseModel):
    """The balance of a trade: how much, in what coin, and to whom."""

    amount: float = Field(ge=0)
    denomination: Denomination
    owed_to: str

    @property
    def is_even(self) -> bool:
        return self.owed_to == "even"

    def __str__(self) -> str:
        return str(CurrencyAmount(amount=self.amount, denomination=self.denomination))


def _ceil_copper(value: float) -> int:
    return math.ceil(round(value, _COPPER_PRECISION))


def item_value_copper(item: Item, price: str | None = None) -> float:
    """Value of a whole stack in copper: unit price x quantity."""
    return value_to_copper(item.value if price is None else price) * item.qty


def offer_value_copper(items: Iterable[Item]) -> float:
    """Total copper value of a list of offered items."""
    return sum(item_value_copper(item) for item in items)


def _settle(net_cp: float, positive: str, negative: str) -> TradeSettlement:
    owed = _ceil_copper(abs(net_cp))
    display = from_copper(owed)
    if owed == 0:
        owed_to = "even"
    else:
        owed_to = positive if net_cp > 0 else negative
    return TradeSettlement(
        amount=display.amount,
        denomination=display.denomination,
        owed_to=owed_to,
    )


def settle_p2p(offer_a: Iterable[Item], offer_b: Iterable[Item]) -> TradeSettlement:
    """
    Balance a player-to-player trade.

    The side whose items are worth more is owed the difference, rounded up
    to whole copper so the balance is never under-paid.

    Args:
        offer_a: Items player1 gives
        offer_b: Items player2 gives

    Returns:
        Settlement whose owed_to names the player who RECEIVES the
        difference: "player1" when offer_a is worth more, "player2" when
        offer_b is worth more, or "even". The other player pays. It never
        names the paying side.
    """
    net = offer_value_copper(offer_a) - offer_value_copper(offer_b)
    return _settle(net, "player1", "player2")


def settle_merchant(
    items_to_buy: Iterable[MerchantItem],
    items_to_sell: Iterable[Item],
    buyback_rate: float = DEFAULT_BUYBACK_RATE,
) -> TradeSettlement:
    """
    Balance a trade with a merchant.

    Bought items cost their listed sell price; sold items are credited at
    their value times the buyback rate.

    Example:
        Buying a 50 gp item and selling a 20 gp item at 0.8 leaves
        50 - 16 = 34 gp owed to the merchant.

    Returns:
        Settlement with owed_to "merchant", "player" or "even"
    """
    cost = sum(item_value_copper(item, item.listed_price) for item in items_to_buy)
    credit = sum(item_value_copper(item) * buyback_rate for item in items_to_sell)
    return _settle(cost - credit, "merchant", "player")


def calculate_buyback(value: str, buyback_rate: float = DEFAULT_BUYBACK_RATE) -> str:
    """
    What a merchant pays for one unit of an item, as a price string.

    Rounded down to whole copper.
    """
    offered = math.floor(round(value_to_copper(value) * buyback_rate, _COPPER_PRECISION))
    return str(from_copper(offered))

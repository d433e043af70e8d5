"""
Currency Ledger Skills.

Parses free-text prices, converts between denominations and keeps purses
in their fewest-coins form.
"""

from __future__ import annotations

import re

from companion.models.currency import COPPER_RATES, Currency, CurrencyAmount, Denomination

# Denomination tokens are matched in this order
_DENOMINATION_PRECEDENCE = (Denomination.PP, Denomination.SP, Denomination.CP, Denomination.GP)

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def parse_currency(value_str: str) -> CurrencyAmount:
    """
    Parse a price such as "50 gp" or "2.5sp".

    The first number in the string is the amount. The denomination is the
    first of pp, sp, cp, gp found in the text; gp when none is present.
    Text without a number parses as 0.

    Examples:
        >>> parse_currency("50 gp")
        CurrencyAmount(amount=50.0, denomination=<Denomination.GP: 'gp'>)
        >>> parse_currency("priceless").amount
        0.0
    """
    lower = (value_str or "").lower().strip()

    denomination = Denomination.GP
    for candidate in _DENOMINATION_PRECEDENCE:
        if candidate.value in lower:
            denomination = candidate
            break

    match = _NUMBER_PATTERN.search(lower.replace(",", ""))
    amount = float(match.group(0)) if match else 0.0
    return CurrencyAmount(amount=amount, denomination=denomination)


def to_copper(amount: float, denomination: Denomination) -> float:
    """Convert an amount in one denomination to copper pieces."""
    value = amount * COPPER_RATES[denomination]
    return int(value) if float(value).is_integer() else value


def value_to_copper(value_str: str) -> float:
    """Parse a price string straight to copper pieces."""
    parsed = parse_currency(value_str)
    return to_copper(parsed.amount, parsed.denomination)


def from_copper(cp: int) -> CurrencyAmount:
    """
    Express copper pieces in the largest denomination that divides evenly.

    Used for single-value display; falls back to copper.
    """
    for denomination in (Denomination.PP, Denomination.GP, Denomination.SP):
        rate = COPPER_RATES[denomination]
        if cp >= rate and cp % rate == 0:
            return CurrencyAmount(amount=cp // rate, denomination=denomination)
    return CurrencyAmount(amount=cp, denomination=Denomination.CP)


def total_copper(currency: Currency) -> int:
    """Total value of a purse in copper pieces."""
    return (
        currency.cp * COPPER_RATES[Denomination.CP]
        + currency.sp * COPPER_RATES[Denomination.SP]
        + currency.gp * COPPER_RATES[Denomination.GP]
        + currency.pp * COPPER_RATES[Denomination.PP]
    )


def breakdown(cp: int) -> Currency:
    """
    Break copper pieces into the fewest coins, largest denomination first.

    total_copper(breakdown(x)) == x for every x >= 0.
    """
    if cp < 0:
        raise ValueError(f"Cannot break down a negative amount: {cp}")

    pp, remaining = divmod(cp, COPPER_RATES[Denomination.PP])
    gp, remaining = divmod(remaining, COPPER_RATES[Denomination.GP])
    sp, remaining = divmod(remaining, COPPER_RATES[Denomination.SP])
    return Currency(cp=remaining, sp=sp, gp=gp, pp=pp)


def _assign(currency: Currency, new_value: Currency) -> None:
    currency.cp = new_value.cp
    currency.sp = new_value.sp
    currency.gp = new_value.gp
    currency.pp = new_value.pp


def deduct(currency: Currency, amount: int) -> bool:
    """
    Deduct copper pieces from a purse in place.

    Returns:
        True on success. False if the purse cannot cover the amount, in
        which case it is left untouched.
    """
    if amount < 0:
        raise ValueError(f"Cannot deduct a negative amount: {amount}")

    available = total_copper(currency)
    if available < amount:
        return False

    _assign(currency, breakdown(available - amount))
    return True


def add(currency: Currency, amount: int) -> None:
    """Add copper pieces to a purse in place."""
    if amount < 0:
        raise ValueError(f"Cannot add a negative amount: {amount}")
    _assign(currency, breakdown(total_copper(currency) + amount))

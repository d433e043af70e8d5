"""
Currency Models for the companion.

Four fixed denominations with a copper-piece base unit.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Denomination(str, Enum):
    """Coin denominations, smallest first."""

    CP = "cp"
    SP = "sp"
    GP = "gp"
    PP = "pp"


# Value of one coin in copper pieces
COPPER_RATES: dict[Denomination, int] = {
    Denomination.CP: 1,
    Denomination.SP: 10,
    Denomination.GP: 100,
    Denomination.PP: 1000,
}


class Currency(BaseModel):
    """
    A purse of coins.

    Ledger operations rewrite the purse in place to its fewest-coins form.
    """

    cp: int = Field(default=0, ge=0, description="Copper pieces")
    sp: int = Field(default=0, ge=0, description="Silver pieces")
    gp: int = Field(default=0, ge=0, description="Gold pieces")
    pp: int = Field(default=0, ge=0, description="Platinum pieces")

    def coin_count(self) -> int:
        """Total number of physical coins in the purse."""
        return self.cp + self.sp + self.gp + self.pp

    def is_empty(self) -> bool:
        return self.coin_count() == 0


class CurrencyAmount(BaseModel):
    """A single value in one denomination, e.g. 50 gp."""

    amount: float = Field(ge=0, description="Number of coins (may be fractional when parsed)")
    denomination: Denomination = Denomination.GP

    def __str__(self) -> str:
        amount = int(self.amount) if float(self.amount).is_integer() else self.amount
        return f"{amount} {self.denomination.value}"

"""
Recoverable Resource Models for the companion.

Hit dice and superiority dice pools refilled by rests.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator


class HitDice(BaseModel):
    """
    Hit dice pool for a character.

    Hit dice are spent to heal and partly recovered on a long rest.
    """

    die_type: str = Field(default="d8", description="Die size, e.g., 'd8', 'd10'")
    maximum: int = Field(ge=0, description="Maximum hit dice (usually = level)")
    current: int = Field(ge=0, description="Available hit dice to spend")

    @model_validator(mode="after")
    def current_not_exceeds_maximum(self) -> HitDice:
        if self.current > self.maximum:
            self.current = self.maximum
        return self

    def spend(self, count: int = 1) -> int:
        """
        Spend hit dice and return how many were actually spent.

        Returns the actual number spent (may be less if not enough available).
        """
        actual = min(count, self.current)
        self.current -= actual
        return actual

    def recover(self, count: int) -> int:
        """
        Recover hit dice.

        Returns the actual number recovered.
        """
        space = self.maximum - self.current
        actual = max(0, min(count, space))
        self.current += actual
        return actual

    def long_rest_recovery(self) -> int:
        """Dice a long rest gives back: half the missing dice, rounded up."""
        return math.ceil((self.maximum - self.current) / 2)


class SuperiorityDice(BaseModel):
    """Superiority dice pool, fully restored by any rest."""

    maximum: int = Field(ge=0)
    current: int = Field(ge=0)

    @model_validator(mode="after")
    def current_not_exceeds_maximum(self) -> SuperiorityDice:
        if self.current > self.maximum:
            self.current = self.maximum
        return self

    def restore_all(self) -> int:
        """Refill the pool. Returns dice restored."""
        restored = self.maximum - self.current
        self.current = self.maximum
        return restored

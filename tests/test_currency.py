"""Tests for the currency ledger skills."""

from __future__ import annotations

import pytest

from companion.models.currency import Currency, CurrencyAmount, Denomination
from companion.skills.currency import (
    add,
    breakdown,
    deduct,
    from_copper,
    parse_currency,
    to_copper,
    total_copper,
    value_to_copper,
)

# --- Parsing Tests ---


class TestParseCurrency:
    """Tests for free-text price parsing."""

    def test_gold(self):
        parsed = parse_currency("50 gp")
        assert parsed.amount == 50
        assert parsed.denomination == Denomination.GP

    def test_silver_without_space(self):
        parsed = parse_currency("2.5sp")
        assert parsed.amount == 2.5
        assert parsed.denomination == Denomination.SP

    def test_platinum_and_copper(self):
        assert parse_currency("3 pp").denomination == Denomination.PP
        assert parse_currency("7 CP").denomination == Denomination.CP

    def test_no_denomination_defaults_to_gold(self):
        parsed = parse_currency("12")
        assert parsed.amount == 12
        assert parsed.denomination == Denomination.GP

    def test_no_number_is_zero(self):
        parsed = parse_currency("priceless")
        assert parsed.amount == 0
        assert parsed.denomination == Denomination.GP

    def test_empty_string(self):
        assert parse_currency("").amount == 0

    def test_thousands_separator(self):
        assert parse_currency("1,500 gp").amount == 1500

    def test_first_number_wins(self):
        assert parse_currency("5 gp (was 8 gp)").amount == 5

    def test_denomination_precedence(self):
        """pp is matched before sp, sp before cp, cp before gp."""
        assert parse_currency("1 pp or 10 gp").denomination == Denomination.PP
        assert parse_currency("10 gp or 100 sp").denomination == Denomination.SP


# --- Conversion Tests ---


class TestConversion:
    """Tests for copper conversion."""

    def test_to_copper_rates(self):
        assert to_copper(1, Denomination.CP) == 1
        assert to_copper(1, Denomination.SP) == 10
        assert to_copper(1, Denomination.GP) == 100
        assert to_copper(1, Denomination.PP) == 1000

    def test_to_copper_whole_values_are_ints(self):
        value = to_copper(2.5, Denomination.GP)
        assert value == 250
        assert isinstance(value, int)

    def test_to_copper_keeps_fractions(self):
        assert to_copper(0.5, Denomination.CP) == 0.5

    def test_value_to_copper(self):
        assert value_to_copper("10 gp") == 1000
        assert value_to_copper("5 sp") == 50

    def test_from_copper_picks_largest_even_denomination(self):
        assert from_copper(5000) == CurrencyAmount(amount=5, denomination=Denomination.PP)
        assert from_copper(3400) == CurrencyAmount(amount=34, denomination=Denomination.GP)
        assert from_copper(150) == CurrencyAmount(amount=15, denomination=Denomination.SP)
        assert from_copper(7) == CurrencyAmount(amount=7, denomination=Denomination.CP)

    def test_from_copper_zero(self):
        assert from_copper(0).denomination == Denomination.CP
        assert from_copper(0).amount == 0

    def test_amount_str(self):
        assert str(CurrencyAmount(amount=34, denomination=Denomination.GP)) == "34 gp"
        assert str(CurrencyAmount(amount=2.5, denomination=Denomination.SP)) == "2.5 sp"


# --- Purse Tests ---


class TestBreakdown:
    """Tests for fewest-coins breakdown."""

    def test_total_copper(self):
        assert total_copper(Currency(cp=4, sp=3, gp=2, pp=1)) == 1234

    def test_breakdown(self):
        assert breakdown(1234) == Currency(cp=4, sp=3, gp=2, pp=1)

    def test_breakdown_zero(self):
        assert breakdown(0) == Currency()

    def test_round_trip(self):
        for cp in [0, 1, 9, 10, 99, 100, 101, 999, 1000, 1001, 12345, 987654]:
            assert total_copper(breakdown(cp)) == cp

    def test_fewest_coins(self):
        """Greedy breakdown never beats a hand-picked alternative."""
        assert breakdown(110).coin_count() == 2  # 1 gp + 1 sp, not 11 sp
        assert breakdown(2000).coin_count() == 2  # 2 pp, not 20 gp

    def test_fewest_coins_exhaustive(self):
        """Breakdown matches the true minimum coin count for every small total."""
        coins = (1, 10, 100, 1000)
        best = [0]
        for total in range(1, 2001):
            best.append(min(best[total - c] + 1 for c in coins if c <= total))

        for total in range(2001):
            purse = breakdown(total)
            assert total_copper(purse) == total
            assert purse.coin_count() == best[total], total

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            breakdown(-1)


class TestDeduct:
    """Tests for in-place deduction."""

    def test_deduct_success(self):
        purse = Currency(gp=5)
        assert deduct(purse, 300) is True
        assert purse == Currency(gp=2)

    def test_deduct_makes_change(self):
        purse = Currency(pp=1)
        assert deduct(purse, 1)
        assert purse == Currency(cp=9, sp=9, gp=9)
        assert total_copper(purse) == 999

    def test_deduct_insufficient_leaves_purse_untouched(self):
        purse = Currency(cp=3, sp=1, gp=2)
        before = purse.model_dump()
        assert deduct(purse, 10_000) is False
        assert purse.model_dump() == before

    def test_deduct_exact(self):
        purse = Currency(sp=5)
        assert deduct(purse, 50)
        assert purse.is_empty()

    def test_deduct_negative_rejected(self):
        with pytest.raises(ValueError):
            deduct(Currency(gp=1), -5)

    def test_add(self):
        purse = Currency(cp=95)
        add(purse, 10)
        assert purse == Currency(cp=5, gp=1)

    def test_add_negative_rejected(self):
        with pytest.raises(ValueError):
            add(Currency(), -1)

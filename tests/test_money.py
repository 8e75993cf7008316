"""Coercion and rounding policy for operator-entered amounts."""

from decimal import Decimal

import pytest

from sitebook.ledger.money import (
    MAX_AMOUNT,
    quantize,
    to_count,
    to_money,
    to_percentage,
    to_signed_money,
    total,
)
from sitebook.ledger.tax import compute_tax


class TestToMoney:

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "NaN", "Infinity", float("nan"), True])
    def test_bad_input_is_zero(self, value):
        assert to_money(value) == Decimal("0.00")

    def test_negative_is_zero(self):
        assert to_money(-250) == Decimal("0.00")
        assert to_money("-1.5") == Decimal("0.00")

    def test_numeric_string(self):
        assert to_money(" 1200.5 ") == Decimal("1200.50")

    def test_float_goes_through_str(self):
        assert to_money(0.1) + to_money(0.2) == Decimal("0.30")

    def test_rounds_half_up(self):
        assert to_money("2.345") == Decimal("2.35")
        assert to_money("2.344") == Decimal("2.34")


def test_signed_money_keeps_sign():
    assert to_signed_money(-500) == Decimal("-500.00")
    assert to_signed_money("oops") == Decimal("0.00")


def test_count_is_whole_and_non_negative():
    assert to_count("32") == 32
    assert to_count(2.5) == 3
    assert to_count(-4) == 0


def test_percentage_is_clamped():
    assert to_percentage(145) == Decimal("100")
    assert to_percentage(-3) == Decimal("0")
    assert to_percentage("45") == Decimal("45")


def test_total_of_nothing_is_zero():
    assert total([]) == Decimal("0.00")


def test_total_skips_garbage():
    assert total([100, "50.25", None, "x"]) == Decimal("150.25")


def test_quantize():
    assert quantize(Decimal("0.005")) == Decimal("0.01")


class TestOutOfRange:

    @pytest.mark.parametrize("value", ["1e30", 1e30, "1e40", 10 ** 40, "-1e30", Decimal("1e100")])
    def test_huge_values_are_zero(self, value):
        assert to_money(value) == Decimal("0.00")
        assert to_signed_money(value) == Decimal("0.00")
        assert total([value, 5]) == Decimal("5.00")

    def test_largest_accepted_amount(self):
        assert to_money(MAX_AMOUNT) == MAX_AMOUNT

    def test_products_of_large_amounts_still_round(self):
        assert quantize(MAX_AMOUNT * MAX_AMOUNT) == Decimal("1e40")

    def test_tax_on_huge_amount_is_zero(self):
        result = compute_tax("1e30", 18)
        assert result.amount == 0
        assert result.grand_total == 0

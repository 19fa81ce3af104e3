import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from numeric import (
    MAX_AMOUNT,
    MIN_AMOUNT,
    checked_add,
    checked_mul,
    checked_sub,
    format_amount,
    parse_amount,
)


class TestCheckedArithmetic:
    def test_bounds(self):
        sign, digits, exponent = MAX_AMOUNT.as_tuple()
        assert (sign, exponent) == (0, -4)
        assert int("".join(map(str, digits))) == 2 ** 127 - 1
        assert MIN_AMOUNT < 0

    def test_add(self):
        assert checked_add(Decimal("1.2345"), Decimal("0.0001")) == Decimal("1.2346")

    def test_add_at_limit(self):
        assert checked_add(MAX_AMOUNT, Decimal("0")) == MAX_AMOUNT

    def test_add_overflow(self):
        assert checked_add(MAX_AMOUNT, Decimal("0.0001")) is None

    def test_sub_overflow(self):
        assert checked_sub(MIN_AMOUNT, Decimal("0.0001")) is None

    def test_sub_exact_with_many_digits(self):
        # exceeds the default 28 digit decimal context
        below = checked_sub(MAX_AMOUNT, Decimal("0.0001"))
        assert below < MAX_AMOUNT
        assert checked_add(below, Decimal("0.0001")) == MAX_AMOUNT

    def test_mul_by_sign(self):
        assert checked_mul(Decimal("3"), -1) == Decimal("-3")
        assert checked_mul(Decimal("3"), 1) == Decimal("3")

    def test_negating_minimum_overflows(self):
        assert checked_mul(MIN_AMOUNT, -1) is None


class TestParseAmount:
    def test_parse(self):
        assert parse_amount("1.0") == Decimal("1")
        assert parse_amount(" 2.5 ") == Decimal("2.5")

    def test_keeps_four_places(self):
        assert parse_amount("1.2345") == Decimal("1.2345")
        assert parse_amount("5").as_tuple().exponent == -4

    def test_rounds_extra_places(self):
        assert parse_amount("1.23456") == Decimal("1.2346")

    def test_negative(self):
        assert parse_amount("-3") == Decimal("-3")

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_amount("abc")

    def test_rejects_digit_separators(self):
        with pytest.raises(ValueError):
            parse_amount("1_000.5")

    def test_rejects_non_ascii_digits(self):
        with pytest.raises(ValueError):
            parse_amount("\u0661\u0662")

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            parse_amount("")

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            parse_amount("NaN")
        with pytest.raises(ValueError):
            parse_amount("inf")

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            parse_amount("1e40")
        with pytest.raises(ValueError):
            parse_amount("1e200")


class TestFormatAmount:
    def test_four_places(self):
        assert format_amount(Decimal("1.5")) == "1.5000"
        assert format_amount(Decimal("0")) == "0.0000"
        assert format_amount(Decimal("1.2345")) == "1.2345"

    def test_negative(self):
        assert format_amount(Decimal("-3")) == "-3.0000"

    def test_negative_zero(self):
        assert format_amount(Decimal("-0")) == "0.0000"
        assert format_amount(Decimal("-0.0000")) == "0.0000"

    def test_large_value_not_in_exponent_form(self):
        assert format_amount(Decimal("1E+20")) == "100000000000000000000.0000"

"""Tests for monetary string normalization."""

from decimal import Decimal

import pytest

from statement_generator.domain.statements.services.amount_parser import (
    ZERO,
    format_amount,
    parse_amount,
    quantize_amount,
)


@pytest.mark.parametrize("raw, expected", [
    ("1,234.50", Decimal("1234.50")),
    ("(500)", Decimal("-500.00")),
    ("(1,234.50)", Decimal("-1234.50")),
    ("  2,000  ", Decimal("2000.00")),
    ("-75.5", Decimal("-75.50")),
    ("10,00,000.00", Decimal("1000000.00")),
])
def test_parses_locale_formatted_amounts(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "12abc", "NaN", "Infinity", "-inf", "()"])
def test_unreadable_amounts_become_zero(raw):
    value = parse_amount(raw)
    assert value == ZERO
    assert value.is_finite()


def test_result_has_two_decimal_places():
    assert parse_amount("7").as_tuple().exponent == -2
    assert str(parse_amount("1,234.5")) == "1234.50"


def test_numbers_are_accepted():
    assert parse_amount(12) == Decimal("12.00")
    assert parse_amount(12.345) == Decimal("12.35")
    assert parse_amount(Decimal("1.005")) == Decimal("1.01")


def test_boolean_is_not_an_amount():
    assert parse_amount(True) == ZERO


def test_negative_zero_is_normalized():
    assert str(parse_amount("(0.00)")) == "0.00"
    assert str(parse_amount("-0.001")) == "0.00"


def test_quantize_rounds_half_up():
    assert quantize_amount(Decimal("2.345")) == Decimal("2.35")
    assert quantize_amount(Decimal("-2.345")) == Decimal("-2.35")


def test_format_amount():
    assert format_amount(Decimal("1234.5")) == "1234.50"
    assert format_amount(Decimal("-100")) == "-100.00"
    assert format_amount(Decimal("-0.001")) == "0.00"
    assert format_amount(ZERO) == "0.00"


@pytest.mark.parametrize("raw", ["1e50", "99999999999999999999999999999", "-1E+26", "(1e40)"])
def test_out_of_range_amount_is_zero(raw):
    assert parse_amount(raw) == ZERO


def test_largest_accepted_amount():
    assert parse_amount("99,999,999,999,999,999,999,999,999.99") == Decimal("99999999999999999999999999.99")


def test_format_amount_beyond_default_precision():
    big = Decimal("123456789012345678901234567890.125")

    assert format_amount(big) == "123456789012345678901234567890.13"

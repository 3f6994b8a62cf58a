"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from churchbooks.utils.amount_parser import parse_amount, parse_category_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("₹123.45", Decimal("123.45")),
        ("Rs. 1,500", Decimal("1500")),
        ("INR 99", Decimal("99")),
        ("1,23,456.78", Decimal("123456.78")),
        ("-50", Decimal("-50")),
        ("(75.10)", Decimal("-75.10")),
        ("  42 ", Decimal("42")),
        ("100.500", Decimal("100.50")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity", "1.2.3", "100.005", "₹1,500.125"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_category_amount():
    assert parse_category_amount("Sunday Offering=150") == ("Sunday Offering", Decimal("150"))
    assert parse_category_amount(" Thanks = ₹25.50") == ("Thanks", Decimal("25.50"))


@pytest.mark.parametrize("text", ["150", "=150", "Sunday Offering=", "Sunday Offering=x"])
def test_parse_category_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_category_amount(text)

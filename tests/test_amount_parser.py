"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from finledger.utils.amount_parser import parse_amount, parse_positive_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("₹500", Decimal("500")),
        ("-12.5", Decimal("-12.5")),
        ("(99.99)", Decimal("-99.99")),
        ("  7 ", Decimal("7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_positive_amount():
    assert parse_positive_amount("0.01") == Decimal("0.01")
    with pytest.raises(ValueError, match="greater than zero"):
        parse_positive_amount("0")
    with pytest.raises(ValueError, match="greater than zero"):
        parse_positive_amount("(5)")

"""Tests for amount parsing and display formatting."""

from datetime import date
from decimal import Decimal

import pytest

from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    format_currency,
    format_date,
    format_month,
    ordinal,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("123.45", Decimal("123.45")),
        ("₹1,234.50", Decimal("1234.50")),
        ("$ 99", Decimal("99")),
        ("-12.5", Decimal("-12.5")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "abc", "₹", "NaN", "Infinity"])
def test_parse_amount_invalid(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_format_currency_default_symbol(monkeypatch):
    monkeypatch.delenv("BUDGETBOOK_CURRENCY", raising=False)

    assert format_currency(Decimal("1234.5")) == f"{DEFAULT_CURRENCY_SYMBOL}1,234.50"


def test_format_currency_from_environment(monkeypatch):
    monkeypatch.setenv("BUDGETBOOK_CURRENCY", "$")

    assert format_currency(Decimal("-70")) == "$70.00"


def test_format_currency_explicit_symbol():
    assert format_currency(Decimal("1234567.891"), symbol="€") == "€1,234,567.89"


def test_format_date_and_month():
    assert format_date(date(2024, 3, 5)) == "Mar 05, 2024"
    assert format_month(date(2024, 3, 5)) == "March 2024"


@pytest.mark.parametrize(
    "day, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (13, "13th"), (21, "21st"), (31, "31st")],
)
def test_ordinal(day, expected):
    assert ordinal(day) == expected

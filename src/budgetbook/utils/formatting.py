"""Display formatting helpers."""

import os
from datetime import date
from decimal import Decimal

DEFAULT_CURRENCY_SYMBOL = "₹"


def currency_symbol() -> str:
    """Return the configured currency symbol (BUDGETBOOK_CURRENCY)."""
    return os.environ.get("BUDGETBOOK_CURRENCY", DEFAULT_CURRENCY_SYMBOL)


def format_currency(amount: Decimal, symbol: str | None = None) -> str:
    """Format an amount as an unsigned currency string, e.g. "₹1,234.50"."""
    if symbol is None:
        symbol = currency_symbol()
    return f"{symbol}{abs(amount):,.2f}"


def format_date(value: date) -> str:
    """Format a date as "Mar 05, 2024"."""
    return value.strftime("%b %d, %Y")


def format_month(value: date) -> str:
    """Format a month as "March 2024"."""
    return value.strftime("%B %Y")


def ordinal(day: int) -> str:
    """Return the ordinal form of a day of month ("1st", "22nd", "13th")."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"

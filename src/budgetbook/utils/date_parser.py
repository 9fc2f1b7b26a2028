"""Date and month parsing utilities."""

import calendar
from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string
        today: Reference date for relative forms (defaults to the current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str, today: date | None = None) -> date:
    """Parse a month string into the first day of that month.

    Accepts "2024-03", "March 2024", "this month", "last month" and
    "next month".

    Raises:
        ValueError: If month string cannot be parsed
    """
    month_str = month_str.strip().lower()
    today = today or date.today()
    current = today.replace(day=1)

    relative_months = {
        "this month": current,
        "last month": current - relativedelta(months=1),
        "next month": current + relativedelta(months=1),
    }
    if month_str in relative_months:
        return relative_months[month_str]

    try:
        # Pin the default day so "2024-02" does not inherit today's day (e.g. 30);
        # a bare month name falls in the current year
        parsed = date_parser.parse(month_str, default=datetime(today.year, 1, 1))
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse month '{month_str}': {e}")
    return parsed.date().replace(day=1)


def get_month_range(month: date) -> tuple[date, date]:
    """Get the first and last day of the month containing ``month``."""
    start_date = month.replace(day=1)
    end_date = start_date + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date)


def days_in_month(month: date) -> int:
    """Return the number of days in the month containing ``month``."""
    return calendar.monthrange(month.year, month.month)[1]


def is_same_month(first: date, second: date) -> bool:
    """Return True when both dates fall in the same calendar month."""
    return (first.year, first.month) == (second.year, second.month)

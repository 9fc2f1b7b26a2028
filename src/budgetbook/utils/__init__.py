"""Utility functions for budgetbook."""

from budgetbook.utils.date_parser import parse_date, parse_month
from budgetbook.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_month", "parse_amount"]

"""Field validators applied at the service boundary.

Each validator returns the normalized value or raises ValidationError.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from budgetbook.domain.entities import TransactionType
from budgetbook.domain.errors import ValidationError

MIN_RECURRENCE_DAY = 1
MAX_RECURRENCE_DAY = 31


def _to_decimal(value: Any, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps floats like 0.1 from expanding to binary noise
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field} must be a number, got '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def validate_text(value: Any, field: str) -> str:
    """Require a non-empty string, returned stripped."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def validate_name(value: Any) -> str:
    return validate_text(value, "Name")


def validate_description(value: Any) -> str:
    return validate_text(value, "Description")


def validate_category_id(value: Any) -> str:
    return validate_text(value, "Category")


def validate_budget(value: Any) -> Decimal:
    """Budgets may be zero but never negative."""
    budget = _to_decimal(value, "Budget")
    if budget < 0:
        raise ValidationError(f"Budget cannot be negative, got {budget}")
    return budget


def validate_amount(value: Any) -> Decimal:
    """Amounts are strictly positive; direction comes from the transaction type."""
    amount = _to_decimal(value, "Amount")
    if amount <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {amount}")
    return amount


def validate_recurrence_date(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        day = value
    elif isinstance(value, str) and value.strip().isdigit():
        day = int(value.strip())
    else:
        raise ValidationError(f"Recurrence day must be a whole number, got '{value}'")
    if not MIN_RECURRENCE_DAY <= day <= MAX_RECURRENCE_DAY:
        raise ValidationError(
            f"Recurrence day must be between {MIN_RECURRENCE_DAY} and {MAX_RECURRENCE_DAY}, got {day}"
        )
    return day


def validate_transaction_type(value: Any) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Transaction type must be one of: {choices}")


def validate_date(value: Any) -> date:
    # datetime is a date subclass; strip the time component
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Date must be a calendar date, got '{value}'")


def validate_flag(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be true or false")
    return value


def validate_optional_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value.strip() or None

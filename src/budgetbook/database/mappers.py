"""Mapper functions to convert between domain entities and stored records.

Records are plain JSON-compatible dicts using the camelCase keys of the
storage format. Amounts are written as decimal strings so they survive a
round trip exactly; numeric amounts written by older data are accepted on
read.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, TypeVar

from dateutil import parser as date_parser

from budgetbook.domain.entities import (
    Category,
    RecurringPayment,
    Transaction,
    TransactionType,
)
from budgetbook.domain.validation import MAX_RECURRENCE_DAY, MIN_RECURRENCE_DAY

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors raised by the record_to_* functions for malformed records
MALFORMED_RECORD_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError, OverflowError)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"Expected a number, got {value!r}")
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"Expected a finite number, got {value!r}")
    return amount


def _to_amount(value: Any) -> Decimal:
    amount = _to_decimal(value)
    if amount <= 0:
        raise ValueError(f"Expected a positive amount, got {value!r}")
    return amount


def _to_budget(value: Any) -> Decimal:
    budget = _to_decimal(value)
    if budget < 0:
        raise ValueError(f"Expected a non-negative budget, got {value!r}")
    return budget


def _to_day_of_month(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected a day of month, got {value!r}")
    if not MIN_RECURRENCE_DAY <= value <= MAX_RECURRENCE_DAY:
        raise ValueError(f"Day of month out of range: {value!r}")
    return value


def _to_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Expected true or false, got {value!r}")
    return value


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {value!r}")
    return value


def category_to_record(category: Category) -> dict[str, Any]:
    """Convert a Category entity to a stored record."""
    record = {
        "id": category.id,
        "name": category.name,
        "budget": str(category.budget),
        "color": category.color,
    }
    if category.icon is not None:
        record["icon"] = category.icon
    return record


def record_to_category(record: dict[str, Any]) -> Category:
    """Convert a stored record to a Category entity."""
    icon = record.get("icon")
    return Category(
        id=_to_str(record["id"]),
        name=_to_str(record["name"]),
        budget=_to_budget(record["budget"]),
        color=_to_str(record.get("color", "")),
        icon=_to_str(icon) if icon is not None else None,
    )


def transaction_to_record(transaction: Transaction) -> dict[str, Any]:
    """Convert a Transaction entity to a stored record."""
    return {
        "id": transaction.id,
        "amount": str(transaction.amount),
        "categoryId": transaction.category_id,
        "description": transaction.description,
        "date": transaction.date.isoformat(),
        "type": transaction.type.value,
    }


def record_to_transaction(record: dict[str, Any]) -> Transaction:
    """Convert a stored record to a Transaction entity."""
    return Transaction(
        id=_to_str(record["id"]),
        amount=_to_amount(record["amount"]),
        category_id=_to_str(record["categoryId"]),
        description=_to_str(record.get("description", "")),
        # Date only; any time component in the stored value is ignored
        date=date.fromisoformat(_to_str(record["date"])[:10]),
        type=TransactionType(record["type"]),
    )


def recurring_payment_to_record(payment: RecurringPayment) -> dict[str, Any]:
    """Convert a RecurringPayment entity to a stored record."""
    record = {
        "id": payment.id,
        "amount": str(payment.amount),
        "categoryId": payment.category_id,
        "description": payment.description,
        "recurrenceDate": payment.recurrence_date,
        "isActive": payment.is_active,
    }
    if payment.last_processed is not None:
        record["lastProcessed"] = payment.last_processed.isoformat()
    return record


def record_to_recurring_payment(record: dict[str, Any]) -> RecurringPayment:
    """Convert a stored record to a RecurringPayment entity."""
    last_processed = record.get("lastProcessed")
    return RecurringPayment(
        id=_to_str(record["id"]),
        amount=_to_amount(record["amount"]),
        category_id=_to_str(record["categoryId"]),
        description=_to_str(record.get("description", "")),
        recurrence_date=_to_day_of_month(record["recurrenceDate"]),
        is_active=_to_bool(record.get("isActive", True)),
        last_processed=date_parser.isoparse(last_processed) if last_processed else None,
    )


def records_to_entities(
    records: list[Any], converter: Callable[[dict[str, Any]], T], key: str
) -> list[T]:
    """Convert stored records, skipping (and logging) any malformed entries."""
    entities = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping malformed record %d in %s: not an object", index, key)
            continue
        try:
            entities.append(converter(record))
        except MALFORMED_RECORD_ERRORS as e:
            logger.warning("Skipping malformed record %d in %s: %s", index, key, e)
    return entities

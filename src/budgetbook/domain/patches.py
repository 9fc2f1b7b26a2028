"""Merge-patch operations for stored entities.

A patch lists only the fields to change; everything left as ``UNSET`` keeps
its current value. Every set field is validated before the merged entity is
built, so a rejected patch never produces a partially updated record.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

from budgetbook.domain.entities import Category, RecurringPayment, Transaction
from budgetbook.domain import validation


class _Unset:
    """Marker for patch fields that were not supplied."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class CategoryPatch:
    name: Any = UNSET
    budget: Any = UNSET
    color: Any = UNSET
    icon: Any = UNSET


@dataclass(frozen=True)
class TransactionPatch:
    amount: Any = UNSET
    category_id: Any = UNSET
    description: Any = UNSET
    date: Any = UNSET
    type: Any = UNSET


@dataclass(frozen=True)
class RecurringPaymentPatch:
    amount: Any = UNSET
    category_id: Any = UNSET
    description: Any = UNSET
    recurrence_date: Any = UNSET
    is_active: Any = UNSET
    last_processed: Any = UNSET


CATEGORY_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "name": validation.validate_name,
    "budget": validation.validate_budget,
    "color": lambda value: validation.validate_text(value, "Color"),
    "icon": lambda value: validation.validate_optional_text(value, "Icon"),
}

TRANSACTION_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "amount": validation.validate_amount,
    "category_id": validation.validate_category_id,
    "description": validation.validate_description,
    "date": validation.validate_date,
    "type": validation.validate_transaction_type,
}

RECURRING_PAYMENT_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "amount": validation.validate_amount,
    "category_id": validation.validate_category_id,
    "description": validation.validate_description,
    "recurrence_date": validation.validate_recurrence_date,
    "is_active": lambda value: validation.validate_flag(value, "Active"),
    # Scheduler-owned marker; None clears it
    "last_processed": lambda value: value,
}


def patch_changes(patch: Any, validators: dict[str, Callable[[Any], Any]]) -> dict[str, Any]:
    """Validate the set fields of a patch and return them as a change dict."""
    changes = {}
    for field in fields(patch):
        value = getattr(patch, field.name)
        if value is UNSET:
            continue
        changes[field.name] = validators[field.name](value)
    return changes


def apply_category_patch(category: Category, patch: CategoryPatch) -> Category:
    return replace(category, **patch_changes(patch, CATEGORY_VALIDATORS))


def apply_transaction_patch(transaction: Transaction, patch: TransactionPatch) -> Transaction:
    return replace(transaction, **patch_changes(patch, TRANSACTION_VALIDATORS))


def apply_recurring_payment_patch(
    payment: RecurringPayment, patch: RecurringPaymentPatch
) -> RecurringPayment:
    return replace(payment, **patch_changes(patch, RECURRING_PAYMENT_VALIDATORS))

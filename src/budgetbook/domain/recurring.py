"""Recurring payment domain service."""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from dateutil.relativedelta import relativedelta

from budgetbook.domain import errors
from budgetbook.domain.entities import RecurringPayment
from budgetbook.domain.errors import NotFoundError
from budgetbook.domain.patches import RecurringPaymentPatch, apply_recurring_payment_patch
from budgetbook.domain.store import EntityStore
from budgetbook.domain.validation import (
    validate_amount,
    validate_category_id,
    validate_description,
    validate_flag,
    validate_recurrence_date,
)
from budgetbook.utils.date_parser import days_in_month
from budgetbook.utils.identifiers import generate_id

# Every day 1-31 occurs at least once within this many months
_MAX_MONTHS_AHEAD = 12


def next_occurrence(recurrence_date: int, today: date) -> date:
    """First date on or after ``today`` falling on ``recurrence_date``.

    Months that lack the day (e.g. the 31st in April) are skipped, matching
    the scheduler, which only fires on an exact day-of-month match.
    """
    month = today.replace(day=1)
    for _ in range(_MAX_MONTHS_AHEAD + 1):
        if recurrence_date <= days_in_month(month):
            candidate = month.replace(day=recurrence_date)
            if candidate >= today:
                return candidate
        month += relativedelta(months=1)
    raise ValueError(f"Day {recurrence_date} never occurs")


def monthly_recurring_total(payments: Iterable[RecurringPayment]) -> Decimal:
    """Sum of the amounts of active payments."""
    return sum((payment.amount for payment in payments if payment.is_active), Decimal("0"))


class RecurringPaymentService:
    """Service for managing recurring payments."""

    def __init__(self, store: EntityStore):
        """Initialize recurring payment service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_payment(
        self,
        amount: Any,
        category_id: str,
        description: str,
        recurrence_date: Any,
        is_active: bool = True,
    ) -> RecurringPayment:
        """Create a recurring payment.

        Args:
            amount: Positive amount charged each occurrence
            category_id: Category ID (weak reference)
            description: Description copied onto generated transactions
            recurrence_date: Day of month, 1-31
            is_active: Whether the scheduler should process the payment

        Returns:
            The created payment

        Raises:
            ValidationError: If any field is invalid
        """
        payment = RecurringPayment(
            id=generate_id(),
            amount=validate_amount(amount),
            category_id=validate_category_id(category_id),
            description=validate_description(description),
            recurrence_date=validate_recurrence_date(recurrence_date),
            is_active=validate_flag(is_active, "Active"),
        )
        self.store.add_recurring_payment(payment)
        return payment

    def get_payment(self, payment_id: str) -> Optional[RecurringPayment]:
        return self.store.get_recurring_payment(payment_id)

    def require_payment(self, payment_id: str) -> RecurringPayment:
        payment = self.store.get_recurring_payment(payment_id)
        if payment is None:
            raise NotFoundError(errors.recurring_payment_not_found(payment_id))
        return payment

    def update_payment(self, payment_id: str, patch: RecurringPaymentPatch) -> RecurringPayment:
        """Apply a partial update to a recurring payment.

        Raises:
            NotFoundError: If the payment doesn't exist
            ValidationError: If any supplied field is invalid
        """
        updated = apply_recurring_payment_patch(self.require_payment(payment_id), patch)
        self.store.update_recurring_payment(updated)
        return updated

    def toggle_active(self, payment_id: str) -> RecurringPayment:
        payment = self.require_payment(payment_id)
        return self.update_payment(payment_id, RecurringPaymentPatch(is_active=not payment.is_active))

    def delete_payment(self, payment_id: str) -> None:
        self.store.delete_recurring_payment(payment_id)

    def list_payments(self, active_only: bool = False) -> list[RecurringPayment]:
        payments = self.store.recurring_payments
        if active_only:
            return [payment for payment in payments if payment.is_active]
        return list(payments)

    def monthly_total(self) -> Decimal:
        return monthly_recurring_total(self.store.recurring_payments)

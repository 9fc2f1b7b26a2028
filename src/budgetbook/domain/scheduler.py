"""Recurring payment scheduler.

Evaluated on every load rather than on a timer. A payment fires at most once
per calendar day and only on its exact day of month; missed days are not
backfilled.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable

from budgetbook.domain.entities import (
    RecurringPayment,
    RecurringPaymentState,
    Transaction,
    TransactionType,
)
from budgetbook.domain.store import EntityStore
from budgetbook.utils.identifiers import generate_id

logger = logging.getLogger(__name__)


def _local_naive(moment: datetime) -> datetime:
    """Convert aware datetimes to naive local time; naive ones are already local."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def start_of_day(moment: datetime) -> datetime:
    return _local_naive(moment).replace(hour=0, minute=0, second=0, microsecond=0)


def payment_state(payment: RecurringPayment, now: datetime) -> RecurringPaymentState:
    """Where ``payment`` stands for the local calendar day of ``now``."""
    today = _local_naive(now).date()
    if not payment.is_active or today.day != payment.recurrence_date:
        return RecurringPaymentState.IDLE

    if payment.last_processed is not None:
        if _local_naive(payment.last_processed) >= start_of_day(now):
            return RecurringPaymentState.PROCESSED_TODAY
    return RecurringPaymentState.DUE_TODAY


def materialize_transaction(payment: RecurringPayment, today: date, transaction_id: str) -> Transaction:
    """Expense generated by one occurrence of ``payment``."""
    return Transaction(
        id=transaction_id,
        amount=payment.amount,
        category_id=payment.category_id,
        description=payment.description,
        date=today,
        type=TransactionType.EXPENSE,
    )


class RecurringPaymentScheduler:
    """Turns due recurring payments into transactions."""

    def __init__(self, store: EntityStore, id_factory: Callable[[], str] = generate_id):
        """Initialize scheduler.

        Args:
            store: Entity store instance
            id_factory: Callable producing IDs for generated transactions
        """
        self.store = store
        self.id_factory = id_factory

    def due_payments(self, now: datetime) -> list[RecurringPayment]:
        return [
            payment
            for payment in self.store.recurring_payments
            if payment_state(payment, now) == RecurringPaymentState.DUE_TODAY
        ]

    def check(self, now: datetime) -> list[Transaction]:
        """Process every payment due at ``now``.

        Each due payment appends exactly one expense dated today and records
        ``now`` as its ``last_processed`` marker, so calling this again on the
        same day does nothing.

        Returns:
            The transactions created by this call
        """
        today = _local_naive(now).date()
        created = []
        for payment in self.due_payments(now):
            transaction = materialize_transaction(payment, today, self.id_factory())
            self.store.add_transaction(transaction)
            self.store.update_recurring_payment(replace(payment, last_processed=now))
            logger.info(
                "Recurring payment %s processed: %s %s",
                payment.id,
                payment.description,
                payment.amount,
            )
            created.append(transaction)
        return created

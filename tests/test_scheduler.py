"""Tests for the recurring payment scheduler."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from budgetbook.domain.entities import (
    RecurringPayment,
    RecurringPaymentState,
    TransactionType,
)
from budgetbook.domain.scheduler import (
    RecurringPaymentScheduler,
    materialize_transaction,
    payment_state,
    start_of_day,
)
from budgetbook.domain.store import EntityStore


def make_payment(
    payment_id="r1",
    amount="1200",
    recurrence_date=15,
    is_active=True,
    last_processed=None,
):
    return RecurringPayment(
        id=payment_id,
        amount=Decimal(amount),
        category_id="c1",
        description="Rent",
        recurrence_date=recurrence_date,
        is_active=is_active,
        last_processed=last_processed,
    )


@pytest.fixture
def scheduler(store):
    counter = iter(range(1, 1000))
    return RecurringPaymentScheduler(store, id_factory=lambda: f"gen{next(counter)}")


class TestPaymentState:
    """Tests for payment_state."""

    def test_due_on_matching_day(self):
        assert payment_state(make_payment(), datetime(2024, 3, 15, 9)) == RecurringPaymentState.DUE_TODAY

    def test_idle_on_other_days(self):
        assert payment_state(make_payment(), datetime(2024, 3, 14, 9)) == RecurringPaymentState.IDLE

    def test_inactive_is_idle(self):
        payment = make_payment(is_active=False)
        assert payment_state(payment, datetime(2024, 3, 15, 9)) == RecurringPaymentState.IDLE

    def test_processed_earlier_today(self):
        payment = make_payment(last_processed=datetime(2024, 3, 15, 0, 5))
        assert payment_state(payment, datetime(2024, 3, 15, 23)) == RecurringPaymentState.PROCESSED_TODAY

    def test_processed_last_month_is_due_again(self):
        payment = make_payment(last_processed=datetime(2024, 2, 15, 8))
        assert payment_state(payment, datetime(2024, 3, 15, 8)) == RecurringPaymentState.DUE_TODAY

    def test_aware_last_processed_is_compared_in_local_time(self):
        now = datetime(2024, 3, 15, 12)
        processed = now.astimezone(timezone.utc)
        payment = make_payment(last_processed=processed)

        assert payment_state(payment, now) == RecurringPaymentState.PROCESSED_TODAY

    def test_day_31_idle_in_short_month(self):
        payment = make_payment(recurrence_date=31)
        for day in range(1, 31):
            assert payment_state(payment, datetime(2024, 4, day)) == RecurringPaymentState.IDLE


def test_start_of_day():
    assert start_of_day(datetime(2024, 3, 15, 17, 45, 12, 999)) == datetime(2024, 3, 15)


def test_materialize_transaction():
    transaction = materialize_transaction(make_payment(), date(2024, 3, 15), "t9")

    assert transaction.id == "t9"
    assert transaction.amount == Decimal("1200")
    assert transaction.category_id == "c1"
    assert transaction.description == "Rent"
    assert transaction.date == date(2024, 3, 15)
    assert transaction.type == TransactionType.EXPENSE


class TestSchedulerCheck:
    """Tests for RecurringPaymentScheduler.check."""

    def test_fires_once_on_matching_day(self, store, scheduler):
        store.add_recurring_payment(make_payment())
        now = datetime(2024, 3, 15, 8, 30)

        created = scheduler.check(now)

        assert len(created) == 1
        assert store.transactions == tuple(created)
        assert created[0].date == date(2024, 3, 15)
        assert store.get_recurring_payment("r1").last_processed == now

    def test_second_check_same_day_is_noop(self, store, scheduler):
        store.add_recurring_payment(make_payment())
        scheduler.check(datetime(2024, 3, 15, 8))

        assert scheduler.check(datetime(2024, 3, 15, 22)) == []
        assert len(store.transactions) == 1

    def test_fires_again_next_month(self, store, scheduler):
        store.add_recurring_payment(make_payment())
        scheduler.check(datetime(2024, 3, 15, 8))

        created = scheduler.check(datetime(2024, 4, 15, 8))

        assert len(created) == 1
        assert len(store.transactions) == 2

    def test_other_days_do_nothing(self, store, scheduler):
        store.add_recurring_payment(make_payment())

        for day in (1, 14, 16, 31):
            assert scheduler.check(datetime(2024, 3, day, 8)) == []
        assert store.transactions == ()

    def test_missed_day_not_backfilled(self, store, scheduler):
        store.add_recurring_payment(make_payment())

        assert scheduler.check(datetime(2024, 3, 16, 8)) == []
        assert store.get_recurring_payment("r1").last_processed is None

    def test_inactive_never_fires(self, store, scheduler):
        store.add_recurring_payment(make_payment(is_active=False))

        assert scheduler.check(datetime(2024, 3, 15, 8)) == []
        assert store.get_recurring_payment("r1").last_processed is None

    def test_processes_each_due_payment(self, store, scheduler):
        store.add_recurring_payment(make_payment("a"))
        store.add_recurring_payment(make_payment("b", amount="15"))
        store.add_recurring_payment(make_payment("c", recurrence_date=1))

        created = scheduler.check(datetime(2024, 3, 15, 8))

        assert sorted(t.amount for t in created) == [Decimal("15"), Decimal("1200")]
        assert store.get_recurring_payment("c").last_processed is None

    def test_aware_now(self, store, scheduler):
        store.add_recurring_payment(make_payment())
        local_noon = datetime(2024, 3, 15, 12).astimezone()

        created = scheduler.check(local_noon)

        assert len(created) == 1
        assert scheduler.check(local_noon + timedelta(hours=1)) == []

    def test_results_survive_reload(self, temp_db, store, scheduler):
        store.add_recurring_payment(make_payment())
        scheduler.check(datetime(2024, 3, 15, 8))

        reloaded = EntityStore(temp_db)
        reloaded.load()

        assert len(reloaded.transactions) == 1
        assert reloaded.get_recurring_payment("r1").last_processed == datetime(2024, 3, 15, 8)
        assert RecurringPaymentScheduler(reloaded).check(datetime(2024, 3, 15, 20)) == []

    def test_due_payments(self, store, scheduler):
        store.add_recurring_payment(make_payment("a"))
        store.add_recurring_payment(make_payment("b", last_processed=datetime(2024, 3, 15, 1)))

        due = scheduler.due_payments(datetime(2024, 3, 15, 8))

        assert [p.id for p in due] == ["a"]

"""Budget aggregation engine.

Module-level functions are pure: their results depend only on their
arguments, never on the clock or on stored state, so they can be recomputed
at any time. ``SummaryService`` snapshots the entity store and feeds the
snapshot to them.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from budgetbook.domain.entities import (
    BudgetSummary,
    Category,
    CategorySpending,
    CategorySummary,
    Dashboard,
    DashboardInsights,
    MonthlyTotals,
    SpendingTrend,
    Transaction,
    TransactionTotals,
    TransactionType,
)
from budgetbook.domain.store import EntityStore
from budgetbook.utils.date_parser import days_in_month, get_month_range, is_same_month

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TOP_SPENDING_LIMIT = 3
RECENT_TRANSACTIONS_LIMIT = 5
CATEGORY_SPENDING_LIMIT = 10


def _sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((transaction.amount for transaction in transactions), ZERO)


def get_month_transactions(transactions: Iterable[Transaction], month: date) -> list[Transaction]:
    """Transactions dated within the calendar month containing ``month``.

    Both the first and the last day of the month are included.
    """
    start, end = get_month_range(month)
    return [transaction for transaction in transactions if start <= transaction.date <= end]


def compute_category_summary(
    category: Category, transactions: Iterable[Transaction], month: date
) -> CategorySummary:
    """Budget versus spend for one category in one month.

    Only expenses count towards ``spent``; income recorded against the
    category never offsets it.
    """
    spent = _sum_amounts(
        transaction
        for transaction in get_month_transactions(transactions, month)
        if transaction.category_id == category.id and transaction.type == TransactionType.EXPENSE
    )
    budget = category.budget
    percentage_used = spent / budget * HUNDRED if budget > 0 else ZERO

    return CategorySummary(
        category_id=category.id,
        category_name=category.name,
        budget=budget,
        spent=spent,
        remaining=budget - spent,
        percentage_used=percentage_used,
        is_over_budget=spent > budget,
    )


def compute_budget_summary(
    categories: Sequence[Category], transactions: Sequence[Transaction], month: date
) -> BudgetSummary:
    """Summaries for every category, in input order, plus totals.

    Transactions whose category is not in ``categories`` are not counted.
    """
    month_transactions = get_month_transactions(transactions, month)
    category_summaries = tuple(
        compute_category_summary(category, month_transactions, month) for category in categories
    )
    total_budget = sum((category.budget for category in categories), ZERO)
    total_spent = sum((summary.spent for summary in category_summaries), ZERO)

    return BudgetSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        category_summaries=category_summaries,
    )


def days_elapsed_in_month(month: date, today: date) -> int:
    """Days of ``month`` that have passed as of ``today``.

    The current month counts up to today's day; a past month counts in full
    and a future month not at all.
    """
    total_days = days_in_month(month)
    if is_same_month(month, today):
        return min(today.day, total_days)
    if month.replace(day=1) < today.replace(day=1):
        return total_days
    return 0


def budget_health_score(total_spent: Decimal, total_budget: Decimal) -> int:
    """Score from 0 to 100, falling as the budget is consumed.

    With no budget at all the score is 100.
    """
    if total_budget <= 0:
        return 100
    percent_used = (total_spent / total_budget * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, 100 - int(percent_used)))


def compute_dashboard_insights(
    summary: BudgetSummary,
    today: date,
    month: date,
    days_elapsed: Optional[int] = None,
) -> DashboardInsights:
    """Spending pace, projection and health metrics for one month.

    Args:
        summary: Budget summary for ``month``
        today: Reference date, used only to derive ``days_elapsed`` when omitted
        month: Any date within the month being analysed
        days_elapsed: Days of the month to spread the spend over

    Divisions by zero yield zero rather than an error.
    """
    if days_elapsed is None:
        days_elapsed = days_elapsed_in_month(month, today)
    total_days = days_in_month(month)

    daily_spending_rate = summary.total_spent / days_elapsed if days_elapsed > 0 else ZERO
    projected_monthly_spending = daily_spending_rate * total_days
    daily_budget_rate = summary.total_budget / total_days
    spending_velocity = daily_spending_rate / daily_budget_rate if daily_budget_rate > 0 else ZERO

    # sorted() is stable, so equal spend keeps the input category order
    top_spending = sorted(
        (category for category in summary.category_summaries if category.budget > 0),
        key=lambda category: category.spent,
        reverse=True,
    )[:TOP_SPENDING_LIMIT]

    if projected_monthly_spending > summary.total_budget:
        trend = SpendingTrend.INCREASING
    else:
        trend = SpendingTrend.DECREASING

    return DashboardInsights(
        days_elapsed=days_elapsed,
        total_days_in_month=total_days,
        daily_spending_rate=daily_spending_rate,
        projected_monthly_spending=projected_monthly_spending,
        daily_budget_rate=daily_budget_rate,
        spending_velocity=spending_velocity,
        top_spending_categories=tuple(top_spending),
        budget_health_score=budget_health_score(summary.total_spent, summary.total_budget),
        is_over_spending=daily_spending_rate > daily_budget_rate,
        spending_trend=trend,
    )


def compute_transaction_totals(transactions: Iterable[Transaction]) -> TransactionTotals:
    """Income, expense and net totals over ``transactions``."""
    transactions = list(transactions)
    income = _sum_amounts(t for t in transactions if t.type == TransactionType.INCOME)
    expenses = _sum_amounts(t for t in transactions if t.type == TransactionType.EXPENSE)
    return TransactionTotals(income=income, expenses=expenses, net=income - expenses)


def recent_transactions(
    transactions: Iterable[Transaction], month: date, limit: int = RECENT_TRANSACTIONS_LIMIT
) -> list[Transaction]:
    """Newest transactions of the month first."""
    month_transactions = get_month_transactions(transactions, month)
    return sorted(month_transactions, key=lambda t: t.date, reverse=True)[:limit]


def compute_monthly_totals(transactions: Iterable[Transaction], year: int) -> list[MonthlyTotals]:
    """Income and expenses for each month of ``year``, January first."""
    transactions = list(transactions)
    results = []
    for month_number in range(1, 13):
        month = date(year, month_number, 1)
        totals = compute_transaction_totals(get_month_transactions(transactions, month))
        results.append(
            MonthlyTotals(
                month=month,
                income=totals.income,
                expenses=totals.expenses,
                net=totals.net,
            )
        )
    return results


def compute_category_spending(
    categories: Sequence[Category],
    transactions: Iterable[Transaction],
    limit: int = CATEGORY_SPENDING_LIMIT,
) -> list[CategorySpending]:
    """All-time expense totals per known category, largest first.

    Expenses pointing at unknown categories are skipped.
    """
    categories_by_id = {category.id: category for category in categories}
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        if transaction.category_id not in categories_by_id:
            continue
        totals[transaction.category_id] = totals.get(transaction.category_id, ZERO) + transaction.amount

    spending = [
        CategorySpending(
            category_id=category_id,
            category_name=categories_by_id[category_id].name,
            color=categories_by_id[category_id].color,
            icon=categories_by_id[category_id].icon,
            amount=amount,
        )
        for category_id, amount in totals.items()
    ]
    spending.sort(key=lambda item: item.amount, reverse=True)
    return spending[:limit]


class SummaryService:
    """Service for building summaries from the current store snapshot."""

    def __init__(self, store: EntityStore):
        """Initialize summary service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def budget_summary(self, month: date) -> BudgetSummary:
        return compute_budget_summary(self.store.categories, self.store.transactions, month)

    def dashboard(self, month: date, today: date) -> Dashboard:
        """Build the dashboard view for ``month``.

        Args:
            month: Any date within the selected month
            today: Reference date for the spending pace

        Returns:
            Dashboard with current and previous month summaries and insights
        """
        summary = self.budget_summary(month)
        previous_month = month.replace(day=1) - relativedelta(months=1)
        return Dashboard(
            month=month.replace(day=1),
            summary=summary,
            previous_summary=self.budget_summary(previous_month),
            insights=compute_dashboard_insights(summary, today, month),
            recent_transactions=tuple(recent_transactions(self.store.transactions, month)),
        )

    def monthly_totals(self, year: int) -> list[MonthlyTotals]:
        return compute_monthly_totals(self.store.transactions, year)

    def category_spending(self, limit: int = CATEGORY_SPENDING_LIMIT) -> list[CategorySpending]:
        return compute_category_spending(self.store.categories, self.store.transactions, limit)

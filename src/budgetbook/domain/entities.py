"""Domain model entities for budgetbook.

Stored entities (categories, transactions, recurring payments) are immutable
records; every change produces a new instance. Summary and insight types are
derived view models computed on demand and never persisted.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    EXPENSE = "expense"
    INCOME = "income"


class SpendingTrend(str, Enum):
    """Whether projected spending exceeds the month's budget."""

    INCREASING = "increasing"
    DECREASING = "decreasing"


class RecurringPaymentState(str, Enum):
    """Scheduler state of a recurring payment for a given day."""

    IDLE = "idle"
    DUE_TODAY = "due_today"
    PROCESSED_TODAY = "processed_today"


@dataclass(frozen=True)
class Category:
    """Spending category with a monthly budget."""

    id: str
    name: str
    budget: Decimal
    color: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Dated income or expense record.

    ``category_id`` is a weak reference: it is never checked against the
    category collection and may point at a deleted category.
    """

    id: str
    amount: Decimal
    category_id: str
    description: str
    date: date
    type: TransactionType


@dataclass(frozen=True)
class RecurringPayment:
    """Template that produces an expense on a fixed day of the month."""

    id: str
    amount: Decimal
    category_id: str
    description: str
    recurrence_date: int
    is_active: bool = True
    last_processed: Optional[datetime] = None


@dataclass(frozen=True)
class CategorySummary:
    """Budget versus actual figures for one category over one month."""

    category_id: str
    category_name: str
    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    is_over_budget: bool


@dataclass(frozen=True)
class BudgetSummary:
    """Aggregated figures for a set of categories over one month."""

    total_budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    category_summaries: tuple[CategorySummary, ...]


@dataclass(frozen=True)
class DashboardInsights:
    """Spending pace and health metrics derived from a BudgetSummary."""

    days_elapsed: int
    total_days_in_month: int
    daily_spending_rate: Decimal
    projected_monthly_spending: Decimal
    daily_budget_rate: Decimal
    spending_velocity: Decimal
    top_spending_categories: tuple[CategorySummary, ...]
    budget_health_score: int
    is_over_spending: bool
    spending_trend: SpendingTrend


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view shows for a selected month."""

    month: date
    summary: BudgetSummary
    previous_summary: BudgetSummary
    insights: DashboardInsights
    recent_transactions: tuple[Transaction, ...]


@dataclass(frozen=True)
class TransactionTotals:
    """Income, expense and net totals over a set of transactions."""

    income: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class MonthlyTotals:
    """Income and expense totals for one calendar month."""

    month: date
    income: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class CategorySpending:
    """Expense total attributed to a single category."""

    category_id: str
    category_name: str
    color: str
    icon: Optional[str]
    amount: Decimal

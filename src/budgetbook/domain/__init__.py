"""Domain layer for budgetbook application."""

from importlib import import_module

# Services are imported lazily: the database mappers import domain entities,
# and the services import the mappers through the entity store.
_SERVICES = {
    "EntityStore": "budgetbook.domain.store",
    "CategoryService": "budgetbook.domain.category",
    "TransactionService": "budgetbook.domain.transaction",
    "RecurringPaymentService": "budgetbook.domain.recurring",
    "RecurringPaymentScheduler": "budgetbook.domain.scheduler",
    "SummaryService": "budgetbook.domain.summary",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

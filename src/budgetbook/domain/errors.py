"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid user input rejected before any mutation."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate record ID."""


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recurring_payment_not_found(payment_id: str) -> str:
    """Return message for missing recurring payment."""
    return f"Recurring payment {payment_id} not found"


def duplicate_record_id(record_id: str, key: str) -> str:
    """Return message for an ID that already exists in a collection."""
    return f"Record {record_id} already exists in {key}"


def unknown_suggestion(name: str) -> str:
    """Return message for a quick-add name that is not a suggestion."""
    return f"'{name}' is not a suggested category"

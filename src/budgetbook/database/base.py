"""Abstract key-value storage interface."""

from abc import ABC, abstractmethod
from typing import Any

# Logical keys of the three persisted collections
CATEGORIES_KEY = "budget_categories"
TRANSACTIONS_KEY = "budget_transactions"
RECURRING_PAYMENTS_KEY = "budget_recurring_payments"

COLLECTION_KEYS = (CATEGORIES_KEY, TRANSACTIONS_KEY, RECURRING_PAYMENTS_KEY)


class Database(ABC):
    """Abstract database interface for budgetbook.

    Each collection is stored whole under one key as a JSON array of records.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def read_collection(self, key: str) -> list[dict[str, Any]]:
        """Read all records stored under ``key``.

        Returns an empty list when the key is missing or its payload cannot be
        parsed as a JSON array. Never raises for corrupt data.
        """
        pass

    @abstractmethod
    def write_collection(self, key: str, records: list[dict[str, Any]]) -> bool:
        """Overwrite ``key`` with the full collection.

        Failures are logged and reported through the return value instead of
        being raised.
        """
        pass

    @abstractmethod
    def delete_collection(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass

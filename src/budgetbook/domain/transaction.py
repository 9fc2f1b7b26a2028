"""Transaction domain service."""

from datetime import date
from typing import Any, Optional

from budgetbook.domain import errors
from budgetbook.domain.entities import Transaction, TransactionTotals, TransactionType
from budgetbook.domain.errors import NotFoundError
from budgetbook.domain.patches import TransactionPatch, apply_transaction_patch
from budgetbook.domain.store import EntityStore
from budgetbook.domain.summary import compute_transaction_totals
from budgetbook.domain.validation import (
    validate_amount,
    validate_category_id,
    validate_date,
    validate_description,
    validate_transaction_type,
)
from budgetbook.utils.identifiers import generate_id


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, store: EntityStore):
        """Initialize transaction service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_transaction(
        self,
        amount: Any,
        category_id: str,
        description: str,
        date: date,
        type: Any = TransactionType.EXPENSE,
    ) -> Transaction:
        """Create a transaction.

        The category is a weak reference and is not checked for existence.

        Args:
            amount: Positive amount
            category_id: Category ID
            description: Description
            date: Transaction date
            type: "expense" or "income"

        Returns:
            The created transaction

        Raises:
            ValidationError: If any field is invalid
        """
        transaction = Transaction(
            id=generate_id(),
            amount=validate_amount(amount),
            category_id=validate_category_id(category_id),
            description=validate_description(description),
            date=validate_date(date),
            type=validate_transaction_type(type),
        )
        self.store.add_transaction(transaction)
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.store.get_transaction(transaction_id)

    def update_transaction(self, transaction_id: str, patch: TransactionPatch) -> Transaction:
        """Apply a partial update to a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If any supplied field is invalid
        """
        transaction = self.store.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(errors.transaction_not_found(transaction_id))

        updated = apply_transaction_patch(transaction, patch)
        self.store.update_transaction(updated)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.store.delete_transaction(transaction_id)

    def list_transactions(
        self,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        type: Optional[TransactionType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with filters.

        Args:
            search: Case-insensitive substring of the description
            category_id: Only transactions referencing this category
            type: Only expenses or only income
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Returns:
            Matching transactions in stored order
        """
        needle = search.strip().lower() if search else None

        def matches(transaction: Transaction) -> bool:
            if needle and needle not in transaction.description.lower():
                return False
            if category_id is not None and transaction.category_id != category_id:
                return False
            if type is not None and transaction.type != type:
                return False
            if start_date is not None and transaction.date < start_date:
                return False
            if end_date is not None and transaction.date > end_date:
                return False
            return True

        return [transaction for transaction in self.store.transactions if matches(transaction)]

    def totals(self, transactions: Optional[list[Transaction]] = None) -> TransactionTotals:
        """Income, expense and net totals (all stored transactions by default)."""
        if transactions is None:
            transactions = list(self.store.transactions)
        return compute_transaction_totals(transactions)

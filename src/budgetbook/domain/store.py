"""Entity store holding the three persisted collections."""

import logging
from typing import Any, Callable, Optional

from budgetbook.database.base import (
    CATEGORIES_KEY,
    COLLECTION_KEYS,
    RECURRING_PAYMENTS_KEY,
    TRANSACTIONS_KEY,
    Database,
)
from budgetbook.database.mappers import (
    category_to_record,
    record_to_category,
    record_to_recurring_payment,
    record_to_transaction,
    records_to_entities,
    recurring_payment_to_record,
    transaction_to_record,
)
from budgetbook.domain import errors
from budgetbook.domain.entities import Category, RecurringPayment, Transaction
from budgetbook.domain.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

CollectionListener = Callable[[str], None]

_MAPPERS: dict[str, tuple[Callable[[Any], dict], Callable[[dict], Any]]] = {
    CATEGORIES_KEY: (category_to_record, record_to_category),
    TRANSACTIONS_KEY: (transaction_to_record, record_to_transaction),
    RECURRING_PAYMENTS_KEY: (recurring_payment_to_record, record_to_recurring_payment),
}


class EntityStore:
    """In-memory categories, transactions and recurring payments.

    Every mutation replaces the whole affected collection, writes it to the
    database and then notifies subscribers with the collection key. The
    in-memory state stays authoritative for the session even if the write
    fails; the database layer logs such failures.
    """

    def __init__(self, db: Database):
        """Initialize entity store.

        Args:
            db: Database instance
        """
        self.db = db
        self._collections: dict[str, tuple] = {key: () for key in COLLECTION_KEYS}
        self._listeners: list[CollectionListener] = []

    def load(self) -> None:
        """Replace in-memory state with the persisted collections."""
        for key, (_, from_record) in _MAPPERS.items():
            records = self.db.read_collection(key)
            self._collections[key] = tuple(records_to_entities(records, from_record, key))
        logger.info(
            "Loaded %d categories, %d transactions, %d recurring payments",
            len(self.categories),
            len(self.transactions),
            len(self.recurring_payments),
        )

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._collections[CATEGORIES_KEY]

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._collections[TRANSACTIONS_KEY]

    @property
    def recurring_payments(self) -> tuple[RecurringPayment, ...]:
        return self._collections[RECURRING_PAYMENTS_KEY]

    def is_empty(self) -> bool:
        return not any(self._collections.values())

    def subscribe(self, listener: CollectionListener) -> Callable[[], None]:
        """Call ``listener(key)`` after each change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Category operations
    def get_category(self, category_id: str) -> Optional[Category]:
        return self._find(CATEGORIES_KEY, category_id)

    def add_category(self, category: Category) -> None:
        self._add(CATEGORIES_KEY, category)

    def update_category(self, category: Category) -> None:
        self._replace(CATEGORIES_KEY, category, errors.category_not_found(category.id))

    def delete_category(self, category_id: str) -> None:
        # Transactions keep their category_id and render as uncategorized
        self._remove(CATEGORIES_KEY, category_id, errors.category_not_found(category_id))

    # Transaction operations
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._find(TRANSACTIONS_KEY, transaction_id)

    def add_transaction(self, transaction: Transaction) -> None:
        self._add(TRANSACTIONS_KEY, transaction)

    def update_transaction(self, transaction: Transaction) -> None:
        self._replace(TRANSACTIONS_KEY, transaction, errors.transaction_not_found(transaction.id))

    def delete_transaction(self, transaction_id: str) -> None:
        self._remove(TRANSACTIONS_KEY, transaction_id, errors.transaction_not_found(transaction_id))

    # Recurring payment operations
    def get_recurring_payment(self, payment_id: str) -> Optional[RecurringPayment]:
        return self._find(RECURRING_PAYMENTS_KEY, payment_id)

    def add_recurring_payment(self, payment: RecurringPayment) -> None:
        self._add(RECURRING_PAYMENTS_KEY, payment)

    def update_recurring_payment(self, payment: RecurringPayment) -> None:
        self._replace(
            RECURRING_PAYMENTS_KEY, payment, errors.recurring_payment_not_found(payment.id)
        )

    def delete_recurring_payment(self, payment_id: str) -> None:
        self._remove(
            RECURRING_PAYMENTS_KEY, payment_id, errors.recurring_payment_not_found(payment_id)
        )

    def clear(self) -> None:
        """Remove every record from memory and storage."""
        for key in COLLECTION_KEYS:
            self._collections[key] = ()
            self.db.delete_collection(key)
            self._notify(key)
        logger.info("Cleared all collections")

    def _find(self, key: str, entity_id: str) -> Any:
        for item in self._collections[key]:
            if item.id == entity_id:
                return item
        return None

    def _add(self, key: str, entity: Any) -> None:
        if self._find(key, entity.id) is not None:
            raise ConflictError(errors.duplicate_record_id(entity.id, key))
        self._commit(key, self._collections[key] + (entity,))

    def _replace(self, key: str, entity: Any, missing_message: str) -> None:
        if self._find(key, entity.id) is None:
            raise NotFoundError(missing_message)
        self._commit(
            key, tuple(entity if item.id == entity.id else item for item in self._collections[key])
        )

    def _remove(self, key: str, entity_id: str, missing_message: str) -> None:
        if self._find(key, entity_id) is None:
            raise NotFoundError(missing_message)
        self._commit(key, tuple(item for item in self._collections[key] if item.id != entity_id))

    def _commit(self, key: str, items: tuple) -> None:
        self._collections[key] = items
        to_record = _MAPPERS[key][0]
        self.db.write_collection(key, [to_record(item) for item in items])
        self._notify(key)

    def _notify(self, key: str) -> None:
        for listener in list(self._listeners):
            listener(key)

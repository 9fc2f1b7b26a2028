"""Shared pytest fixtures for budgetbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from budgetbook.database.factories import create_sqlite_database
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import Category, Transaction, TransactionType
from budgetbook.domain.recurring import RecurringPaymentService
from budgetbook.domain.store import EntityStore
from budgetbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_db):
    """Create a loaded EntityStore backed by the temporary database."""
    entity_store = EntityStore(temp_db)
    entity_store.load()
    return entity_store


@pytest.fixture
def category_service(store):
    """Create a CategoryService over the temporary store."""
    return CategoryService(store)


@pytest.fixture
def transaction_service(store):
    """Create a TransactionService over the temporary store."""
    return TransactionService(store)


@pytest.fixture
def recurring_service(store):
    """Create a RecurringPaymentService over the temporary store."""
    return RecurringPaymentService(store)


@pytest.fixture
def sample_categories(category_service):
    """Create a few categories and return them keyed by name."""
    return {
        "Groceries": category_service.create_category(name="Groceries", budget=Decimal("800")),
        "Rent": category_service.create_category(name="Rent", budget=Decimal("1500")),
        "Fun": category_service.create_category(name="Fun", budget=Decimal("0")),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def make_category(category_id="c1", name="Groceries", budget="100", color="#4CAF50", icon=None):
    """Build a Category entity without going through a service."""
    return Category(id=category_id, name=name, budget=Decimal(budget), color=color, icon=icon)


def make_transaction(
    transaction_id="t1",
    amount="10",
    category_id="c1",
    day=date(2024, 3, 15),
    type=TransactionType.EXPENSE,
    description="Test",
):
    """Build a Transaction entity without going through a service."""
    return Transaction(
        id=transaction_id,
        amount=Decimal(amount),
        category_id=category_id,
        description=description,
        date=day,
        type=type,
    )

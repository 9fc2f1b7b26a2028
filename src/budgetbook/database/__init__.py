"""Database layer for budgetbook application."""

from budgetbook.database.base import Database
from budgetbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

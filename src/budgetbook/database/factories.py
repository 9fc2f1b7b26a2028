"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from budgetbook.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "BUDGETBOOK_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".budgetbook"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the database file: explicit path, then BUDGETBOOK_DB_PATH, then the default.

    The parent directory is created if it does not exist yet.
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        path = DEFAULT_DB_DIR / "budgetbook.db"
    else:
        path = Path(database_path).expanduser()

    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BUDGETBOOK_DB_PATH
            environment variable, then defaults to ~/.budgetbook/budgetbook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_url = f"sqlite:///{resolve_database_path(database_path)}"
    return SQLAlchemyDatabase(database_url)

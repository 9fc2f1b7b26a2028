"""Generic SQLAlchemy database implementation."""

import json
import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budgetbook.database.base import Database
from budgetbook.database.models import StoredCollection, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def read_collection(self, key: str) -> list[dict[str, Any]]:
        """Read all records stored under ``key``."""
        session = self._get_session()
        try:
            # Another process may have rewritten the row since it was last loaded
            row = session.get(StoredCollection, key, populate_existing=True)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to read %s: %s", key, e)
            return []

        if row is None:
            return []

        try:
            data = json.loads(row.payload)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt payload for %s: %s", key, e)
            return []

        if not isinstance(data, list):
            logger.warning("Ignoring payload for %s: expected a JSON array, got %s", key, type(data).__name__)
            return []
        return data

    def write_collection(self, key: str, records: list[dict[str, Any]]) -> bool:
        """Overwrite ``key`` with the full collection."""
        payload = json.dumps(records)
        session = self._get_session()
        try:
            row = session.get(StoredCollection, key)
            if row is None:
                session.add(StoredCollection(key=key, payload=payload))
            else:
                row.payload = payload
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to save %s: %s", key, e)
            return False

        logger.debug("Saved %d record(s) to %s", len(records), key)
        return True

    def delete_collection(self, key: str) -> None:
        """Remove ``key`` if present."""
        session = self._get_session()
        try:
            row = session.get(StoredCollection, key)
            if row is not None:
                session.delete(row)
                session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to clear %s: %s", key, e)

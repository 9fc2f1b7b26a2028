"""Tests for the key-value database layer."""

import json

from budgetbook.database.base import (
    CATEGORIES_KEY,
    RECURRING_PAYMENTS_KEY,
    TRANSACTIONS_KEY,
)
from budgetbook.database.factories import (
    DB_PATH_ENV_VAR,
    create_sqlite_database,
    resolve_database_path,
)
from budgetbook.database.models import StoredCollection
from budgetbook.domain.store import EntityStore


def store_raw_payload(db, key, payload):
    """Write ``payload`` under ``key`` bypassing JSON encoding."""
    session = db._get_session()
    row = session.get(StoredCollection, key)
    if row is None:
        session.add(StoredCollection(key=key, payload=payload))
    else:
        row.payload = payload
    session.commit()


def test_missing_key_reads_empty(temp_db):
    assert temp_db.read_collection(CATEGORIES_KEY) == []


def test_write_then_read(temp_db):
    records = [{"id": "a", "n": 1}, {"id": "b", "n": 2}]

    assert temp_db.write_collection(TRANSACTIONS_KEY, records) is True
    assert temp_db.read_collection(TRANSACTIONS_KEY) == records


def test_write_overwrites_whole_collection(temp_db):
    temp_db.write_collection(TRANSACTIONS_KEY, [{"id": "a"}, {"id": "b"}])
    temp_db.write_collection(TRANSACTIONS_KEY, [{"id": "c"}])

    assert temp_db.read_collection(TRANSACTIONS_KEY) == [{"id": "c"}]


def test_keys_are_independent(temp_db):
    temp_db.write_collection(CATEGORIES_KEY, [{"id": "a"}])

    assert temp_db.read_collection(RECURRING_PAYMENTS_KEY) == []


def test_corrupt_payload_reads_empty(temp_db):
    store_raw_payload(temp_db, CATEGORIES_KEY, "{not json")

    assert temp_db.read_collection(CATEGORIES_KEY) == []


def test_non_array_payload_reads_empty(temp_db):
    store_raw_payload(temp_db, CATEGORIES_KEY, json.dumps({"id": "a"}))

    assert temp_db.read_collection(CATEGORIES_KEY) == []


def test_corrupt_payload_loads_empty_store(temp_db):
    store_raw_payload(temp_db, TRANSACTIONS_KEY, "]]]")
    temp_db.write_collection(
        CATEGORIES_KEY, [{"id": "c1", "name": "Rent", "budget": "100", "color": "#000"}]
    )

    store = EntityStore(temp_db)
    store.load()

    assert store.transactions == ()
    assert [c.name for c in store.categories] == ["Rent"]


def test_delete_collection(temp_db):
    temp_db.write_collection(CATEGORIES_KEY, [{"id": "a"}])

    temp_db.delete_collection(CATEGORIES_KEY)
    temp_db.delete_collection(CATEGORIES_KEY)

    assert temp_db.read_collection(CATEGORIES_KEY) == []


def test_data_visible_to_second_connection(temp_db):
    temp_db.write_collection(CATEGORIES_KEY, [{"id": "a"}])

    other = create_sqlite_database(database_path=temp_db.database_path)
    try:
        assert other.read_collection(CATEGORIES_KEY) == [{"id": "a"}]
    finally:
        other.disconnect()


def test_factory_uses_env_var(tmp_path, monkeypatch):
    db_path = tmp_path / "from_env.db"
    monkeypatch.setenv(DB_PATH_ENV_VAR, str(db_path))

    db = create_sqlite_database()
    db.write_collection(CATEGORIES_KEY, [])
    db.disconnect()

    assert db.database_url == f"sqlite:///{db_path}"
    assert db_path.exists()


def test_explicit_path_wins_over_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv(DB_PATH_ENV_VAR, str(tmp_path / "env.db"))

    db = create_sqlite_database(database_path=str(tmp_path / "explicit.db"))

    assert db.database_url.endswith("explicit.db")


def test_resolve_database_path_creates_parent(tmp_path):
    target = tmp_path / "nested" / "dir" / "budget.db"

    assert resolve_database_path(str(target)) == target
    assert target.parent.is_dir()


def test_resolve_database_path_expands_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert resolve_database_path("~/books/budget.db") == tmp_path / "books" / "budget.db"


def test_negative_stored_amount_not_loaded(temp_db):
    temp_db.write_collection(
        TRANSACTIONS_KEY,
        [
            {"id": "t1", "amount": "-50", "categoryId": "c1", "date": "2024-03-01", "type": "expense"},
            {"id": "t2", "amount": "25", "categoryId": "c1", "date": "2024-03-02", "type": "expense"},
        ],
    )

    store = EntityStore(temp_db)
    store.load()

    assert [t.id for t in store.transactions] == ["t2"]

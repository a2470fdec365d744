import json
import pytest

from antigone_study import store


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_study.db")
    return db_path


@pytest.fixture
def roster_file(tmp_path):
    """A small roster file with one known student."""
    path = tmp_path / "students.json"
    path.write_text(json.dumps([
        {"id": 7, "name": "أليس", "nameFr": "Alice", "username": "alice", "password": "correctpw"},
        {"id": 8, "name": "بوب", "nameFr": "Bob", "username": "Bob", "password": "Secret"},
    ], ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clear_store_listeners():
    yield
    store.reset_subscriptions()

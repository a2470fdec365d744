"""Tests for the key-value store adapter."""
from antigone_study.db import init_db
from antigone_study.store import (
    STORAGE_KEYS, get_item, set_item, remove_item, read_json, write_json, subscribe,
    reset_subscriptions,
)


def test_get_item_missing_returns_none(tmp_db):
    init_db(tmp_db)
    assert get_item(tmp_db, "nope") is None


def test_set_then_get_item(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, "k", "v1")
    assert get_item(tmp_db, "k") == "v1"
    set_item(tmp_db, "k", "v2")
    assert get_item(tmp_db, "k") == "v2"


def test_set_item_is_durable_across_connections(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, "k", "v")
    init_db(tmp_db)
    assert get_item(tmp_db, "k") == "v"


def test_remove_item(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, "k", "v")
    remove_item(tmp_db, "k")
    assert get_item(tmp_db, "k") is None


def test_remove_missing_item_is_noop(tmp_db):
    init_db(tmp_db)
    remove_item(tmp_db, "never-set")
    assert get_item(tmp_db, "never-set") is None


def test_storage_keys_are_namespaced():
    assert all(key.startswith("antigone_") for key in STORAGE_KEYS.values())
    assert len(set(STORAGE_KEYS.values())) == len(STORAGE_KEYS)


def test_write_json_keeps_arabic_readable(tmp_db):
    init_db(tmp_db)
    write_json(tmp_db, "names", ["أنتيغون"])
    assert "أنتيغون" in get_item(tmp_db, "names")
    assert read_json(tmp_db, "names") == ["أنتيغون"]


def test_read_json_default_when_absent(tmp_db):
    init_db(tmp_db)
    assert read_json(tmp_db, "missing", []) == []


def test_read_json_default_when_corrupt(tmp_db):
    init_db(tmp_db)
    set_item(tmp_db, "broken", "{not json")
    assert read_json(tmp_db, "broken", {"ok": True}) == {"ok": True}


# --- Subscriptions ---


def test_subscribers_notified_on_set_and_remove(tmp_db):
    init_db(tmp_db)
    seen = []
    subscribe(tmp_db, seen.append)
    set_item(tmp_db, "a", "1")
    remove_item(tmp_db, "a")
    assert seen == ["a", "a"]


def test_unsubscribe_stops_notifications(tmp_db):
    init_db(tmp_db)
    seen = []
    unsubscribe = subscribe(tmp_db, seen.append)
    set_item(tmp_db, "a", "1")
    unsubscribe()
    set_item(tmp_db, "a", "2")
    assert seen == ["a"]


def test_subscribers_scoped_to_database(tmp_db, tmp_path):
    other_db = str(tmp_path / "other.db")
    init_db(tmp_db)
    init_db(other_db)
    seen = []
    subscribe(tmp_db, seen.append)
    set_item(other_db, "a", "1")
    assert seen == []


def test_failing_listener_does_not_block_write_or_others(tmp_db):
    init_db(tmp_db)
    seen = []

    def broken(key):
        raise RuntimeError("boom")

    subscribe(tmp_db, broken)
    subscribe(tmp_db, seen.append)
    set_item(tmp_db, "a", "1")
    assert get_item(tmp_db, "a") == "1"
    assert seen == ["a"]


def test_reset_subscriptions_for_one_database(tmp_db, tmp_path):
    other_db = str(tmp_path / "other.db")
    init_db(tmp_db)
    init_db(other_db)
    seen = []
    subscribe(tmp_db, seen.append)
    subscribe(other_db, seen.append)
    reset_subscriptions(tmp_db)
    set_item(tmp_db, "a", "1")
    set_item(other_db, "b", "1")
    assert seen == ["b"]


def test_reset_all_subscriptions(tmp_db):
    init_db(tmp_db)
    seen = []
    subscribe(tmp_db, seen.append)
    reset_subscriptions()
    set_item(tmp_db, "a", "1")
    assert seen == []

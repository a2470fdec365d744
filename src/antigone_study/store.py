"""Key-value store adapter over the local SQLite database.

Every record the application keeps lives under one of the namespaced keys in
``STORAGE_KEYS`` as a JSON document. Each write is committed immediately.
There are no multi-key transactions: callers do a full read-modify-write of a
single key, so the last writer wins when several processes share a database.

Writers notify in-process subscribers synchronously, which lets views refresh
on change instead of polling.
"""
import json
import logging
from datetime import datetime
from typing import Any, Callable

from antigone_study.db import get_connection

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "progress": "antigone_progress",
    "notes": "antigone_notes",
    "bookmarks": "antigone_bookmarks",
    "settings": "antigone_settings",
    "auth": "antigone_auth",
    "students": "antigone_students",
}

Listener = Callable[[str], None]

_listeners: dict[str, list[Listener]] = {}


def get_item(db_path: str, key: str) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else None


def set_item(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
        (key, value, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    _notify(db_path, key)


def remove_item(db_path: str, key: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
    conn.commit()
    conn.close()
    _notify(db_path, key)


def read_json(db_path: str, key: str, default: Any = None) -> Any:
    """Return the decoded value stored under ``key``.

    A missing key yields ``default``. So does a value that is not valid JSON,
    since a damaged record must never stop the application from starting.
    """
    raw = get_item(db_path, key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable record under %s", key)
        return default


def write_json(db_path: str, key: str, value: Any) -> None:
    set_item(db_path, key, json.dumps(value, ensure_ascii=False))


def subscribe(db_path: str, listener: Listener) -> Callable[[], None]:
    """Call ``listener(key)`` after every write to ``db_path``.

    Returns a function that removes the subscription.
    """
    _listeners.setdefault(db_path, []).append(listener)

    def unsubscribe() -> None:
        listeners = _listeners.get(db_path, [])
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            _listeners.pop(db_path, None)

    return unsubscribe


def reset_subscriptions(db_path: str | None = None) -> None:
    """Drop every listener for ``db_path``, or for all databases when omitted."""
    if db_path is None:
        _listeners.clear()
    else:
        _listeners.pop(db_path, None)


def _notify(db_path: str, key: str) -> None:
    for listener in list(_listeners.get(db_path, [])):
        try:
            listener(key)
        except Exception:
            logger.exception("Store listener failed for %s", key)

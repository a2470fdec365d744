"""Saved navigation targets, at most one per url."""
import logging

from antigone_study.models import Bookmark, new_id, now_iso
from antigone_study.store import STORAGE_KEYS, read_json, write_json

logger = logging.getLogger(__name__)


def get_bookmarks(db_path: str) -> list[Bookmark]:
    data = read_json(db_path, STORAGE_KEYS["bookmarks"], [])
    try:
        return [Bookmark.from_dict(b) for b in data]
    except (KeyError, TypeError):
        logger.warning("Bookmarks record is malformed, ignoring it")
        return []


def _write_bookmarks(db_path: str, bookmarks: list[Bookmark]) -> None:
    write_json(db_path, STORAGE_KEYS["bookmarks"], [b.to_dict() for b in bookmarks])


def add_bookmark(db_path: str, section: str, title: str, url: str) -> Bookmark | None:
    """Bookmark ``url``. Returns None without writing if it is already bookmarked."""
    bookmarks = get_bookmarks(db_path)
    if any(b.url == url for b in bookmarks):
        return None
    bookmark = Bookmark(id=new_id(), section=section, title=title, url=url, created_at=now_iso())
    bookmarks.append(bookmark)
    _write_bookmarks(db_path, bookmarks)
    return bookmark


def remove_bookmark(db_path: str, bookmark_id: str) -> None:
    bookmarks = [b for b in get_bookmarks(db_path) if b.id != bookmark_id]
    _write_bookmarks(db_path, bookmarks)


def is_bookmarked(db_path: str, url: str) -> bool:
    return any(b.url == url for b in get_bookmarks(db_path))


def toggle_bookmark(db_path: str, section: str, title: str, url: str) -> bool:
    """Flip the bookmarked state of ``url`` and return the new state."""
    existing = next((b for b in get_bookmarks(db_path) if b.url == url), None)
    if existing:
        remove_bookmark(db_path, existing.id)
        return False
    add_bookmark(db_path, section, title, url)
    return True

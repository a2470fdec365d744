"""Student roster: the list of valid usernames and passwords.

The roster ships with the package in ``content/students.json``. The first load
copies it into the local store, and later loads prefer that cached copy so an
administrator can replace the roster without touching the package.

Passwords are plain text. The roster only keeps a classroom out of each
other's notes and is not a security boundary.
"""
import json
import logging
from pathlib import Path

from antigone_study.models import Student
from antigone_study.store import STORAGE_KEYS, get_item, remove_item, write_json

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"
BUNDLED_ROSTER = CONTENT_DIR / "students.json"


def _parse_students(data) -> list[Student]:
    return [Student.from_dict(s) for s in data]


def matches(student: Student, username: str, password: str) -> bool:
    """Case-insensitive username, exact password."""
    return (
        student.username.lower() == username.strip().lower()
        and student.password == password
    )


class StudentDirectory:
    """Loads the roster once per instance and answers credential lookups."""

    def __init__(self, db_path: str, roster_path: Path | str = BUNDLED_ROSTER):
        self.db_path = db_path
        self.roster_path = Path(roster_path)
        self._students: list[Student] | None = None

    def load_students(self) -> list[Student]:
        if self._students is not None:
            return self._students

        cached = self._load_cached()
        if cached is not None:
            self._students = cached
            return self._students

        try:
            data = json.loads(self.roster_path.read_text(encoding="utf-8"))
            students = _parse_students(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.error("Could not load the student roster from %s", self.roster_path, exc_info=True)
            return []

        write_json(self.db_path, STORAGE_KEYS["students"], [s.to_dict() for s in students])
        self._students = students
        return self._students

    def _load_cached(self) -> list[Student] | None:
        raw = get_item(self.db_path, STORAGE_KEYS["students"])
        if raw is None:
            return None
        try:
            return _parse_students(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Discarding unreadable cached roster")
            remove_item(self.db_path, STORAGE_KEYS["students"])
            return None

    def get_students(self) -> list[Student]:
        return self.load_students()

    def save_students(self, students: list[Student]) -> None:
        write_json(self.db_path, STORAGE_KEYS["students"], [s.to_dict() for s in students])
        self._students = list(students)

    def verify_student(self, username: str, password: str) -> Student | None:
        return next(
            (s for s in self.load_students() if matches(s, username, password)),
            None,
        )

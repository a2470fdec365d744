"""Login, logout and session checks.

A session is the ``antigone_auth`` record in the local store. Its presence
alone means "logged in"; there is no expiry and no signature.
"""
import logging

from antigone_study.models import User, now_iso
from antigone_study.roster import StudentDirectory
from antigone_study.store import STORAGE_KEYS, get_item, read_json, remove_item, write_json

logger = logging.getLogger(__name__)


def login(db_path: str, directory: StudentDirectory, username: str, password: str) -> bool:
    """Start a session for the matching student.

    Unknown usernames and wrong passwords fail the same way.
    """
    if not username.strip() or not password.strip():
        return False

    student = directory.verify_student(username, password)
    if student is None:
        logger.info("Login rejected for %r", username.strip())
        return False

    user = User(
        id=student.id,
        username=student.username,
        name=student.name,
        name_fr=student.name_fr,
        login_time=now_iso(),
    )
    write_json(db_path, STORAGE_KEYS["auth"], user.to_dict())
    logger.info("Student %s logged in", student.username)
    return True


def logout(db_path: str) -> None:
    remove_item(db_path, STORAGE_KEYS["auth"])
    logger.info("Session cleared")


def is_authenticated(db_path: str) -> bool:
    return get_item(db_path, STORAGE_KEYS["auth"]) is not None


def get_current_user(db_path: str) -> User | None:
    data = read_json(db_path, STORAGE_KEYS["auth"])
    if not data:
        return None
    try:
        return User.from_dict(data)
    except (KeyError, TypeError, ValueError):
        logger.warning("Session record is malformed")
        return None

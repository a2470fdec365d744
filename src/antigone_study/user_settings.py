"""Display preferences (theme, language, notifications)."""
import logging

from antigone_study.models import Settings
from antigone_study.store import STORAGE_KEYS, read_json, write_json

logger = logging.getLogger(__name__)


def get_settings(db_path: str) -> Settings:
    data = read_json(db_path, STORAGE_KEYS["settings"])
    if not data:
        return Settings()
    try:
        return Settings.from_dict(data)
    except (ValueError, AttributeError):
        logger.warning("Settings record is invalid, using defaults")
        return Settings()


def save_settings(db_path: str, settings: Settings) -> None:
    write_json(db_path, STORAGE_KEYS["settings"], settings.to_dict())

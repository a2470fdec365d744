"""Application configuration loaded from environment variables."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from antigone_study.db import DEFAULT_DB_PATH
from antigone_study.quiz import BUNDLED_QUIZ
from antigone_study.roster import BUNDLED_ROSTER


class Config(BaseSettings):
    """Values can be overridden with ``ANTIGONE_*`` variables or a ``.env`` file."""

    model_config = SettingsConfigDict(env_prefix="ANTIGONE_", env_file=".env", extra="ignore")

    db_path: str = DEFAULT_DB_PATH
    roster_path: Path = BUNDLED_ROSTER
    quiz_path: Path = BUNDLED_QUIZ
    quiz_length: int = 10
    log_level: str = "WARNING"


@lru_cache
def get_config() -> Config:
    return Config()

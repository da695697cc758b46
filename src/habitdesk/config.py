"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytz
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitDesk"
    DB_FILENAME = "habitdesk.db"
    DEFAULT_TIMEZONE = "America/Toronto"
    DEFAULT_LOOKBACK_DAYS = 365
    MILESTONES = (7, 30, 100)
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITDESK_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITDESK_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITDESK_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("HABITDESK_TIMEZONE", self.DEFAULT_TIMEZONE)
        self.STREAK_LOOKBACK_DAYS = _env_int(
            "HABITDESK_STREAK_LOOKBACK_DAYS", self.DEFAULT_LOOKBACK_DAYS
        )
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITDESK_SECRET_KEY must be set in non-dev mode.")
        if self.STREAK_LOOKBACK_DAYS < 1:
            raise ValueError("HABITDESK_STREAK_LOOKBACK_DAYS must be at least 1.")
        # Fail at start-up rather than on the first request.
        self.tzinfo()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITDESK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def tzinfo(self):
        """Return the pytz zone every civil date is evaluated in."""

        try:
            return pytz.timezone(self.TIMEZONE)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Unknown HABITDESK_TIMEZONE: {self.TIMEZONE!r}") from exc

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for the test-suite; callers usually override DATABASE_URL."""

    TESTING = True
    __test__ = False  # keep pytest from collecting this class

    def __init__(self, database_url: str | None = None, data_dir: Path | None = None) -> None:
        self._data_dir_override = data_dir
        super().__init__()
        if database_url is not None:
            self.DATABASE_URL = database_url
        self.DEV_MODE = True

    def _resolve_data_dir(self) -> Path:
        if self._data_dir_override is None:
            return super()._resolve_data_dir()
        path = Path(self._data_dir_override)
        path.mkdir(parents=True, exist_ok=True)
        return path

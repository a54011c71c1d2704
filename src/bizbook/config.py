"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()

PLACEHOLDER_SECRET = "replace-me"


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

    APP_NAME = "BizBook"
    DB_FILENAME = "bizbook.db"
    DEBUG = False
    TESTING = False
    JSON_SORT_KEYS = False
    TOKEN_ALGORITHM = "HS256"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("BIZBOOK_SECRET_KEY", PLACEHOLDER_SECRET)
        self.DEV_MODE = _env_bool("BIZBOOK_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("BIZBOOK_DATABASE_URL", self._build_sqlite_url())
        self.TOKEN_TTL_MINUTES = _env_int("BIZBOOK_TOKEN_TTL_MINUTES", 60 * 24)
        self.LOG_LEVEL = os.getenv("BIZBOOK_LOG_LEVEL", "INFO").upper()
        self.LOG_TO_FILE = _env_bool("BIZBOOK_LOG_TO_FILE", default=True)
        if not self.DEV_MODE and self.SECRET_KEY == PLACEHOLDER_SECRET:
            raise ValueError("BIZBOOK_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("BIZBOOK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Isolated configuration for the test-suite.

    Defaults to a private in-memory SQLite database shared across
    connections; ``BIZBOOK_DATABASE_URL`` still wins when set.
    """

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        if "BIZBOOK_DATABASE_URL" not in os.environ:
            self.DATABASE_URL = "sqlite://"
        self.LOG_TO_FILE = _env_bool("BIZBOOK_LOG_TO_FILE", default=False)

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        options = super().sqlalchemy_engine_options()
        if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
            options["poolclass"] = StaticPool
        return options

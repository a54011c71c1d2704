"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

from bizbook import create_app
from bizbook import config as bizbook_config
from bizbook.config import PLACEHOLDER_SECRET, BaseConfig, DevConfig
from bizbook.extensions import get_state


def test_defaults_come_from_environment(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == Path(tmp_path).resolve()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'bizbook.db'}"
    assert config.TOKEN_TTL_MINUTES == 60 * 24
    assert config.LOG_TO_FILE is False
    assert config.DEV_MODE is True


def test_overrides(monkeypatch):
    monkeypatch.setenv("BIZBOOK_DATABASE_URL", "postgresql://db/bizbook")
    monkeypatch.setenv("BIZBOOK_TOKEN_TTL_MINUTES", "15")
    monkeypatch.setenv("BIZBOOK_LOG_LEVEL", "debug")

    config = BaseConfig()

    assert config.DATABASE_URL == "postgresql://db/bizbook"
    assert config.TOKEN_TTL_MINUTES == 15
    assert config.LOG_LEVEL == "DEBUG"
    assert config.sqlalchemy_engine_options() == {"pool_pre_ping": True}


def test_bad_integer_is_reported(monkeypatch):
    monkeypatch.setenv("BIZBOOK_TOKEN_TTL_MINUTES", "soon")

    with pytest.raises(ValueError, match="BIZBOOK_TOKEN_TTL_MINUTES"):
        BaseConfig()


def test_placeholder_secret_rejected_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("BIZBOOK_DEV_MODE", "false")
    monkeypatch.setenv("BIZBOOK_SECRET_KEY", PLACEHOLDER_SECRET)

    with pytest.raises(ValueError, match="BIZBOOK_SECRET_KEY"):
        BaseConfig()


def test_test_config_uses_shared_memory_database():
    config = bizbook_config.TestConfig()

    assert config.DATABASE_URL == "sqlite://"
    assert config.TESTING is True
    options = config.sqlalchemy_engine_options()
    assert options["poolclass"] is StaticPool
    assert options["connect_args"] == {"check_same_thread": False}


def test_create_app_selects_config_by_name():
    app = create_app("development")

    assert isinstance(app.config["BIZBOOK_CONFIG"], DevConfig)
    assert app.config["DEBUG"] is True
    assert get_state(app).engine.url.database.endswith("bizbook.db")
    get_state(app).engine.dispose()

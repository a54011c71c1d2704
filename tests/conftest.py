"""Pytest configuration and shared fixtures for BizBook tests.

Every test runs against a private in-memory SQLite database, either through
a full Flask app (``app``/``client``) or through bare repositories
(``repositories``) for storage-level tests.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from bizbook import create_app
from bizbook.extensions import get_state
from bizbook.infra.database import create_session_factory, init_database
from bizbook.infra.repositories import build_repositories
from bizbook.models import User
from bizbook.services.auth import create_user, issue_token
from bizbook.services.events import ChangeNotifier

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep configuration away from the developer's environment and cwd."""

    monkeypatch.setenv("BIZBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BIZBOOK_SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("BIZBOOK_LOG_TO_FILE", "0")
    for name in ("BIZBOOK_DATABASE_URL", "BIZBOOK_DEV_MODE", "BIZBOOK_TOKEN_TTL_MINUTES"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture
def app():
    application = create_app("testing")
    yield application
    get_state(application).engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_repositories(app):
    return get_state(app).repositories


def _headers_for(app, user: User) -> dict[str, str]:
    config = app.config["BIZBOOK_CONFIG"]
    token = issue_token(user, secret=config.SECRET_KEY, ttl_minutes=config.TOKEN_TTL_MINUTES)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api_user(app_repositories) -> User:
    return create_user(username="alice", password=TEST_PASSWORD, users=app_repositories.users)


@pytest.fixture
def auth_headers(app, api_user) -> dict[str, str]:
    return _headers_for(app, api_user)


@pytest.fixture
def other_headers(app, app_repositories) -> dict[str, str]:
    """Headers for a second user, to check records never leak across accounts."""

    other = create_user(username="mallory", password=TEST_PASSWORD, users=app_repositories.users)
    return _headers_for(app, other)


@pytest.fixture
def post_json(client, auth_headers):
    """POST a JSON body as the default user and return the response."""

    def _post(path: str, payload: dict, *, headers: dict | None = None):
        return client.post(path, json=payload, headers=headers or auth_headers)

    return _post


# =============================================================================
# Repository fixtures (no Flask)
# =============================================================================


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


@pytest.fixture
def repositories(session_factory, notifier):
    return build_repositories(session_factory, notifier)


@pytest.fixture
def user(repositories) -> User:
    return repositories.users.create(User(username="tester", password_hash="dummy-hash"))


@pytest.fixture
def other_user(repositories) -> User:
    return repositories.users.create(User(username="intruder", password_hash="dummy-hash"))


@pytest.fixture
def today() -> date:
    return date(2024, 1, 20)


@pytest.fixture
def password() -> str:
    """Plain-text password of every user created through ``create_user`` fixtures."""

    return TEST_PASSWORD

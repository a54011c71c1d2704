"""Database and extension wiring for BizBook."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import Repositories, build_repositories
from .logging_config import get_logger
from .services.events import ChangeNotifier, DerivedViewCache
from .services.summary import VIEW_DEPENDENCIES

EXTENSION_KEY = "bizbook"

logger = get_logger(__name__)


@dataclass(slots=True)
class BizBookState:
    """Per-application singletons stored in ``app.extensions``."""

    engine: Engine
    session_factory: SessionFactory
    notifier: ChangeNotifier
    repositories: Repositories
    views: DerivedViewCache


def init_db(app: Flask) -> BizBookState:
    """Create the engine, schema, repositories and view cache for *app*."""

    config: BaseConfig = app.config["BIZBOOK_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    # TODO(@migrations): replace create_all with Alembic once the schema stabilizes.

    session_factory = create_session_factory(engine)
    notifier = ChangeNotifier()
    state = BizBookState(
        engine=engine,
        session_factory=session_factory,
        notifier=notifier,
        repositories=build_repositories(session_factory, notifier),
        views=DerivedViewCache(notifier, dependencies=VIEW_DEPENDENCIES),
    )
    app.extensions[EXTENSION_KEY] = state
    logger.info("Database initialized", extra={"database_url": engine.url.render_as_string()})
    return state


def get_state(app: Flask | None = None) -> BizBookState:
    target = app or current_app
    try:
        return target.extensions[EXTENSION_KEY]
    except KeyError as exc:  # pragma: no cover - only when init_db was skipped
        raise RuntimeError("Database engine not initialized") from exc


def get_repositories(app: Flask | None = None) -> Repositories:
    return get_state(app).repositories

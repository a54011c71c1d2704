"""BizBook application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .errors import register_error_handlers
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "bizbook.blueprints.auth"
    yield "bizbook.blueprints.api"


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def create_app(config_name: str | None = None, *, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["BIZBOOK_CONFIG"] = config_obj
    app.json.sort_keys = False

    setup_logging(config_obj)
    register_error_handlers(app)

    # Imported lazily so model classes can be used without building an engine.
    from .extensions import init_db

    init_db(app)
    _register_blueprints(app)
    _cli.init_app(app)

    get_logger(__name__).info(
        "Application created",
        extra={"config": type(config_obj).__name__, "dev_mode": config_obj.DEV_MODE},
    )
    return app


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]

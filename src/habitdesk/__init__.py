"""HabitDesk application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context
from .exceptions import (
    HabitNotFoundError,
    HabitValidationError,
    SkipDayNotFoundError,
    StoreError,
)
from .extensions import init_app
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger("app")


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "habitdesk.blueprints.habits"
    yield "habitdesk.blueprints.skip_days"


def create_app(config: BaseConfig | str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    if isinstance(config, BaseConfig):
        config_obj = config
    else:
        config_obj = _resolve_config(config)()
    app.config["SECRET_KEY"] = config_obj.SECRET_KEY
    app.config["TESTING"] = config_obj.TESTING
    app.config["HABITDESK_CONFIG"] = config_obj

    setup_logging(config_obj)
    init_app(app, create_app_context(config_obj))
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HabitValidationError)
    def _invalid(exc: HabitValidationError):
        return jsonify({"error": str(exc), "errors": exc.errors}), 400

    @app.errorhandler(HabitNotFoundError)
    @app.errorhandler(SkipDayNotFoundError)
    def _not_found(exc: Exception):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(StoreError)
    def _store_failure(exc: StoreError):
        logger.error("Store call failed", exc_info=exc)
        return jsonify({"error": str(exc)}), 503

    @app.errorhandler(ValueError)
    def _bad_value(exc: ValueError):
        return jsonify({"error": str(exc)}), 400


__all__ = ["AppContext", "BaseConfig", "DevConfig", "TestConfig", "create_app", "create_app_context"]

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import Container, build_container_from_settings
from .core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .presets.controller import register as register_presets
from .users.controller import register as register_users
from .vacation.controller import register as register_vacations

logger = logging.getLogger("restaurant_manager")

REPO_ROOT = Path(__file__).resolve().parents[3]


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthenticationError)
    def handle_unauthenticated(e):
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def handle_forbidden(e):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(ValidationError)
    def handle_invalid(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(DomainError)
    def handle_domain(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return jsonify({"error": f"Sistemska greška: {e}"}), 500
        return jsonify({"error": "Sistemska greška"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container_from_settings(settings)

    app.extensions["container"] = container

    _register_error_handlers(app)
    register_users(app, container)
    register_vacations(app, container)
    register_presets(app, container)

    return app

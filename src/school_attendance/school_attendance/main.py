from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .container import Container, build_container
from .core.constants import DEFAULT_AUDIT_LOG_LIMIT
from .core.exceptions import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_super_admin_profile, list_tables
from .database.connection import DBConfig
from .recap.controller import register as register_recap
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[3]


def register_error_handlers(app: Flask) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(ValidationError)
    def _validation(e):
        return _fail(str(e), 400)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e):
        return _fail(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return _fail(str(e), 404)

    @app.errorhandler(PersistenceError)
    def _backend(e):
        logger.error("Backend error: %s", e)
        return _fail(f"Gagal mengakses database: {e}", 502)

    @app.errorhandler(Exception)
    def _unexpected(e):
        if isinstance(e, HTTPException):
            return _fail(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        if app.config.get("DEBUG"):
            return _fail(f"Terjadi kesalahan sistem: {e}", 500)
        return _fail("Terjadi kesalahan sistem", 500)


def _bootstrap_database(settings, db_config: dict, *, debug: bool) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=_ROOT / "database" / "schema.sql")
        if debug:
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_ROOT / "database" / "seed.sql")
        super_admin_email = getattr(settings, "SUPER_ADMIN_EMAIL", "")
        if super_admin_email:
            ensure_super_admin_profile(db_config, email=super_admin_email)
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a prebuilt ``container`` skips database setup (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _bootstrap_database(settings, db_config, debug=app.config["DEBUG"])
        container = build_container(
            db_config=db_config,
            super_admin_email=getattr(settings, "SUPER_ADMIN_EMAIL", ""),
            audit_log_limit=int(getattr(settings, "AUDIT_LOG_LIMIT", DEFAULT_AUDIT_LOG_LIMIT)),
        )

    app.extensions["container"] = container
    register_error_handlers(app)
    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_recap(app, container)
    register_audit(app, container)

    return app

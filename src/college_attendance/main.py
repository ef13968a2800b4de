from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .advisors.controller import register as register_advisors
from .attendance.controller import register as register_attendance
from .common.web import ok
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .errors import register_error_handlers
from .identity.controller import register as register_identity
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .timetable.controller import register as register_timetable

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _bootstrap_database(app: Flask, settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        if app.config["DEBUG"]:
            print(f"[college-attendance] schema ready (tables={len(list_tables(db_config))})")
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_accounts(db_config)
        if app.config["DEBUG"]:
            print("[college-attendance] demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass `container` to run against pre-built (e.g. in-memory) services."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if app.config["DEBUG"]:
            print(
                "[college-attendance] settings=", settings_module,
                " db=", f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
            )
        _bootstrap_database(app, settings, db_config)
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["container"] = container
    register_error_handlers(app)

    register_identity(app, container)
    register_profiles(app, container)
    register_attendance(app, container)
    register_timetable(app, container)
    register_advisors(app, container)
    register_reports(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return ok({"status": "ok"})

    return app

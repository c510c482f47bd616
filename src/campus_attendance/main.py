from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import Container, build_container
from .errors import add_error_handlers
from .admin.controller import register as register_admin
from .advisors.controller import register as register_advisors
from .attendance.controller import register as register_attendance
from .departments.controller import register as register_departments
from .promotion.controller import register as register_promotion
from .reports.controller import register as register_reports
from .subjects.controller import register as register_subjects
from .teaching.controller import register as register_teaching
from .timetable.controller import register as register_timetable
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(level)


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Application factory.

    When ``container`` is given it is used as is and no database bootstrap
    runs, which is how the test-suite wires in-memory repositories.
    """
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
        admin_db_config = getattr(settings, "ADMIN_DB_CONFIG", None)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(admin_db_config or db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(admin_db_config or db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(admin_db_config or db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            admin_db_config=admin_db_config,
            defaulter_threshold=int(getattr(settings, "DEFAULTER_THRESHOLD", 75)),
        )

    add_error_handlers(app)

    register_users(app, container)
    register_attendance(app, container)
    register_promotion(app, container)
    register_reports(app, container)
    register_departments(app, container)
    register_subjects(app, container)
    register_timetable(app, container)
    register_advisors(app, container)
    register_admin(app, container)
    register_teaching(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app

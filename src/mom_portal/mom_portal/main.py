from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .app_logger import get_logger, setup_logging
from .common.http import ok, register_error_handlers, register_request_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import Container, build_container
from .auth.controller import register as register_auth
from .dashboard.controller import register as register_dashboard
from .documents.controller import register as register_documents
from .documents.upload_controller import register as register_uploads
from .meeting_types.controller import register as register_meeting_types
from .meetings.controller import register as register_meetings
from .members.controller import register as register_members
from .staff.controller import register as register_staff

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", None))
    log = get_logger("app")

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    max_upload_bytes = int(getattr(settings, "MAX_UPLOAD_BYTES"))
    # small headroom for the multipart envelope; the file itself is checked exactly
    app.config["MAX_CONTENT_LENGTH"] = max_upload_bytes + 64 * 1024

    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)

        upload_dir = Path(getattr(settings, "UPLOAD_DIR"))
        if not upload_dir.is_absolute():
            upload_dir = REPO_ROOT / upload_dir
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS")),
            upload_dir=upload_dir,
            max_upload_bytes=max_upload_bytes,
            rate_limit_max_requests=int(getattr(settings, "RATE_LIMIT_MAX_REQUESTS")),
            rate_limit_window_seconds=float(getattr(settings, "RATE_LIMIT_WINDOW_SECONDS")),
        )

    register_error_handlers(app)
    register_request_logging(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(message="MoM portal API is running")

    register_auth(app, container)
    register_staff(app, container)
    register_meeting_types(app, container)
    register_meetings(app, container)
    register_members(app, container)
    register_documents(app, container)
    register_uploads(app, container)
    register_dashboard(app, container)

    return app

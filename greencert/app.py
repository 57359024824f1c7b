import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

logger = logging.getLogger("greencert.app")


def _tier_table_from_env():
    from .shared.scoring import parse_tier_thresholds, tier_table_for_scheme

    explicit = (os.getenv("CERT_TIER_THRESHOLDS") or "").strip()
    if explicit:
        return parse_tier_thresholds(explicit)
    return tier_table_for_scheme(os.getenv("CERT_TIER_SCHEME"))


def _eligibility_min_from_env() -> int:
    from .constants import DEFAULT_ELIGIBILITY_MIN

    raw = (os.getenv("CERT_ELIGIBILITY_MIN") or "").strip()
    if not raw:
        return DEFAULT_ELIGIBILITY_MIN
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"CERT_ELIGIBILITY_MIN must be an integer, got {raw!r}") from None
    if not 0 <= value <= 100:
        raise ValueError("CERT_ELIGIBILITY_MIN must be between 0 and 100")
    return value


def create_app():
    app = Flask(__name__)
    app.secret_key = os.getenv("SECRET_KEY", "dev")

    DB_USER = os.getenv("DB_USER", "greencert")
    DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
    DB_HOST = os.getenv("DB_HOST", "db")
    DB_NAME = os.getenv("DB_NAME", "greencert")
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}/{DB_NAME}",
    )

    app.config["SQLALCHEMY_DATABASE_URI"] = DATABASE_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024

    from .shared.storage import default_template_path

    app.config["CERT_TEMPLATE_PATH"] = os.getenv(
        "CERT_TEMPLATE_PATH", default_template_path(app.root_path)
    )
    app.config["CERT_TIER_TABLE"] = _tier_table_from_env()
    app.config["CERT_ELIGIBILITY_MIN"] = _eligibility_min_from_env()
    app.config["CERT_FONT_NAME"] = os.getenv("CERT_FONT_NAME", "Helvetica-Bold")
    app.config["CERT_FONT_PATH"] = os.getenv("CERT_FONT_PATH")

    db.init_app(app)

    from . import models  # noqa: F401  registers tables on db.metadata
    from .shared.certificates import (
        load_certificate_template,
        register_certificate_font,
    )

    if app.config["CERT_FONT_PATH"]:
        register_certificate_font(app.config["CERT_FONT_NAME"], app.config["CERT_FONT_PATH"])
        app.logger.info(
            "[CERT-FONT] registered %s from %s",
            app.config["CERT_FONT_NAME"],
            app.config["CERT_FONT_PATH"],
        )

    try:
        template = load_certificate_template(app.config["CERT_TEMPLATE_PATH"])
    except Exception:
        logger.exception(
            "[CERT-TEMPLATE] failed to load %s", app.config["CERT_TEMPLATE_PATH"]
        )
        raise
    app.extensions["certificate_template"] = template
    app.logger.info(
        "[CERT-TEMPLATE] loaded path=%s size=%.0fx%.0f",
        template.path,
        template.width,
        template.height,
    )

    @app.get("/health")
    def health():  # pragma: no cover - simple healthcheck
        return "OK", 200

    from .routes.offices import bp as offices_bp
    from .routes.certificates import bp as certificates_bp

    app.register_blueprint(offices_bp)
    app.register_blueprint(certificates_bp)

    return app

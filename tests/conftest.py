import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from greencert.app import create_app, db
from greencert.constants import CHECKLIST_ITEMS

CERT_ENV_KEYS = (
    "CERT_TEMPLATE_PATH",
    "CERT_TIER_SCHEME",
    "CERT_TIER_THRESHOLDS",
    "CERT_ELIGIBILITY_MIN",
    "CERT_FONT_NAME",
    "CERT_FONT_PATH",
)


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "slow" in item.keywords or "quarantine" in item.keywords:
            continue
        item.add_marker("full")
        if "no_smoke" in item.keywords:
            continue
        item.add_marker("smoke")


def build_checklist(implemented: int, other_status: str = "Not Started") -> dict:
    """Checklist payload with the first ``implemented`` items Implemented."""
    checklist: dict[str, dict[str, str]] = {}
    remaining = implemented
    for category, items in CHECKLIST_ITEMS.items():
        checklist[category] = {}
        for item in items:
            checklist[category][item] = "Implemented" if remaining > 0 else other_status
            remaining -= 1
    return checklist


@pytest.fixture
def make_app(monkeypatch):
    def _make(**env):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
        for key in CERT_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        return create_app()

    return _make


@pytest.fixture
def app(make_app):
    application = make_app()
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()


@pytest.fixture
def six_tier_app(make_app):
    application = make_app(CERT_TIER_SCHEME="six_tier")
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()

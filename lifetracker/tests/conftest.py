import sys
from pathlib import Path

import pytest
from flask_jwt_extended import create_access_token

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lifetracker import create_app
from lifetracker.extensions import cosmos


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (app, API, mock database)")


@pytest.fixture()
def app():
    """Per-test app on a fresh in-memory document store."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    cosmos.reset()
    try:
        yield app
    finally:
        cosmos.reset()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


def _bearer(app, user_id: str) -> dict:
    with app.app_context():
        token = create_access_token(identity=user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(app):
    return _bearer(app, "user-1")


@pytest.fixture()
def other_headers(app):
    return _bearer(app, "user-2")

"""Shared fixtures: a throwaway SQLite database and an app wired to it."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"notification_service_test_{os.getpid()}.db"
SERVICE_API_KEY = "test-service-key"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SERVICE_API_KEY"] = SERVICE_API_KEY
os.environ["APP_TIMEZONE"] = "UTC"
for _name in (
    "EMAIL_HOST",
    "EMAIL_FROM",
    "EMAIL_USER",
    "EMAIL_PASS",
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "DEBUG",
):
    os.environ.pop(_name, None)

from notification_service.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from fastapi.testclient import TestClient  # noqa: E402

from notification_service.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from notification_service.infrastructure.security import create_access_token  # noqa: E402
from notification_service.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def service_headers() -> dict[str, str]:
    return {"x-api-key": SERVICE_API_KEY}


@pytest.fixture()
def auth_headers():
    """Return a factory of bearer headers for ``user_id`` and ``role``."""

    def _build(user_id: str, role: str = "customer") -> dict[str, str]:
        token = create_access_token({"id": user_id, "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _build

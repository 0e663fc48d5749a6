from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from selfemploy.core.config import settings  # noqa: E402
from selfemploy.db import session as db_session_module  # noqa: E402
from selfemploy.db.base_class import Base  # noqa: E402
from selfemploy.db.session import SessionLocal  # noqa: E402

# Register tables on Base.metadata
from selfemploy.models import ledger_models, notification_models, submission_models  # noqa: E402,F401

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Ensure application code uses the test engine
settings.DATABASE_URL = TEST_DATABASE_URL  # type: ignore[attr-defined]
settings.ENV = "test"  # type: ignore[attr-defined]
db_session_module.engine = test_engine  # type: ignore[assignment]
SessionLocal.configure(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


from fastapi.testclient import TestClient  # noqa: E402
from selfemploy.api.main import app  # noqa: E402


@pytest.fixture
def client():
    """Provide a FastAPI TestClient bound to the application."""
    return TestClient(app)

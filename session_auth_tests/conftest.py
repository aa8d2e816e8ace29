"""
Pytest configuration for auth service tests.

Points the service at an in-memory SQLite database shared across threads and
gives every test fresh tables and a fresh security guard.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "session_auth_test_logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from session_auth.auth_service.db import Base, get_db
from session_auth.auth_service.main import app
from session_auth.auth_service.repository import UserRepository
from session_auth.auth_service.security import SecurityGuard
from session_auth.auth_service.service import AuthService

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)


@pytest.fixture(autouse=True)
def fresh_guard():
    app.state.security_guard = SecurityGuard()
    yield app.state.security_guard


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def auth_service(db_session):
    return AuthService(UserRepository(db_session))

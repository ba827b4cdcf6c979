"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests. The
URL is exported before any app import so the app's own engine (used by
the ingestion job) points at the same file.
"""
import os
import uuid

SQLITE_URL = "sqlite:///./test_carbon_coach.db"
os.environ["DATABASE_URL"] = SQLITE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.db.base import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def owner():
    """Fresh owner id per test so activity data never bleeds across tests."""
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture()
def headers(owner):
    return {"X-Owner-Id": owner}

# backend/tests/conftest.py
"""
Pytest configuration for the SpotBnB backend.

The test environment is set BEFORE any spotbnb import so the module-level
settings and engine never point at a developer database. Every test gets a
fresh in-memory SQLite schema; the TestClient shares the test's session.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["REDIS_URL"] = ""

from datetime import date, timedelta
from typing import Dict, Generator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spotbnb import models  # noqa: F401  (register models on the metadata)
from spotbnb.api.dependencies.database import get_db
from spotbnb.database import Base, build_engine
from spotbnb.main import app
from spotbnb.models.booking import Booking
from spotbnb.models.spot import Spot
from spotbnb.models.user import User
from tests._utils.builders import TEST_PASSWORD, auth_headers_for, create_booking, create_spot, create_user

# One connection shared by every session so the in-memory database survives
test_engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a new database session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Don't use context manager - lifespan would try to create tables
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def owner(db: Session) -> User:
    """User who owns the test spot."""
    return create_user(db, "demo-owner", first_name="Demo", last_name="Owner")


@pytest.fixture
def guest(db: Session) -> User:
    """User who books and reviews the test spot."""
    return create_user(db, "demo-guest", first_name="Demo", last_name="Guest")


@pytest.fixture
def other_user(db: Session) -> User:
    """User with no relation to the test spot."""
    return create_user(db, "demo-other", first_name="Other", last_name="Person")


@pytest.fixture
def owner_headers(owner: User) -> Dict[str, str]:
    return auth_headers_for(owner)


@pytest.fixture
def guest_headers(guest: User) -> Dict[str, str]:
    return auth_headers_for(guest)


@pytest.fixture
def other_headers(other_user: User) -> Dict[str, str]:
    return auth_headers_for(other_user)


@pytest.fixture
def spot(db: Session, owner: User) -> Spot:
    return create_spot(db, owner)


@pytest.fixture
def future_booking(db: Session, spot: Spot, guest: User, today: date) -> Booking:
    """Guest stay from ten to thirteen days out (checkout on day thirteen)."""
    return create_booking(db, spot, guest, today + timedelta(days=10), today + timedelta(days=13))


@pytest.fixture
def started_booking(db: Session, spot: Spot, guest: User, today: date) -> Booking:
    return create_booking(db, spot, guest, today - timedelta(days=1), today + timedelta(days=2))


@pytest.fixture
def ended_booking(db: Session, spot: Spot, guest: User, today: date) -> Booking:
    return create_booking(db, spot, guest, today - timedelta(days=6), today - timedelta(days=3))

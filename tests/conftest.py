"""
Pytest configuration and shared fixtures.

Each test gets a fresh in-memory SQLite database wired in through FastAPI's
dependency overrides; authentication is replaced by a user of the chosen role.
"""

import os
from datetime import date, datetime, timedelta

# Deterministic configuration before the application is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEFAULT_BUSINESS_HOURS_START"] = "08:00"
os.environ["DEFAULT_BUSINESS_HOURS_END"] = "16:00"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from washbook.auth import get_current_user
from washbook.database import Base, get_db
from washbook.main import app
from washbook.models import BOOKING_CONFIRMED, AdminSetting, Booking, User


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    """Test client bound to the test database."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(db_session):
    """Authenticate subsequent requests as a new user with the given role."""

    def _login(role: str) -> User:
        name = role.lower()
        user = User(firebase_uid=f"uid-{name}", email=f"{name}@example.com", role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest.fixture
def add_booking(db_session):
    """Insert a booking starting at HH:MM on a YYYY-MM-DD date."""

    def _add(day: str, start: str, duration: int, status: str = BOOKING_CONFIRMED) -> Booking:
        scheduled_date = date.fromisoformat(day)
        hour, minute = (int(p) for p in start.split(":"))
        scheduled_time = datetime.combine(scheduled_date, datetime.min.time()).replace(
            hour=hour, minute=minute
        )
        booking = Booking(
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            estimated_end=scheduled_time + timedelta(minutes=duration),
            total_duration=duration,
            status=status,
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking

    return _add


@pytest.fixture
def set_business_hours(db_session):
    """Store business hours the way the admin settings page does."""

    def _set(start: str, end: str) -> None:
        db_session.add(AdminSetting(key="business_hours_start", value=start))
        db_session.add(AdminSetting(key="business_hours_end", value=end))
        db_session.commit()

    return _set

"""
Pytest configuration and fixtures.

Each test gets a fresh in-memory SQLite database, nothing is shared
between tests.
"""
import os
from datetime import date, datetime, time, timedelta

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stridelab.database import create_tables, get_db
from stridelab.main import app
from stridelab.models import Athlete, Workout
from stridelab.services.trimp_service import WorkoutSample


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Database session bound to the per-test in-memory database."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """API client using the test database session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def athlete(db_session):
    athlete = Athlete(
        email="runner@example.com",
        first_name="Sam",
        max_hr=190,
        resting_hr=60,
    )
    db_session.add(athlete)
    db_session.commit()
    db_session.refresh(athlete)
    return athlete


@pytest.fixture
def today():
    return date.today()


def at_noon(day: date) -> datetime:
    return datetime.combine(day, time(12, 0))


@pytest.fixture
def make_workout(db_session, athlete):
    """Store a workout `days_ago` days before today."""
    def _make(days_ago: int = 0, **fields):
        values = {
            "title": "Easy Run",
            "workout_type": "run",
            "date": at_noon(date.today() - timedelta(days=days_ago)),
            "duration_seconds": 3600,
            "distance_km": 10.0,
            "elevation_gain_m": 0.0,
        }
        values.update(fields)
        workout = Workout(athlete_id=athlete.id, **values)
        db_session.add(workout)
        db_session.commit()
        db_session.refresh(workout)
        return workout

    return _make


@pytest.fixture
def pace_sample():
    """60 minute, 10 km run without heart rate (6:00 min/km)."""
    def _make(day: date, **fields):
        values = {
            "date": at_noon(day),
            "duration_seconds": 3600,
            "distance_km": 10.0,
        }
        values.update(fields)
        return WorkoutSample(**values)

    return _make

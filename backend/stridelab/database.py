"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from stridelab.config import get_settings
from stridelab.models.base import Base

settings = get_settings()

# For SQLite, we need check_same_thread=False for FastAPI
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    echo=False,
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """Create all database tables."""
    # Import all models to ensure they are registered with Base
    from stridelab.models import (  # noqa: F401
        Athlete,
        Workout,
        TrainingLoadRecord,
    )
    Base.metadata.create_all(bind=bind or engine)

"""Workout model for storing uploaded training sessions."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from stridelab.models.base import Base

if TYPE_CHECKING:
    from stridelab.models.athlete import Athlete
    from stridelab.services.trimp_service import WorkoutSample


class Workout(Base):
    """A completed training session uploaded from a FIT/GPX file or entered manually."""

    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    athlete_id: Mapped[int] = mapped_column(Integer, ForeignKey("athletes.id"), index=True)

    # Workout details
    title: Mapped[str] = mapped_column(String(255))
    workout_type: Mapped[str] = mapped_column(String(50), default="run")  # e.g., "run", "ride"
    date: Mapped[datetime] = mapped_column(DateTime, index=True)

    # Performance metrics
    duration_seconds: Mapped[int] = mapped_column(Integer, default=0)
    distance_km: Mapped[float] = mapped_column(Float, default=0.0)
    elevation_gain_m: Mapped[float] = mapped_column(Float, default=0.0)
    avg_heart_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # bpm
    max_heart_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # bpm
    calories: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Derived metrics
    trimp: Mapped[float] = mapped_column(Float, default=0.0)  # Training Impulse
    hr_drift: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # percent
    hr_zones: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)  # {zone_key: seconds}

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    athlete: Mapped["Athlete"] = relationship("Athlete", back_populates="workouts")

    def __repr__(self) -> str:
        return f"<Workout(id={self.id}, title='{self.title}', date={self.date}, trimp={self.trimp})>"

    @property
    def average_pace(self) -> Optional[float]:
        """Average pace in seconds per km."""
        if not self.distance_km or self.distance_km <= 0:
            return None
        return self.duration_seconds / self.distance_km

    def to_sample(self) -> "WorkoutSample":
        """Value object consumed by the training load engine."""
        # Import here to avoid circular dependencies
        from stridelab.services.trimp_service import WorkoutSample

        return WorkoutSample(
            date=self.date,
            duration_seconds=self.duration_seconds or 0,
            distance_km=self.distance_km or 0.0,
            elevation_gain_m=self.elevation_gain_m or 0.0,
            avg_heart_rate=self.avg_heart_rate,
            max_heart_rate=self.max_heart_rate,
        )

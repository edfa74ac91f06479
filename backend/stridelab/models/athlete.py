"""Athlete model holding the heart rate profile used for TRIMP scoring."""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stridelab.models.base import Base

if TYPE_CHECKING:
    from stridelab.models.workout import Workout
    from stridelab.models.training_load import TrainingLoadRecord
    from stridelab.services.trimp_service import AthleteProfile


class Athlete(Base):
    """Athlete model for storing profile and heart rate settings."""

    __tablename__ = "athletes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, index=True, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Heart rate profile
    max_hr: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # bpm
    resting_hr: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # bpm
    sex: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)  # male/female

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    workouts: Mapped[List["Workout"]] = relationship(
        "Workout", back_populates="athlete", cascade="all, delete-orphan"
    )
    training_loads: Mapped[List["TrainingLoadRecord"]] = relationship(
        "TrainingLoadRecord", back_populates="athlete", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Athlete(id={self.id}, email='{self.email}', max_hr={self.max_hr}, resting_hr={self.resting_hr})>"

    def to_profile(self) -> "AthleteProfile":
        """
        Heart rate profile for the load engine.

        A missing max HR is left unset so the session max applies.
        """
        # Import here to avoid circular dependencies
        from stridelab.config import settings
        from stridelab.services.trimp_service import AthleteProfile, Sex

        return AthleteProfile(
            max_heart_rate=self.max_hr or None,
            resting_heart_rate=self.resting_hr or settings.DEFAULT_RESTING_HEART_RATE,
            sex=Sex(self.sex) if self.sex else None,
        )

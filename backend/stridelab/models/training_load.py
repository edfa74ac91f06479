"""Training load model for storing daily ATL/CTL/TSB values."""

from datetime import datetime
from datetime import date as date_type
from typing import TYPE_CHECKING

from sqlalchemy import Integer, Float, Date, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stridelab.models.base import Base

if TYPE_CHECKING:
    from stridelab.models.athlete import Athlete


class TrainingLoadRecord(Base):
    """
    Daily training load for an athlete.

    - Daily load: sum of session TRIMP for the day
    - Acute load (ATL): 7-day weighted load, fatigue
    - Chronic load (CTL): 42-day weighted load, fitness
    - Balance (TSB): CTL - ATL, form
    """

    __tablename__ = "training_loads"
    __table_args__ = (
        UniqueConstraint("athlete_id", "date", name="uq_training_load_athlete_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    athlete_id: Mapped[int] = mapped_column(Integer, ForeignKey("athletes.id"), index=True)
    date: Mapped[date_type] = mapped_column(Date, index=True)

    daily_load: Mapped[float] = mapped_column(Float, default=0.0)
    acute: Mapped[float] = mapped_column(Float, default=0.0)
    chronic: Mapped[float] = mapped_column(Float, default=0.0)
    balance: Mapped[float] = mapped_column(Float, default=0.0)

    # Training load zone for the day (e.g. "Productive")
    zone: Mapped[str] = mapped_column(String(20), default="Detraining")

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    athlete: Mapped["Athlete"] = relationship("Athlete", back_populates="training_loads")

    def __repr__(self) -> str:
        return (
            f"<TrainingLoadRecord(id={self.id}, date={self.date}, "
            f"ATL={self.acute:.1f}, CTL={self.chronic:.1f}, TSB={self.balance:.1f}, "
            f"zone={self.zone})>"
        )

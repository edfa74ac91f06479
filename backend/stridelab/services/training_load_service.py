"""Training load calculation service.

This service implements the daily training load model:
- Daily load series (sum of session TRIMP per calendar day)
- Acute Training Load (ATL) - "Fatigue", 7-day time constant
- Chronic Training Load (CTL) - "Fitness", 42-day time constant
- Training Stress Balance (TSB) - "Form", CTL - ATL
- Training load zone and weekly ramp rate

All series are ordered oldest first: index 0 is the oldest day of the
window and the last index is the reference day ("today").

ATL and CTL are backward-looking weighted means over a trailing window
with weights exp(-i / time_constant), i = 0 for the most recent day. They
need no seed value, so every day of a series can be recomputed on its own.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence, Union

from sqlalchemy import and_
from sqlalchemy.orm import Session

from stridelab.config import settings
from stridelab.models.athlete import Athlete
from stridelab.models.training_load import TrainingLoadRecord
from stridelab.models.workout import Workout
from stridelab.services.trimp_service import (
    AthleteProfile,
    TrimpService,
    WorkoutSample,
    round_half_up,
    trimp_service,
)

logger = logging.getLogger(__name__)


class TrainingLoadZone(str, enum.Enum):
    """Training status derived from form (TSB) and fitness (CTL)."""
    DETRAINING = "Detraining"
    RECOVERY = "Recovery"
    MAINTENANCE = "Maintenance"
    PRODUCTIVE = "Productive"
    OPTIMAL = "Optimal"
    OVERREACHING = "Overreaching"
    OVERTRAINING = "Overtraining"


ZONE_DESCRIPTIONS = {
    TrainingLoadZone.DETRAINING: "Your fitness is declining due to insufficient training stimulus.",
    TrainingLoadZone.RECOVERY: "You're well-recovered and ready for a new training block.",
    TrainingLoadZone.MAINTENANCE: "You're maintaining fitness with balanced training and recovery.",
    TrainingLoadZone.PRODUCTIVE: "Good balance of training and recovery for long-term improvement.",
    TrainingLoadZone.OPTIMAL: "Optimal training stress for performance gains. Monitor recovery.",
    TrainingLoadZone.OVERREACHING: "High training load with functional overreaching. Plan recovery soon.",
    TrainingLoadZone.OVERTRAINING: "Warning: Training load is too high. Reduce intensity and prioritize recovery.",
}


def _finite_or_zero(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    try:
        return float(value) if math.isfinite(value) else 0.0
    except TypeError:
        return 0.0


def _calendar_date(value: Union[date, datetime]) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class LoadBalanceSeries:
    """ATL/CTL/TSB for every day of a window, plus the latest zone."""
    dates: list[date]
    daily_load: list[float]
    acute: list[float]
    chronic: list[float]
    balance: list[float]
    zone: TrainingLoadZone
    ramp_rate: float
    workout_scores: list[int] = field(default_factory=list)

    @property
    def current_acute(self) -> float:
        return self.acute[-1] if self.acute else 0.0

    @property
    def current_chronic(self) -> float:
        return self.chronic[-1] if self.chronic else 0.0

    @property
    def current_balance(self) -> float:
        return self.balance[-1] if self.balance else 0.0

    @property
    def total_load(self) -> float:
        return sum(self.daily_load)

    @property
    def training_days(self) -> int:
        return sum(1 for load in self.daily_load if load > 0)


@dataclass
class RecalculationResult:
    """Outcome of storing a recomputed window."""
    series: LoadBalanceSeries
    records: list[TrainingLoadRecord]
    created: int
    updated: int


class TrainingLoadService:
    """Turn workouts into daily load and the ATL/CTL/TSB model."""

    ACUTE_TIME_CONSTANT = 7     # Days for Acute Training Load
    CHRONIC_TIME_CONSTANT = 42  # Days for Chronic Training Load
    RAMP_RATE_WINDOW = 7        # Entries spanned by the weekly ramp rate

    # (TSB lower bound exclusive, zone), checked top to bottom after the
    # low fitness check
    DETRAINING_CTL_THRESHOLD = 30
    BALANCE_ZONES = (
        (25, TrainingLoadZone.RECOVERY),
        (5, TrainingLoadZone.MAINTENANCE),
        (-10, TrainingLoadZone.PRODUCTIVE),
        (-25, TrainingLoadZone.OPTIMAL),
        (-40, TrainingLoadZone.OVERREACHING),
    )

    def __init__(
        self,
        acute_time_constant: int = ACUTE_TIME_CONSTANT,
        chronic_time_constant: int = CHRONIC_TIME_CONSTANT,
        trimp: Optional[TrimpService] = None
    ):
        if acute_time_constant <= 0 or chronic_time_constant <= 0:
            raise ValueError("Time constants must be greater than zero")
        self.acute_time_constant = acute_time_constant
        self.chronic_time_constant = chronic_time_constant
        self.trimp = trimp or trimp_service

    def score_session(
        self,
        sample: WorkoutSample,
        profile: Optional[AthleteProfile] = None
    ) -> int:
        """Score one workout, see TrimpService.score_session."""
        return self.trimp.score_session(sample, profile)

    def build_daily_series(
        self,
        samples: Iterable[WorkoutSample],
        window_days: int,
        reference_date: Union[date, datetime],
        profile: Optional[AthleteProfile] = None
    ) -> list[float]:
        """
        Sum session scores into one bucket per calendar day.

        Args:
            samples: Workouts to aggregate, in any order
            window_days: Number of days in the window, including the
                reference day
            reference_date: The last day of the window ("today")
            profile: Athlete profile passed to the scorer

        Returns:
            List of window_days daily loads, oldest first. Days without a
            workout are 0. Workouts outside the window are ignored.

        Raises:
            ValueError: If window_days is zero or negative
        """
        if window_days <= 0:
            raise ValueError("window_days must be greater than zero")

        reference_day = _calendar_date(reference_date)
        daily_load = [0.0] * window_days

        for sample in samples:
            day_index = (reference_day - _calendar_date(sample.date)).days
            if 0 <= day_index < window_days:
                daily_load[window_days - 1 - day_index] += self.score_session(sample, profile)

        return daily_load

    def _weighted_load(self, values: Sequence[float], time_constant: int) -> float:
        """Exponentially weighted mean of the last time_constant values."""
        window = values[-time_constant:]
        if not window:
            return 0.0

        weighted_sum = 0.0
        weight_sum = 0.0
        for i, value in enumerate(reversed(window)):
            weight = math.exp(-i / time_constant)
            weighted_sum += _finite_or_zero(value) * weight
            weight_sum += weight

        return _finite_or_zero(weighted_sum / weight_sum)

    def acute_load(self, daily_series: Sequence[float]) -> float:
        """
        ATL for the last day of a series.

        With fewer than acute_time_constant days the plain mean of all days
        is used instead of the weighted window.
        """
        if not daily_series:
            return 0.0

        if len(daily_series) < self.acute_time_constant:
            total = sum(_finite_or_zero(v) for v in daily_series)
            return _finite_or_zero(total / len(daily_series))

        return self._weighted_load(daily_series, self.acute_time_constant)

    def chronic_load(self, daily_series: Sequence[float]) -> float:
        """CTL for the last day of a series, over up to chronic_time_constant days."""
        if not daily_series:
            return 0.0
        return self._weighted_load(daily_series, self.chronic_time_constant)

    def compute_acute_load(self, daily_series: Sequence[float]) -> list[float]:
        """ATL for every day, each using only the days up to and including it."""
        return [
            self.acute_load(daily_series[:day + 1])
            for day in range(len(daily_series))
        ]

    def compute_chronic_load(self, daily_series: Sequence[float]) -> list[float]:
        """CTL for every day, each using only the days up to and including it."""
        return [
            self.chronic_load(daily_series[:day + 1])
            for day in range(len(daily_series))
        ]

    def compute_balance(
        self,
        acute: Sequence[float],
        chronic: Sequence[float]
    ) -> list[float]:
        """
        Calculate Training Stress Balance (TSB) per day.

        TSB = CTL - ATL

        Series of different lengths are aligned on their most recent day.
        """
        length = min(len(acute), len(chronic))
        if length == 0:
            return []

        acute = acute[len(acute) - length:]
        chronic = chronic[len(chronic) - length:]
        return [
            _finite_or_zero(_finite_or_zero(ctl) - _finite_or_zero(atl))
            for atl, ctl in zip(acute, chronic)
        ]

    def classify_zone(self, balance: float, chronic: float) -> TrainingLoadZone:
        """
        Determine the training load zone from TSB and CTL.

        Low fitness (CTL < 30) is always Detraining, whatever the form.
        Otherwise the first TSB threshold exceeded wins:
        > 25 Recovery, > 5 Maintenance, > -10 Productive, > -25 Optimal,
        > -40 Overreaching, else Overtraining.
        """
        balance = _finite_or_zero(balance)
        chronic = _finite_or_zero(chronic)

        if chronic < self.DETRAINING_CTL_THRESHOLD:
            return TrainingLoadZone.DETRAINING

        for lower_bound, zone in self.BALANCE_ZONES:
            if balance > lower_bound:
                return zone

        return TrainingLoadZone.OVERTRAINING

    def compute_ramp_rate(self, chronic_series: Sequence[float]) -> float:
        """
        Week-over-week change in CTL.

        Compares the latest CTL with the first value of the trailing
        7-entry week. Needs at least 7 entries, otherwise 0.

        Returns:
            CTL points per week, rounded to one decimal
        """
        if len(chronic_series) < self.RAMP_RATE_WINDOW:
            return 0.0

        current = _finite_or_zero(chronic_series[-1])
        week_ago = _finite_or_zero(chronic_series[-self.RAMP_RATE_WINDOW])

        return round_half_up(current - week_ago, 1)

    def compute_load_balance(
        self,
        samples: Iterable[WorkoutSample],
        window_days: int,
        reference_date: Union[date, datetime],
        profile: Optional[AthleteProfile] = None
    ) -> LoadBalanceSeries:
        """
        Run the full pipeline: score, bucket by day, smooth, classify.

        Args:
            samples: Workouts for the athlete
            window_days: Number of days in the window
            reference_date: Last day of the window
            profile: Athlete heart rate profile

        Returns:
            LoadBalanceSeries for the window
        """
        samples = list(samples)
        reference_day = _calendar_date(reference_date)

        daily_load = self.build_daily_series(samples, window_days, reference_day, profile)
        acute = self.compute_acute_load(daily_load)
        chronic = self.compute_chronic_load(daily_load)
        balance = self.compute_balance(acute, chronic)

        current_balance = balance[-1] if balance else 0.0
        current_chronic = chronic[-1] if chronic else 0.0

        series = LoadBalanceSeries(
            dates=[
                reference_day - timedelta(days=window_days - 1 - i)
                for i in range(window_days)
            ],
            daily_load=daily_load,
            acute=acute,
            chronic=chronic,
            balance=balance,
            zone=self.classify_zone(current_balance, current_chronic),
            ramp_rate=self.compute_ramp_rate(chronic),
            workout_scores=[self.score_session(s, profile) for s in samples],
        )

        logger.debug(
            f"Computed {window_days}-day load balance ending {reference_day}: "
            f"ATL={series.current_acute:.1f} CTL={series.current_chronic:.1f} "
            f"TSB={series.current_balance:.1f} zone={series.zone.value}"
        )
        return series

    def compute_for_athlete(
        self,
        db: Session,
        athlete: Athlete,
        window_days: int,
        reference_date: Optional[date] = None
    ) -> LoadBalanceSeries:
        """
        Load an athlete's workouts in the window and compute their load balance.

        Args:
            db: Database session
            athlete: The athlete
            window_days: Number of days in the window
            reference_date: Last day of the window (default today)

        Returns:
            LoadBalanceSeries for the window
        """
        end_date = reference_date or date.today()
        start_date = end_date - timedelta(days=window_days - 1)

        workouts = (
            db.query(Workout)
            .filter(
                and_(
                    Workout.athlete_id == athlete.id,
                    Workout.date >= datetime.combine(start_date, datetime.min.time()),
                    Workout.date < datetime.combine(end_date + timedelta(days=1), datetime.min.time())
                )
            )
            .order_by(Workout.date)
            .all()
        )

        return self.compute_load_balance(
            [w.to_sample() for w in workouts],
            window_days,
            end_date,
            athlete.to_profile(),
        )

    def recalculate(
        self,
        db: Session,
        athlete: Athlete,
        window_days: int,
        reference_date: Optional[date] = None
    ) -> RecalculationResult:
        """
        Recompute the window and store one TrainingLoadRecord per day.

        Existing records for the same athlete and day are updated in place.
        Stored values are rounded to one decimal.

        Returns:
            RecalculationResult with the series and the stored records,
            oldest first
        """
        series = self.compute_for_athlete(db, athlete, window_days, reference_date)

        existing = (
            db.query(TrainingLoadRecord)
            .filter(
                and_(
                    TrainingLoadRecord.athlete_id == athlete.id,
                    TrainingLoadRecord.date >= series.dates[0],
                    TrainingLoadRecord.date <= series.dates[-1]
                )
            )
            .all()
        )
        existing_by_date = {record.date: record for record in existing}

        records: list[TrainingLoadRecord] = []
        for i, day in enumerate(series.dates):
            record = existing_by_date.get(day)
            if record is None:
                record = TrainingLoadRecord(athlete_id=athlete.id, date=day)
                db.add(record)

            record.daily_load = series.daily_load[i]
            record.acute = round_half_up(series.acute[i], 1)
            record.chronic = round_half_up(series.chronic[i], 1)
            record.balance = round_half_up(series.balance[i], 1)
            record.zone = self.classify_zone(series.balance[i], series.chronic[i]).value
            records.append(record)

        db.commit()

        updated = len(existing_by_date)
        created = len(records) - updated
        logger.info(
            f"Recalculated {window_days} days of training load for athlete {athlete.id} "
            f"({created} created, {updated} updated)"
        )
        return RecalculationResult(series=series, records=records, created=created, updated=updated)


# Create a singleton instance for convenience
training_load_service = TrainingLoadService(
    acute_time_constant=settings.ACUTE_TIME_CONSTANT,
    chronic_time_constant=settings.CHRONIC_TIME_CONSTANT,
)

"""Workout statistics for the dashboard cards and charts."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from stridelab.services.trimp_service import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkoutTotals:
    """Minimal workout facts needed for period statistics."""
    date: datetime
    duration_seconds: float
    distance_km: float


@dataclass
class PeriodStats:
    """Aggregated statistics for a set of workouts."""
    workout_count: int
    total_distance_km: float
    total_duration_seconds: float
    average_pace_seconds_per_km: float


@dataclass
class PeriodComparison:
    """Current period compared with the previous one."""
    current: PeriodStats
    previous: PeriodStats
    distance_change_percent: float
    duration_change_percent: float
    pace_change_seconds: float  # positive means faster
    workout_count_change: int


def _safe(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    try:
        return float(value) if math.isfinite(value) else 0.0
    except TypeError:
        return 0.0


class WorkoutStatsService:
    """Distance, pace, heart-rate drift and zone statistics."""

    WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

    # Heart rate zones as fractions of max HR, lower bound inclusive
    HR_ZONES = {
        "zone_1": {"name": "Easy", "min": 0.6, "max": 0.7},
        "zone_2": {"name": "Aerobic", "min": 0.7, "max": 0.8},
        "zone_3": {"name": "Tempo", "min": 0.8, "max": 0.9},
        "zone_4": {"name": "Threshold", "min": 0.9, "max": 1.0},
        "zone_5": {"name": "Anaerobic", "min": 1.0, "max": float("inf")},
    }

    def total_distance(self, workouts: Iterable[WorkoutTotals]) -> float:
        """Total distance in km, rounded to one decimal."""
        return round_half_up(sum(_safe(w.distance_km) for w in workouts), 1)

    def total_duration(self, workouts: Iterable[WorkoutTotals]) -> float:
        """Total duration in seconds."""
        return sum(_safe(w.duration_seconds) for w in workouts)

    def average_pace(self, workouts: Sequence[WorkoutTotals]) -> float:
        """
        Average pace over all workouts in seconds per km.

        Total duration divided by total distance, so long runs weigh more.
        Returns 0 when there is no distance.
        """
        total_distance = sum(_safe(w.distance_km) for w in workouts)
        if total_distance <= 0:
            return 0.0

        total_duration = self.total_duration(workouts)
        return round_half_up(total_duration / total_distance)

    def period_stats(self, workouts: Sequence[WorkoutTotals]) -> PeriodStats:
        return PeriodStats(
            workout_count=len(workouts),
            total_distance_km=self.total_distance(workouts),
            total_duration_seconds=self.total_duration(workouts),
            average_pace_seconds_per_km=self.average_pace(workouts),
        )

    def compare_periods(
        self,
        current: Sequence[WorkoutTotals],
        previous: Sequence[WorkoutTotals]
    ) -> PeriodComparison:
        """
        Compare two periods of workouts.

        Percentage changes are 0 unless both periods have a value.
        """
        current_stats = self.period_stats(current)
        previous_stats = self.period_stats(previous)

        def percent_change(now: float, before: float) -> float:
            if now <= 0 or before <= 0:
                return 0.0
            return round_half_up((now - before) / before * 100, 1)

        pace_change = 0.0
        if (
            previous_stats.average_pace_seconds_per_km > 0
            and current_stats.average_pace_seconds_per_km > 0
        ):
            pace_change = (
                previous_stats.average_pace_seconds_per_km
                - current_stats.average_pace_seconds_per_km
            )

        return PeriodComparison(
            current=current_stats,
            previous=previous_stats,
            distance_change_percent=percent_change(
                current_stats.total_distance_km, previous_stats.total_distance_km
            ),
            duration_change_percent=percent_change(
                current_stats.total_duration_seconds, previous_stats.total_duration_seconds
            ),
            pace_change_seconds=pace_change,
            workout_count_change=current_stats.workout_count - previous_stats.workout_count,
        )

    def weekly_distance(
        self,
        workouts: Iterable[WorkoutTotals],
        today: date
    ) -> dict[str, float]:
        """
        Distance per weekday for the week (Monday to Sunday) containing today.

        Returns:
            Ordered mapping of weekday name to km, rounded to one decimal
        """
        week_start = today - timedelta(days=today.weekday())
        totals = {name: 0.0 for name in self.WEEKDAY_NAMES}

        for workout in workouts:
            workout_day = workout.date.date() if isinstance(workout.date, datetime) else workout.date
            if week_start <= workout_day <= today:
                totals[self.WEEKDAY_NAMES[workout_day.weekday()]] += _safe(workout.distance_km)

        return {name: round_half_up(km, 1) for name, km in totals.items()}

    def calculate_hr_drift(self, heart_rates: Sequence[float]) -> float:
        """
        Calculate heart rate drift over a workout.

        HR drift = (avg HR second half - avg HR first half) / avg HR first half × 100

        Args:
            heart_rates: Heart rate stream in bpm

        Returns:
            Drift as a percentage rounded to two decimals, 0 when fewer than
            two samples
        """
        values = [_safe(hr) for hr in heart_rates or []]
        if len(values) < 2:
            return 0.0

        midpoint = len(values) // 2
        first_half = values[:midpoint]
        second_half = values[midpoint:]

        avg_first = sum(first_half) / len(first_half)
        avg_second = sum(second_half) / len(second_half)
        if avg_first <= 0:
            return 0.0

        return round_half_up((avg_second - avg_first) / avg_first * 100, 2)

    def hr_zone_distribution(
        self,
        heart_rates: Sequence[float],
        max_hr: float
    ) -> dict[str, int]:
        """
        Count heart rate samples in each zone.

        Samples below 60% of max HR belong to no zone.

        Args:
            heart_rates: Heart rate stream (1Hz sampling rate)
            max_hr: Athlete maximum heart rate

        Returns:
            Dictionary mapping zone key to seconds spent
        """
        counts = {zone: 0 for zone in self.HR_ZONES}
        max_hr = _safe(max_hr)
        if max_hr <= 0:
            return counts

        for hr in heart_rates or []:
            fraction = _safe(hr) / max_hr
            for zone_key, zone_info in self.HR_ZONES.items():
                if zone_info["min"] <= fraction < zone_info["max"]:
                    counts[zone_key] += 1
                    break

        return counts


# Create a singleton instance for convenience
workout_stats_service = WorkoutStatsService()

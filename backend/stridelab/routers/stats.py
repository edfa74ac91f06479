"""Workout statistics API router for dashboard cards and charts."""

from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stridelab.database import get_db
from stridelab.models.athlete import Athlete
from stridelab.models.workout import Workout
from stridelab.routers.dependencies import get_athlete
from stridelab.schemas.stats import (
    HeartRateZonesResponse,
    PeriodStatsResponse,
    StatsSummaryResponse,
    WeeklyDistanceResponse,
)
from stridelab.services.workout_stats_service import workout_stats_service


router = APIRouter()


def _workouts_between(db: Session, athlete: Athlete, start: date, end: date) -> list[Workout]:
    """Workouts on calendar days start..end inclusive."""
    return db.query(Workout).filter(
        Workout.athlete_id == athlete.id,
        Workout.date >= datetime.combine(start, datetime.min.time()),
        Workout.date < datetime.combine(end + timedelta(days=1), datetime.min.time())
    ).order_by(Workout.date).all()


@router.get("/summary", response_model=StatsSummaryResponse)
async def get_stats_summary(
    days: int = Query(30, ge=1, le=365, description="Period length in days"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> StatsSummaryResponse:
    """
    Distance, duration, pace and workout count for the last `days` days,
    compared with the period of the same length before it.
    """
    today = date.today()
    current_start = today - timedelta(days=days - 1)
    previous_end = current_start - timedelta(days=1)
    previous_start = previous_end - timedelta(days=days - 1)

    comparison = workout_stats_service.compare_periods(
        _workouts_between(db, athlete, current_start, today),
        _workouts_between(db, athlete, previous_start, previous_end),
    )

    return StatsSummaryResponse(
        days=days,
        current=PeriodStatsResponse.model_validate(comparison.current),
        previous=PeriodStatsResponse.model_validate(comparison.previous),
        distance_change_percent=comparison.distance_change_percent,
        duration_change_percent=comparison.duration_change_percent,
        pace_change_seconds=comparison.pace_change_seconds,
        workout_count_change=comparison.workout_count_change,
    )


@router.get("/weekly", response_model=WeeklyDistanceResponse)
async def get_weekly_distance(
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> WeeklyDistanceResponse:
    """Distance per day for the current week, Monday to Sunday."""
    today = date.today()
    week_start = today - timedelta(days=today.weekday())

    workouts = _workouts_between(db, athlete, week_start, today)
    return WeeklyDistanceResponse(
        days=workout_stats_service.weekly_distance(workouts, today),
        total_km=workout_stats_service.total_distance(workouts),
    )


@router.get("/hr-zones", response_model=HeartRateZonesResponse)
async def get_heart_rate_zones(
    days: int = Query(28, ge=1, le=365, description="Period length in days"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> HeartRateZonesResponse:
    """Total time in each heart rate zone over the last `days` days."""
    today = date.today()
    zone_keys = workout_stats_service.HR_ZONES
    totals = {zone: 0 for zone in zone_keys}

    for workout in _workouts_between(db, athlete, today - timedelta(days=days - 1), today):
        for zone, seconds in (workout.hr_zones or {}).items():
            if zone in totals:
                totals[zone] += int(seconds)

    return HeartRateZonesResponse(
        days=days,
        zones=totals,
        zone_names={key: info["name"] for key, info in zone_keys.items()},
    )

"""Training load API router for ATL/CTL/TSB tracking."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stridelab.config import settings
from stridelab.database import get_db
from stridelab.exceptions import ValidationError
from stridelab.models.athlete import Athlete
from stridelab.models.training_load import TrainingLoadRecord
from stridelab.routers.dependencies import get_athlete
from stridelab.schemas.training_load import (
    DailyLoadPoint,
    RecalculateResponse,
    TrainingLoadComputeRequest,
    TrainingLoadRecordResponse,
    TrainingLoadResponse,
    TrainingStatusResponse,
)
from stridelab.services.training_load_service import (
    ZONE_DESCRIPTIONS,
    LoadBalanceSeries,
    training_load_service,
)
from stridelab.services.trimp_service import AthleteProfile, WorkoutSample, round_half_up

logger = logging.getLogger(__name__)

# Routes scoped to one stored athlete
router = APIRouter()

# Stateless computation, no persistence
compute_router = APIRouter()


def _window_days(days: Optional[int]) -> int:
    return days or settings.TRAINING_WINDOW_DAYS


def build_status(series: LoadBalanceSeries) -> TrainingStatusResponse:
    """Status card values for the last day of a series, rounded for display."""
    return TrainingStatusResponse(
        date=series.dates[-1],
        atl=round_half_up(series.current_acute, 1),
        ctl=round_half_up(series.current_chronic, 1),
        tsb=round_half_up(series.current_balance, 1),
        zone=series.zone,
        zone_description=ZONE_DESCRIPTIONS[series.zone],
        ramp_rate=series.ramp_rate,
    )


def build_response(series: LoadBalanceSeries) -> TrainingLoadResponse:
    """Chart-ready response for a computed series."""
    return TrainingLoadResponse(
        days=[
            DailyLoadPoint(
                date=day,
                daily_load=series.daily_load[i],
                atl=round_half_up(series.acute[i], 1),
                ctl=round_half_up(series.chronic[i], 1),
                tsb=round_half_up(series.balance[i], 1),
            )
            for i, day in enumerate(series.dates)
        ],
        status=build_status(series),
        workout_scores=series.workout_scores,
        total_load=series.total_load,
        training_days=series.training_days,
    )


@router.get("/", response_model=TrainingLoadResponse)
async def get_training_load(
    days: Optional[int] = Query(None, ge=1, le=365, description="Number of days in the window"),
    reference_date: Optional[date] = Query(None, description="Last day of the window (default today)"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> TrainingLoadResponse:
    """
    Compute daily load, ATL, CTL and TSB for an athlete.

    Values are computed from the stored workouts on every request.

    Args:
        days: Number of days in the window (default from settings)
        reference_date: Last day of the window
        athlete: The athlete from the path
        db: Database session

    Returns:
        Daily series, oldest first, and the current status
    """
    series = training_load_service.compute_for_athlete(
        db, athlete, _window_days(days), reference_date
    )
    return build_response(series)


@router.get("/status", response_model=TrainingStatusResponse)
async def get_training_status(
    days: Optional[int] = Query(None, ge=1, le=365, description="Number of days in the window"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> TrainingStatusResponse:
    """
    Get the current training status: ATL, CTL, TSB, zone and ramp rate.
    """
    series = training_load_service.compute_for_athlete(db, athlete, _window_days(days))
    return build_status(series)


@router.post("/recalculate", response_model=RecalculateResponse)
async def recalculate_training_load(
    days: Optional[int] = Query(None, ge=1, le=365, description="Number of days to recalculate"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> RecalculateResponse:
    """
    Recompute the window and store one training load record per day.

    Existing records for a day are overwritten.
    """
    window_days = _window_days(days)
    logger.info(f"Recalculating {window_days} days of training load for athlete {athlete.id}")

    result = training_load_service.recalculate(db, athlete, window_days)

    return RecalculateResponse(
        days_calculated=len(result.records),
        records_created=result.created,
        records_updated=result.updated,
        status=build_status(result.series),
    )


@router.get("/history", response_model=List[TrainingLoadRecordResponse])
async def get_training_load_history(
    from_date: Optional[date] = Query(None, description="Start date for records"),
    to_date: Optional[date] = Query(None, description="End date for records"),
    limit: int = Query(90, ge=1, le=365, description="Maximum number of days to return"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> List[TrainingLoadRecord]:
    """
    List stored training load records, oldest first.

    Returns the most recent `limit` days matching the filters.
    """
    if from_date and to_date and from_date > to_date:
        raise ValidationError("from_date must not be after to_date", field="from_date")

    query = db.query(TrainingLoadRecord).filter(TrainingLoadRecord.athlete_id == athlete.id)

    if from_date:
        query = query.filter(TrainingLoadRecord.date >= from_date)
    if to_date:
        query = query.filter(TrainingLoadRecord.date <= to_date)

    records = query.order_by(TrainingLoadRecord.date.desc()).limit(limit).all()
    return list(reversed(records))


@compute_router.post("/compute", response_model=TrainingLoadResponse)
async def compute_training_load(payload: TrainingLoadComputeRequest) -> TrainingLoadResponse:
    """
    Compute a training load window from workouts in the request body.

    Nothing is stored. Workout scores are returned in request order.
    """
    samples = [WorkoutSample(**w.model_dump()) for w in payload.workouts]
    profile = AthleteProfile(**payload.profile.model_dump()) if payload.profile else None

    series = training_load_service.compute_load_balance(
        samples,
        payload.window_days,
        payload.reference_date or date.today(),
        profile,
    )
    return build_response(series)

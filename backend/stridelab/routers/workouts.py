"""Workouts API router for uploading and managing training sessions."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from stridelab.database import get_db
from stridelab.exceptions import NotFoundError
from stridelab.models.athlete import Athlete
from stridelab.models.workout import Workout
from stridelab.routers.dependencies import get_athlete
from stridelab.schemas.workout import WorkoutCreate, WorkoutResponse
from stridelab.services.trimp_service import trimp_service
from stridelab.services.workout_stats_service import workout_stats_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_workout(db: Session, athlete: Athlete, workout_id: int) -> Workout:
    workout = db.query(Workout).filter(
        Workout.id == workout_id,
        Workout.athlete_id == athlete.id
    ).first()

    if not workout:
        logger.warning(f"Workout {workout_id} not found for athlete {athlete.id}")
        raise NotFoundError("Workout", workout_id)

    return workout


@router.get("/", response_model=List[WorkoutResponse])
async def list_workouts(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of records to return"),
    workout_type: Optional[str] = Query(None, description="Filter by workout type (e.g., run, ride)"),
    from_date: Optional[datetime] = Query(None, description="Filter workouts from this date"),
    to_date: Optional[datetime] = Query(None, description="Filter workouts up to this date"),
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> List[Workout]:
    """
    List workouts for an athlete, newest first.

    Args:
        skip: Number of records to skip for pagination
        limit: Maximum number of records to return
        workout_type: Optional filter by workout type
        from_date: Optional filter for workouts after this date
        to_date: Optional filter for workouts before this date
        athlete: The athlete from the path
        db: Database session

    Returns:
        List of workouts
    """
    query = db.query(Workout).filter(Workout.athlete_id == athlete.id)

    if workout_type:
        query = query.filter(Workout.workout_type == workout_type)
    if from_date:
        query = query.filter(Workout.date >= from_date)
    if to_date:
        query = query.filter(Workout.date <= to_date)

    query = query.order_by(Workout.date.desc())
    return query.offset(skip).limit(limit).all()


@router.post("/", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
    payload: WorkoutCreate,
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> Workout:
    """
    Store a workout and score its training load.

    TRIMP is computed with the athlete's heart rate profile. When a heart
    rate stream is included, heart rate drift and time in zones are stored
    too.
    """
    data = payload.model_dump(exclude={"heart_rate_samples"})
    workout = Workout(athlete_id=athlete.id, **data)

    profile = athlete.to_profile()
    sample = workout.to_sample()
    workout.trimp = trimp_service.score_session(sample, profile)

    if payload.heart_rate_samples:
        workout.hr_drift = workout_stats_service.calculate_hr_drift(payload.heart_rate_samples)
        workout.hr_zones = workout_stats_service.hr_zone_distribution(
            payload.heart_rate_samples, trimp_service.resolve_max_heart_rate(sample, profile)
        )

    db.add(workout)
    db.commit()
    db.refresh(workout)

    logger.info(f"Created workout {workout.id} for athlete {athlete.id} with TRIMP {workout.trimp}")
    return workout


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: int,
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> Workout:
    """
    Get workout details by ID.

    Raises:
        NotFoundError: 404 if workout not found or doesn't belong to the athlete
    """
    return _get_workout(db, athlete, workout_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: int,
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> Response:
    """
    Delete a workout.

    Raises:
        NotFoundError: 404 if workout not found or doesn't belong to the athlete
    """
    workout = _get_workout(db, athlete, workout_id)
    db.delete(workout)
    db.commit()

    logger.info(f"Deleted workout {workout_id} for athlete {athlete.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

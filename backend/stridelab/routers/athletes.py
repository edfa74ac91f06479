"""Athletes API router for managing athlete profiles."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stridelab.database import get_db
from stridelab.exceptions import ConflictError, ValidationError
from stridelab.models.athlete import Athlete
from stridelab.routers.dependencies import get_athlete
from stridelab.schemas.athlete import AthleteCreate, AthleteResponse, AthleteUpdate
from stridelab.services.trimp_service import trimp_service

logger = logging.getLogger(__name__)

router = APIRouter()

# Profile fields that change a workout's TRIMP
HEART_RATE_PROFILE_FIELDS = {"max_hr", "resting_hr", "sex"}


def _rescore_workouts(athlete: Athlete) -> int:
    """Recompute stored TRIMP for every workout with the current profile."""
    profile = athlete.to_profile()
    for workout in athlete.workouts:
        workout.trimp = trimp_service.score_session(workout.to_sample(), profile)
    return len(athlete.workouts)


def _ensure_email_available(db: Session, email: Optional[str], athlete_id: Optional[int] = None) -> None:
    if not email:
        return
    query = db.query(Athlete).filter(Athlete.email == email)
    if athlete_id is not None:
        query = query.filter(Athlete.id != athlete_id)
    if query.first():
        raise ConflictError(f"Athlete with email {email} already exists")


@router.post("/", response_model=AthleteResponse, status_code=status.HTTP_201_CREATED)
async def create_athlete(
    payload: AthleteCreate,
    db: Session = Depends(get_db),
) -> Athlete:
    """
    Create an athlete profile.

    Raises:
        ConflictError: 409 if the email is already registered
    """
    _ensure_email_available(db, payload.email)

    data = payload.model_dump()
    if data.get("sex") is not None:
        data["sex"] = data["sex"].value
    athlete = Athlete(**data)
    db.add(athlete)
    db.commit()
    db.refresh(athlete)

    logger.info(f"Created athlete {athlete.id}")
    return athlete


@router.get("/{athlete_id}", response_model=AthleteResponse)
async def get_athlete_profile(athlete: Athlete = Depends(get_athlete)) -> Athlete:
    """Get an athlete profile by ID."""
    return athlete


@router.patch("/{athlete_id}", response_model=AthleteResponse)
async def update_athlete(
    payload: AthleteUpdate,
    athlete: Athlete = Depends(get_athlete),
    db: Session = Depends(get_db),
) -> Athlete:
    """
    Update an athlete profile. Only the fields sent are changed.

    Changing max HR, resting HR or sex rescores the stored workouts.

    Raises:
        ConflictError: 409 if the new email is already registered
        ValidationError: 422 if max HR would not exceed resting HR
    """
    changes = payload.model_dump(exclude_unset=True)
    _ensure_email_available(db, changes.get("email"), athlete.id)

    max_hr = changes.get("max_hr", athlete.max_hr)
    resting_hr = changes.get("resting_hr", athlete.resting_hr)
    if max_hr is not None and resting_hr is not None and max_hr <= resting_hr:
        raise ValidationError("max_hr must be greater than resting_hr", field="max_hr")

    for key, value in changes.items():
        if key == "sex" and value is not None:
            value = value.value
        setattr(athlete, key, value)

    if HEART_RATE_PROFILE_FIELDS.intersection(changes):
        rescored = _rescore_workouts(athlete)
        logger.info(f"Rescored {rescored} workouts for athlete {athlete.id}")

    db.commit()
    db.refresh(athlete)

    logger.info(f"Updated athlete {athlete.id}: {sorted(changes)}")
    return athlete

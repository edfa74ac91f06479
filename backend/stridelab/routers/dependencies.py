"""Shared router dependencies."""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from stridelab.database import get_db
from stridelab.exceptions import NotFoundError
from stridelab.models.athlete import Athlete

logger = logging.getLogger(__name__)


def get_athlete(athlete_id: int, db: Session = Depends(get_db)) -> Athlete:
    """
    Resolve the athlete from the path.

    Raises:
        NotFoundError: 404 if the athlete does not exist
    """
    athlete = db.query(Athlete).filter(Athlete.id == athlete_id).first()
    if not athlete:
        logger.warning(f"Athlete {athlete_id} not found")
        raise NotFoundError("Athlete", athlete_id)
    return athlete

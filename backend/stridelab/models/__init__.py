"""Database models for the StrideLab application."""

from stridelab.models.base import Base
from stridelab.models.athlete import Athlete
from stridelab.models.workout import Workout
from stridelab.models.training_load import TrainingLoadRecord

__all__ = [
    "Base",
    "Athlete",
    "Workout",
    "TrainingLoadRecord",
]

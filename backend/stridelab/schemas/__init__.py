"""Pydantic schemas package for API request/response models."""

from stridelab.schemas.athlete import (
    AthleteCreate,
    AthleteResponse,
    AthleteUpdate,
)
from stridelab.schemas.workout import (
    WorkoutCreate,
    WorkoutResponse,
)
from stridelab.schemas.training_load import (
    AthleteProfileIn,
    DailyLoadPoint,
    RecalculateResponse,
    TrainingLoadComputeRequest,
    TrainingLoadRecordResponse,
    TrainingLoadResponse,
    TrainingStatusResponse,
    WorkoutSampleIn,
)
from stridelab.schemas.stats import (
    HeartRateZonesResponse,
    PeriodStatsResponse,
    StatsSummaryResponse,
    WeeklyDistanceResponse,
)

__all__ = [
    # Athlete schemas
    "AthleteCreate",
    "AthleteResponse",
    "AthleteUpdate",
    # Workout schemas
    "WorkoutCreate",
    "WorkoutResponse",
    # Training load schemas
    "AthleteProfileIn",
    "DailyLoadPoint",
    "RecalculateResponse",
    "TrainingLoadComputeRequest",
    "TrainingLoadRecordResponse",
    "TrainingLoadResponse",
    "TrainingStatusResponse",
    "WorkoutSampleIn",
    # Stats schemas
    "HeartRateZonesResponse",
    "PeriodStatsResponse",
    "StatsSummaryResponse",
    "WeeklyDistanceResponse",
]

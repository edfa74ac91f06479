"""Services package for business logic."""

from stridelab.services.trimp_service import (
    AthleteProfile,
    Sex,
    TrimpService,
    WorkoutSample,
    trimp_service,
)
from stridelab.services.training_load_service import (
    LoadBalanceSeries,
    RecalculationResult,
    TrainingLoadService,
    TrainingLoadZone,
    ZONE_DESCRIPTIONS,
    training_load_service,
)
from stridelab.services.workout_stats_service import (
    WorkoutStatsService,
    workout_stats_service,
)

__all__ = [
    "AthleteProfile",
    "Sex",
    "TrimpService",
    "WorkoutSample",
    "trimp_service",
    "LoadBalanceSeries",
    "RecalculationResult",
    "ZONE_DESCRIPTIONS",
    "TrainingLoadService",
    "TrainingLoadZone",
    "training_load_service",
    "WorkoutStatsService",
    "workout_stats_service",
]

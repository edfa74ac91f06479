"""Pydantic schemas for workout-related API operations."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WorkoutBase(BaseModel):
    """Base schema for workout data."""

    title: str = Field(..., min_length=1, max_length=255, description="Workout title")
    workout_type: str = Field("run", max_length=50, description="Workout type (e.g., run, ride)")
    date: datetime = Field(..., description="Workout date and time")
    duration_seconds: int = Field(..., ge=0, description="Duration in seconds")
    distance_km: float = Field(0.0, ge=0, description="Distance in kilometers")
    elevation_gain_m: float = Field(0.0, ge=0, description="Elevation gain in meters")
    avg_heart_rate: Optional[float] = Field(None, gt=0, description="Average heart rate in bpm")
    max_heart_rate: Optional[float] = Field(None, gt=0, description="Max heart rate in bpm")
    calories: Optional[float] = Field(None, ge=0, description="Calories burned")


class WorkoutCreate(WorkoutBase):
    """Schema for creating a workout from an upload or manual entry."""

    heart_rate_samples: Optional[list[float]] = Field(
        None,
        description="Heart rate stream (1Hz) used for drift and zone time"
    )


class WorkoutResponse(WorkoutBase):
    """Schema for workout API responses."""

    id: int = Field(..., description="Workout ID")
    athlete_id: int = Field(..., description="Athlete ID")
    trimp: float = Field(..., ge=0, description="Training Impulse score")
    hr_drift: Optional[float] = Field(None, description="Heart rate drift in percent")
    hr_zones: Optional[dict[str, int]] = Field(None, description="Seconds spent per heart rate zone")
    average_pace: Optional[float] = Field(None, description="Average pace in seconds per km")
    created_at: datetime = Field(..., description="Created timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "athlete_id": 42,
                "title": "Tempo Run",
                "workout_type": "run",
                "date": "2024-01-15T07:30:00Z",
                "duration_seconds": 3000,
                "distance_km": 10.0,
                "elevation_gain_m": 85,
                "avg_heart_rate": 158,
                "max_heart_rate": 176,
                "calories": 640,
                "trimp": 96,
                "hr_drift": 3.4,
                "hr_zones": {"zone_1": 120, "zone_2": 600, "zone_3": 1800, "zone_4": 480, "zone_5": 0},
                "average_pace": 300.0,
                "created_at": "2024-01-15T10:00:00Z"
            }
        }

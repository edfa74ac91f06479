"""Pydantic schemas for training load API operations."""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stridelab.services.trimp_service import Sex
from stridelab.services.training_load_service import TrainingLoadZone


class DailyLoadPoint(BaseModel):
    """Training load values for one day."""

    date: date_type = Field(..., description="Calendar day")
    daily_load: float = Field(..., ge=0, description="Sum of session TRIMP for the day")
    atl: float = Field(..., description="Acute Training Load (Fatigue)")
    ctl: float = Field(..., description="Chronic Training Load (Fitness)")
    tsb: float = Field(..., description="Training Stress Balance (Form)")


class TrainingStatusResponse(BaseModel):
    """Schema for the current training status card."""

    date: date_type = Field(..., description="Date of the status")
    atl: float = Field(..., description="Current ATL (Fatigue)")
    ctl: float = Field(..., description="Current CTL (Fitness)")
    tsb: float = Field(..., description="Current TSB (Form)")
    zone: TrainingLoadZone = Field(..., description="Training load zone")
    zone_description: str = Field(..., description="Human-readable zone explanation")
    ramp_rate: float = Field(..., description="CTL change per week")

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2024-01-15",
                "atl": 68.4,
                "ctl": 55.2,
                "tsb": -13.2,
                "zone": "Optimal",
                "zone_description": "Optimal training stress for performance gains. Monitor recovery.",
                "ramp_rate": 3.5
            }
        }


class TrainingLoadResponse(BaseModel):
    """Schema for a computed training load window."""

    days: list[DailyLoadPoint] = Field(..., description="Daily values, oldest first")
    status: TrainingStatusResponse = Field(..., description="Status for the last day")
    workout_scores: list[int] = Field(
        default_factory=list,
        description="TRIMP per submitted workout, in request order"
    )
    total_load: float = Field(..., ge=0, description="Total load in the window")
    training_days: int = Field(..., ge=0, description="Days with at least one workout")


class WorkoutSampleIn(BaseModel):
    """A workout submitted for stateless computation."""

    date: datetime = Field(..., description="Workout date and time")
    duration_seconds: float = Field(..., description="Duration in seconds")
    distance_km: float = Field(0.0, description="Distance in kilometers")
    elevation_gain_m: float = Field(0.0, description="Elevation gain in meters")
    avg_heart_rate: Optional[float] = Field(None, description="Average heart rate in bpm, 0 when not recorded")
    max_heart_rate: Optional[float] = Field(None, description="Max heart rate in bpm")


class AthleteProfileIn(BaseModel):
    """Heart rate profile for stateless computation."""

    max_heart_rate: Optional[float] = Field(
        None, gt=0, description="Maximum heart rate in bpm, the session max (or 190) when omitted"
    )
    resting_heart_rate: float = Field(60, gt=0, description="Resting heart rate in bpm")
    sex: Optional[Sex] = Field(None, description="Selects the TRIMP gender factor")


class TrainingLoadComputeRequest(BaseModel):
    """Schema for stateless training load computation."""

    workouts: list[WorkoutSampleIn] = Field(default_factory=list, description="Workouts to score")
    profile: Optional[AthleteProfileIn] = Field(None, description="Athlete heart rate profile")
    window_days: int = Field(60, ge=1, le=365, description="Number of days in the window")
    reference_date: Optional[date_type] = Field(None, description="Last day of the window (default today)")


class TrainingLoadRecordResponse(BaseModel):
    """Schema for a stored daily training load record."""

    id: int = Field(..., description="Record ID")
    athlete_id: int = Field(..., description="Athlete ID")
    date: date_type = Field(..., description="Calendar day")
    daily_load: float = Field(..., ge=0, description="Sum of session TRIMP for the day")
    acute: float = Field(..., description="Acute Training Load (Fatigue)")
    chronic: float = Field(..., description="Chronic Training Load (Fitness)")
    balance: float = Field(..., description="Training Stress Balance (Form)")
    zone: TrainingLoadZone = Field(..., description="Training load zone")

    class Config:
        from_attributes = True


class RecalculateResponse(BaseModel):
    """Schema for a stored recalculation result."""

    days_calculated: int = Field(..., ge=0, description="Number of days calculated")
    records_created: int = Field(..., ge=0, description="Number of new records created")
    records_updated: int = Field(..., ge=0, description="Number of records updated")
    status: TrainingStatusResponse = Field(..., description="Status after recalculation")

    class Config:
        json_schema_extra = {
            "example": {
                "days_calculated": 60,
                "records_created": 30,
                "records_updated": 30,
                "status": {
                    "date": "2024-01-15",
                    "atl": 68.4,
                    "ctl": 55.2,
                    "tsb": -13.2,
                    "zone": "Optimal",
                    "zone_description": "Optimal training stress for performance gains. Monitor recovery.",
                    "ramp_rate": 3.5
                }
            }
        }

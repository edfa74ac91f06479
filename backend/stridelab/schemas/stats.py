"""Pydantic schemas for workout statistics."""

from pydantic import BaseModel, Field


class PeriodStatsResponse(BaseModel):
    """Aggregated statistics for one period."""

    workout_count: int = Field(..., ge=0, description="Number of workouts")
    total_distance_km: float = Field(..., ge=0, description="Total distance in km")
    total_duration_seconds: float = Field(..., ge=0, description="Total duration in seconds")
    average_pace_seconds_per_km: float = Field(..., ge=0, description="Average pace, 0 without distance")

    class Config:
        from_attributes = True


class StatsSummaryResponse(BaseModel):
    """Current period compared with the previous period of equal length."""

    days: int = Field(..., ge=1, description="Period length in days")
    current: PeriodStatsResponse
    previous: PeriodStatsResponse
    distance_change_percent: float = Field(..., description="Distance change in percent")
    duration_change_percent: float = Field(..., description="Duration change in percent")
    pace_change_seconds: float = Field(..., description="Seconds per km faster than the previous period")
    workout_count_change: int = Field(..., description="Change in number of workouts")


class WeeklyDistanceResponse(BaseModel):
    """Distance per weekday for the current week."""

    days: dict[str, float] = Field(..., description="Weekday name to distance in km")
    total_km: float = Field(..., ge=0, description="Total distance this week")


class HeartRateZonesResponse(BaseModel):
    """Time in heart rate zones over a period."""

    days: int = Field(..., ge=1, description="Period length in days")
    zones: dict[str, int] = Field(..., description="Zone key to seconds")
    zone_names: dict[str, str] = Field(..., description="Zone key to zone name")

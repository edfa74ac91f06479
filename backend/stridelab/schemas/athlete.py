"""Pydantic schemas for athlete profile API operations."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from stridelab.services.trimp_service import Sex


class AthleteBase(BaseModel):
    """Base schema for athlete profile data."""

    email: Optional[EmailStr] = Field(None, description="Athlete email address")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    max_hr: Optional[int] = Field(None, gt=0, le=250, description="Maximum heart rate in bpm")
    resting_hr: Optional[int] = Field(None, gt=0, le=150, description="Resting heart rate in bpm")
    sex: Optional[Sex] = Field(None, description="Selects the TRIMP gender factor")

    @model_validator(mode="after")
    def check_heart_rate_range(self):
        if self.max_hr is not None and self.resting_hr is not None and self.max_hr <= self.resting_hr:
            raise ValueError("max_hr must be greater than resting_hr")
        return self


class AthleteCreate(AthleteBase):
    """Schema for creating an athlete."""
    pass


class AthleteUpdate(AthleteBase):
    """Schema for updating an athlete profile. Omitted fields are left unchanged."""
    pass


class AthleteResponse(AthleteBase):
    """Schema for athlete API responses."""

    id: int = Field(..., description="Athlete ID")
    created_at: datetime = Field(..., description="Created timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "email": "runner@example.com",
                "first_name": "Alex",
                "last_name": "Doe",
                "max_hr": 188,
                "resting_hr": 52,
                "sex": "female",
                "created_at": "2024-01-15T10:00:00Z"
            }
        }

"""User profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import ActivityLevel, Gender, WeightGoalType


class ProfileUpdate(BaseModel):
    """Full profile replace; omitted enums reset to their defaults."""

    name: str = Field("", max_length=255)
    age: int | None = Field(None, ge=1, le=120, description="Age in years")
    weight: float | None = Field(None, gt=0, lt=500, description="Body weight in kg")
    height: float | None = Field(None, gt=0, lt=300, description="Height in cm")
    gender: Gender = Gender.OTHER
    activity: ActivityLevel = ActivityLevel.MODERATE
    goal: WeightGoalType = WeightGoalType.MAINTAIN


class ProfileRead(BaseModel):
    """Profile merged with the derived stats. Stats are absent (null) when inputs are missing."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    age: int | None = None
    weight: float | None = None
    height: float | None = None
    gender: str
    activity: str
    goal: str
    created_at: datetime

    bmi: float | None = None
    bmi_category: str | None = None
    bmr: int | None = None
    tdee: int | None = None
    calorie_target: int | None = None

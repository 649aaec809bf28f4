"""Weight goal and weight log schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WeightGoalCreate(BaseModel):
    target_weight: float = Field(..., gt=0, lt=500)
    target_date: date
    notes: str | None = None


class WeightGoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    start_weight: float
    target_weight: float
    target_date: date
    notes: str | None = None
    active: bool
    created_at: datetime


class WeightLogCreate(BaseModel):
    weight: float = Field(..., gt=0, lt=500)
    note: str | None = None


class WeightLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    weight: float
    note: str | None = None
    logged_at: datetime


class WeightProgressResponse(BaseModel):
    goal: WeightGoalRead | None = None
    logs: list[WeightLogRead]

"""Fasting session schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import FastingStatus


class FastingStart(BaseModel):
    # Non-positive values fall back to the default target rather than failing
    target_hours: float | None = Field(None, description="Goal length in hours (default 16)")
    protocol: str | None = Field(None, max_length=20, description='Label such as "16:8" (default)')


class FastingEnd(BaseModel):
    feeling: str | None = None
    note: str | None = None


class FastingSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    started_at: datetime
    ended_at: datetime | None = None
    target_hours: float
    actual_hours: float | None = None
    protocol: str
    status: FastingStatus
    feeling: str | None = None
    note: str | None = None


class ActiveFastingSessionRead(FastingSessionRead):
    """Running session with values derived from the clock at read time."""

    elapsed_hours: float
    goal_reached: bool


class FastingStartResponse(BaseModel):
    session: FastingSessionRead


class FastingEndResponse(BaseModel):
    success: bool = True
    actual_hours: float


class FastingCurrentResponse(BaseModel):
    session: ActiveFastingSessionRead | None = None


class FastingStats(BaseModel):
    total: int = 0
    avg_hours: float | None = None
    best_hours: float | None = None
    completed_goal_count: int = 0


class FastingHistoryResponse(BaseModel):
    sessions: list[FastingSessionRead]
    stats: FastingStats

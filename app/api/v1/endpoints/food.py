"""Food log endpoints — log entries, per-day list with totals, range summary."""

from __future__ import annotations

import uuid
from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, get_current_user_id
from app.core.clock import Clock
from app.core.config import get_settings
from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models.food_log import FoodLog
from app.schemas.food import (
    CreatedResponse,
    DailyTotals,
    FoodLogCreate,
    FoodLogRead,
    FoodLogsResponse,
    FoodSummaryResponse,
    NutritionTotals,
    SuccessResponse,
)
from app.services.nutrition import daily_totals, range_totals

router = APIRouter()


@router.post("/log", response_model=CreatedResponse)
async def log_food(
    payload: FoodLogCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock),
    db: AsyncSession = Depends(get_db),
):
    data = payload.model_dump()
    data["meal_type"] = payload.meal_type.value
    data["log_date"] = payload.log_date or clock().date()
    entry = FoodLog(user_id=user_id, logged_at=clock(), **data)
    db.add(entry)
    await db.flush()
    return CreatedResponse(id=entry.id)


@router.get("/logs", response_model=FoodLogsResponse)
async def list_food_logs(
    day: date | None = Query(None, alias="date", description="Day to list (default today, UTC)"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock),
    db: AsyncSession = Depends(get_db),
):
    """Entries for one day in logging order, with zero-filled totals."""
    day = day or clock().date()
    result = await db.execute(
        select(FoodLog)
        .where(FoodLog.user_id == user_id, FoodLog.log_date == day)
        .order_by(FoodLog.logged_at.asc())
    )
    logs = result.scalars().all()
    totals = await daily_totals(db, user_id, day)
    return FoodLogsResponse(
        logs=[FoodLogRead.model_validate(entry) for entry in logs],
        totals=NutritionTotals(**totals),
        date=day,
    )


@router.get("/summary", response_model=FoodSummaryResponse)
async def food_summary(
    from_day: date | None = Query(None, alias="from"),
    to_day: date | None = Query(None, alias="to"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    clock: Clock = Depends(get_clock),
    db: AsyncSession = Depends(get_db),
):
    """Per-day totals, only for days with entries. Defaults to the 30 days ending today."""
    to_day = to_day or clock().date()
    from_day = from_day or to_day - timedelta(days=get_settings().food_summary_default_days - 1)
    rows = await range_totals(db, user_id, from_day, to_day)
    return FoodSummaryResponse(
        rows=[DailyTotals(**r) for r in rows],
        from_date=from_day,
        to_date=to_day,
    )


@router.delete("/log/{log_id}", response_model=SuccessResponse)
async def delete_food_log(
    log_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        delete(FoodLog).where(FoodLog.id == log_id, FoodLog.user_id == user_id)
    )
    if result.rowcount == 0:
        raise NotFoundError("Entry not found.")
    return SuccessResponse(success=True)

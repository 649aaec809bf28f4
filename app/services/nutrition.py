"""Nutrition totals over logged food entries.

daily_totals always returns all five keys (zeros on an empty day);
range_totals only returns days that have at least one entry. Callers that draw
charts fill the gaps themselves.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError
from app.models.food_log import FoodLog

NUTRIENTS = ("calories", "protein", "carbs", "fat", "fiber")


def _sum_columns():
    return [func.coalesce(func.sum(getattr(FoodLog, n)), 0).label(n) for n in NUTRIENTS]


async def daily_totals(db: AsyncSession, user_id: uuid.UUID, day: date) -> dict[str, float]:
    """Sum of each nutrient for one day; zero-filled when nothing was logged."""
    result = await db.execute(
        select(*_sum_columns()).where(FoodLog.user_id == user_id, FoodLog.log_date == day)
    )
    row = result.one()
    return {n: float(getattr(row, n) or 0) for n in NUTRIENTS}


async def range_totals(
    db: AsyncSession,
    user_id: uuid.UUID,
    from_day: date,
    to_day: date,
) -> list[dict[str, Any]]:
    """Per-day sums for from_day..to_day inclusive, ascending, days without entries omitted."""
    if from_day > to_day:
        raise ValidationError("'from' must be on or before 'to'.")
    result = await db.execute(
        select(FoodLog.log_date, *_sum_columns())
        .where(
            FoodLog.user_id == user_id,
            FoodLog.log_date >= from_day,
            FoodLog.log_date <= to_day,
        )
        .group_by(FoodLog.log_date)
        .order_by(FoodLog.log_date.asc())
    )
    rows = []
    for row in result.all():
        d = row.log_date
        if isinstance(d, str):
            d = date.fromisoformat(d)
        rows.append({"log_date": d, **{n: float(getattr(row, n) or 0) for n in NUTRIENTS}})
    return rows

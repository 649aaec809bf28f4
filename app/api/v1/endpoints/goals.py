"""Weight goal endpoints — store/retrieve the active goal and weight entries."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.api.v1.endpoints.user import get_user
from app.core.constants import WEIGHT_LOGS_LIMIT
from app.db.session import get_db
from app.models.weight import WeightGoal, WeightLog
from app.schemas.food import CreatedResponse, SuccessResponse
from app.schemas.goals import (
    WeightGoalCreate,
    WeightGoalRead,
    WeightLogCreate,
    WeightLogRead,
    WeightProgressResponse,
)

router = APIRouter()


@router.get("/weight", response_model=WeightProgressResponse)
async def get_weight_progress(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Latest goal (or null) plus the most recent weight entries."""
    goal_result = await db.execute(
        select(WeightGoal)
        .where(WeightGoal.user_id == user_id)
        .order_by(WeightGoal.created_at.desc())
        .limit(1)
    )
    goal = goal_result.scalar_one_or_none()
    logs_result = await db.execute(
        select(WeightLog)
        .where(WeightLog.user_id == user_id)
        .order_by(WeightLog.logged_at.desc())
        .limit(WEIGHT_LOGS_LIMIT)
    )
    return WeightProgressResponse(
        goal=WeightGoalRead.model_validate(goal) if goal else None,
        logs=[WeightLogRead.model_validate(w) for w in logs_result.scalars().all()],
    )


@router.post("/weight", response_model=CreatedResponse)
async def set_weight_goal(
    payload: WeightGoalCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a goal; every earlier goal of the user is deactivated first."""
    user = await get_user(db, user_id)
    await db.execute(update(WeightGoal).where(WeightGoal.user_id == user_id).values(active=False))
    goal = WeightGoal(
        user_id=user_id,
        start_weight=user.weight or 0,
        target_weight=payload.target_weight,
        target_date=payload.target_date,
        notes=payload.notes,
        active=True,
    )
    db.add(goal)
    await db.flush()
    return CreatedResponse(id=goal.id)


@router.delete("/weight/{goal_id}", response_model=SuccessResponse)
async def delete_weight_goal(
    goal_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await db.execute(
        delete(WeightGoal).where(WeightGoal.id == goal_id, WeightGoal.user_id == user_id)
    )
    return SuccessResponse(success=True)


@router.post("/weight/log", response_model=CreatedResponse)
async def log_weight(
    payload: WeightLogCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    entry = WeightLog(user_id=user_id, weight=payload.weight, note=payload.note)
    db.add(entry)
    await db.flush()
    return CreatedResponse(id=entry.id)

"""User profile endpoints — profile fields merged with derived metabolic stats."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import ProfileRead, ProfileUpdate
from app.services.metabolic_stats import compute_stats, profile_of

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found.")
    return user


def _profile_read(user: User) -> ProfileRead:
    read = ProfileRead.model_validate(user)
    return read.model_copy(update=compute_stats(profile_of(user)))


@router.get("/profile", response_model=ProfileRead)
async def get_profile(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await get_user(db, user_id)
    return _profile_read(user)


@router.put("/profile", response_model=ProfileRead)
async def update_profile(
    payload: ProfileUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Replace the profile fields. Session is committed by get_db after this returns."""
    user = await get_user(db, user_id)
    user.name = payload.name
    user.age = payload.age
    user.weight = payload.weight
    user.height = payload.height
    user.gender = payload.gender.value
    user.activity = payload.activity.value
    user.goal = payload.goal.value
    await db.flush()
    await db.refresh(user)
    logger.info("Profile updated for user %s", user_id)
    return _profile_read(user)

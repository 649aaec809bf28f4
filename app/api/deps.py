"""Shared FastAPI dependencies: caller identity, clock, fasting machine."""

from __future__ import annotations

import uuid

from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import Clock, utcnow
from app.core.config import get_settings
from app.db.session import get_db
from app.models.user import User
from app.services.fasting import FastingSessionMachine
from app.services.fasting_store import SqlFastingSessionStore


async def get_current_user_id(
    x_user_id: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> uuid.UUID:
    """Caller id set by the upstream auth layer in X-User-Id; the user row must exist."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user id")
    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=401, detail="User not found.")
    return user_id


def get_clock() -> Clock:
    return utcnow


async def get_fasting_machine(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> FastingSessionMachine:
    settings = get_settings()
    return FastingSessionMachine(
        SqlFastingSessionStore(db),
        clock=clock,
        default_target_hours=settings.default_fasting_target_hours,
        default_protocol=settings.default_fasting_protocol,
        default_history_limit=settings.fasting_history_default_limit,
        max_history_limit=settings.fasting_history_max_limit,
    )

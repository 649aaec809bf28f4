"""Fasting endpoints — start / end / cancel, current session and history."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user_id, get_fasting_machine
from app.models.fasting_session import FastingSession
from app.schemas.fasting import (
    ActiveFastingSessionRead,
    FastingCurrentResponse,
    FastingEnd,
    FastingEndResponse,
    FastingHistoryResponse,
    FastingSessionRead,
    FastingStart,
    FastingStartResponse,
    FastingStats,
)
from app.schemas.food import SuccessResponse
from app.services.fasting import FastingSessionMachine

router = APIRouter()


def _active_read(machine: FastingSessionMachine, session: FastingSession) -> ActiveFastingSessionRead:
    """Attach elapsed_hours / goal_reached computed at this instant."""
    base = FastingSessionRead.model_validate(session)
    return ActiveFastingSessionRead(
        **base.model_dump(),
        elapsed_hours=round(machine.elapsed_hours(session), 2),
        goal_reached=machine.goal_reached(session),
    )


@router.post("/start", response_model=FastingStartResponse)
async def start_fast(
    payload: FastingStart | None = None,
    user_id: uuid.UUID = Depends(get_current_user_id),
    machine: FastingSessionMachine = Depends(get_fasting_machine),
):
    """Start a fast. A fast that is already running is cancelled first (no actual_hours recorded)."""
    payload = payload or FastingStart()
    session = await machine.start(user_id, payload.target_hours, payload.protocol)
    return FastingStartResponse(session=FastingSessionRead.model_validate(session))


@router.post("/end", response_model=FastingEndResponse)
async def end_fast(
    payload: FastingEnd | None = None,
    user_id: uuid.UUID = Depends(get_current_user_id),
    machine: FastingSessionMachine = Depends(get_fasting_machine),
):
    """Complete the running fast. 404 when nothing is running."""
    payload = payload or FastingEnd()
    actual_hours = await machine.end(user_id, payload.feeling, payload.note)
    return FastingEndResponse(success=True, actual_hours=actual_hours)


@router.post("/cancel", response_model=SuccessResponse)
async def cancel_fast(
    user_id: uuid.UUID = Depends(get_current_user_id),
    machine: FastingSessionMachine = Depends(get_fasting_machine),
):
    """Cancel the running fast. Succeeds even when there is nothing to cancel."""
    await machine.cancel(user_id)
    return SuccessResponse(success=True)


@router.get("/current", response_model=FastingCurrentResponse)
async def current_fast(
    user_id: uuid.UUID = Depends(get_current_user_id),
    machine: FastingSessionMachine = Depends(get_fasting_machine),
):
    session = await machine.current(user_id)
    if session is None:
        return FastingCurrentResponse(session=None)
    return FastingCurrentResponse(session=_active_read(machine, session))


@router.get("/history", response_model=FastingHistoryResponse)
async def fasting_history(
    limit: int | None = Query(None, description="Max sessions to return, clamped to 1..100 (default 20)"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    machine: FastingSessionMachine = Depends(get_fasting_machine),
):
    """Finished sessions, newest first, with stats over completed fasts."""
    sessions, stats = await machine.history(user_id, limit)
    return FastingHistoryResponse(
        sessions=[FastingSessionRead.model_validate(s) for s in sessions],
        stats=FastingStats(**stats),
    )

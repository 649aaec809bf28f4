"""Fasting session storage.

FastingSessionStore is the interface the state machine talks to. Two
implementations: SqlFastingSessionStore (the request's AsyncSession) and
InMemoryFastingSessionStore (unit tests, local experiments).
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import FastingStatus
from app.core.errors import ConflictError
from app.models.fasting_session import FastingSession
from app.models.user import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"status", "ended_at", "actual_hours", "feeling", "note"}


class FastingSessionStore(Protocol):
    async def lock_user(self, user_id: uuid.UUID) -> None: ...

    async def find_active(self, user_id: uuid.UUID) -> FastingSession | None: ...

    async def insert(
        self,
        user_id: uuid.UUID,
        started_at: datetime,
        target_hours: float,
        protocol: str,
    ) -> FastingSession: ...

    async def update(self, session: FastingSession, **fields: Any) -> FastingSession: ...

    async def history(self, user_id: uuid.UUID, limit: int) -> list[FastingSession]: ...

    async def stats(self, user_id: uuid.UUID) -> dict[str, Any]: ...


def _check_fields(fields: dict[str, Any]) -> None:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update fasting session fields: {sorted(unknown)}")


ONE_ACTIVE_INDEX = "uq_fasting_sessions_one_active"


def _is_one_active_violation(exc: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite only names the indexed column
    msg = str(exc.orig)
    return ONE_ACTIVE_INDEX in msg or "UNIQUE constraint failed: fasting_sessions.user_id" in msg


def _round1(value: float | None) -> float | None:
    return round(float(value), 1) if value is not None else None


class SqlFastingSessionStore:
    """Store backed by the request's AsyncSession. The caller owns the transaction."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def lock_user(self, user_id: uuid.UUID) -> None:
        """Row-lock the owning user so concurrent writers for one user queue up (no-op on SQLite)."""
        await self.db.execute(select(User.id).where(User.id == user_id).with_for_update())

    async def find_active(self, user_id: uuid.UUID) -> FastingSession | None:
        result = await self.db.execute(
            select(FastingSession).where(
                FastingSession.user_id == user_id,
                FastingSession.status == FastingStatus.ACTIVE.value,
            )
        )
        return result.scalar_one_or_none()

    async def insert(
        self,
        user_id: uuid.UUID,
        started_at: datetime,
        target_hours: float,
        protocol: str,
    ) -> FastingSession:
        session = FastingSession(
            user_id=user_id,
            started_at=started_at,
            target_hours=target_hours,
            protocol=protocol,
            status=FastingStatus.ACTIVE.value,
        )
        self.db.add(session)
        try:
            await self.db.flush()
        except IntegrityError as e:
            if not _is_one_active_violation(e):
                raise
            logger.warning("Second active fast rejected for user %s: %s", user_id, e.orig)
            raise ConflictError("A fast is already active.") from e
        await self.db.refresh(session)
        return session

    async def update(self, session: FastingSession, **fields: Any) -> FastingSession:
        """Transition an active session. Raises ConflictError if it already reached a terminal state."""
        _check_fields(fields)
        # Core UPDATE runs immediately, so a following insert never races the unit of work
        result = await self.db.execute(
            update(FastingSession)
            .where(
                FastingSession.id == session.id,
                FastingSession.status == FastingStatus.ACTIVE.value,
            )
            .values(**fields)
        )
        if result.rowcount == 0:
            logger.warning("Fast %s is no longer active, update skipped", session.id)
            raise ConflictError("Fast is no longer active.")
        for k, v in fields.items():
            setattr(session, k, v)
        return session

    async def history(self, user_id: uuid.UUID, limit: int) -> list[FastingSession]:
        result = await self.db.execute(
            select(FastingSession)
            .where(
                FastingSession.user_id == user_id,
                FastingSession.status != FastingStatus.ACTIVE.value,
            )
            .order_by(FastingSession.started_at.desc(), FastingSession.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def stats(self, user_id: uuid.UUID) -> dict[str, Any]:
        result = await self.db.execute(
            select(
                func.count(FastingSession.id).label("total"),
                func.avg(FastingSession.actual_hours).label("avg_hours"),
                func.max(FastingSession.actual_hours).label("best_hours"),
                func.count(
                    case((FastingSession.actual_hours >= FastingSession.target_hours, 1))
                ).label("completed_goal_count"),
            ).where(
                FastingSession.user_id == user_id,
                FastingSession.status == FastingStatus.COMPLETED.value,
            )
        )
        row = result.one()
        return {
            "total": int(row.total or 0),
            "avg_hours": _round1(row.avg_hours),
            "best_hours": _round1(row.best_hours),
            "completed_goal_count": int(row.completed_goal_count or 0),
        }


class InMemoryFastingSessionStore:
    """Dict-backed store with the same contract, including the one-active-per-user guard."""

    def __init__(self) -> None:
        self._sessions: dict[uuid.UUID, FastingSession] = {}

    @property
    def sessions(self) -> list[FastingSession]:
        return list(self._sessions.values())

    async def lock_user(self, user_id: uuid.UUID) -> None:
        return None

    async def find_active(self, user_id: uuid.UUID) -> FastingSession | None:
        for s in self._sessions.values():
            if s.user_id == user_id and s.is_active:
                return s
        return None

    async def insert(
        self,
        user_id: uuid.UUID,
        started_at: datetime,
        target_hours: float,
        protocol: str,
    ) -> FastingSession:
        if await self.find_active(user_id) is not None:
            raise ConflictError("A fast is already active.")
        session = FastingSession(
            id=uuid.uuid4(),
            user_id=user_id,
            started_at=started_at,
            ended_at=None,
            target_hours=target_hours,
            actual_hours=None,
            protocol=protocol,
            status=FastingStatus.ACTIVE.value,
            feeling=None,
            note=None,
        )
        self._sessions[session.id] = session
        return session

    async def update(self, session: FastingSession, **fields: Any) -> FastingSession:
        _check_fields(fields)
        stored = self._sessions[session.id]
        if not stored.is_active:
            raise ConflictError("Fast is no longer active.")
        for k, v in fields.items():
            setattr(stored, k, v)
        return stored

    async def history(self, user_id: uuid.UUID, limit: int) -> list[FastingSession]:
        rows = [
            s
            for s in self._sessions.values()
            if s.user_id == user_id and not s.is_active
        ]
        rows.sort(key=lambda s: (s.started_at, s.id), reverse=True)
        return rows[:limit]

    async def stats(self, user_id: uuid.UUID) -> dict[str, Any]:
        done = [
            s
            for s in self._sessions.values()
            if s.user_id == user_id and s.status == FastingStatus.COMPLETED.value
        ]
        hours = [s.actual_hours for s in done if s.actual_hours is not None]
        return {
            "total": len(done),
            "avg_hours": _round1(sum(hours) / len(hours)) if hours else None,
            "best_hours": _round1(max(hours)) if hours else None,
            "completed_goal_count": sum(
                1 for s in done if s.actual_hours is not None and s.actual_hours >= s.target_hours
            ),
        }

"""Fasting session state machine.

States: active -> completed (end) | cancelled (cancel, or superseded by a new
start). Nothing ever returns to active, and a user has at most one active
session at a time.

Starting a fast while another is running silently cancels the running one.
The UI is expected to confirm with the user before calling start in that case.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from app.core.clock import Clock, ensure_utc, utcnow
from app.core.constants import SECONDS_PER_HOUR
from app.core.enums import FastingStatus
from app.core.errors import NotFoundError
from app.models.fasting_session import FastingSession
from app.services.fasting_store import FastingSessionStore

logger = logging.getLogger(__name__)

DEFAULT_TARGET_HOURS = 16.0
DEFAULT_PROTOCOL = "16:8"
DEFAULT_HISTORY_LIMIT = 20
MAX_HISTORY_LIMIT = 100


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class FastingSessionMachine:
    """Start / end / cancel fasts on top of a FastingSessionStore."""

    def __init__(
        self,
        store: FastingSessionStore,
        clock: Clock = utcnow,
        default_target_hours: float = DEFAULT_TARGET_HOURS,
        default_protocol: str = DEFAULT_PROTOCOL,
        default_history_limit: int = DEFAULT_HISTORY_LIMIT,
        max_history_limit: int = MAX_HISTORY_LIMIT,
    ) -> None:
        self.store = store
        self.clock = clock
        self.default_target_hours = default_target_hours
        self.default_protocol = default_protocol
        self.default_history_limit = default_history_limit
        self.max_history_limit = max_history_limit

    def _now(self):
        return ensure_utc(self.clock())

    # ── Transitions ──────────────────────────────────────────────────────

    async def start(
        self,
        user_id: uuid.UUID,
        target_hours: float | None = None,
        protocol: str | None = None,
    ) -> FastingSession:
        """Begin a new fast. Any fast already running for the user is cancelled first."""
        now = self._now()
        await self.store.lock_user(user_id)

        running = await self.store.find_active(user_id)
        if running is not None:
            await self.store.update(running, status=FastingStatus.CANCELLED.value, ended_at=now)
            logger.info(
                "Fast %s for user %s cancelled by a new start (%.2fh elapsed)",
                running.id,
                user_id,
                self.elapsed_hours(running),
            )

        if target_hours is None or target_hours <= 0:
            target_hours = self.default_target_hours
        protocol = _blank_to_none(protocol) or self.default_protocol

        session = await self.store.insert(user_id, now, float(target_hours), protocol)
        logger.info("Fast %s started for user %s: %sh (%s)", session.id, user_id, target_hours, protocol)
        return session

    async def end(
        self,
        user_id: uuid.UUID,
        feeling: str | None = None,
        note: str | None = None,
    ) -> float:
        """Complete the running fast and return its actual length in hours (2 decimals)."""
        await self.store.lock_user(user_id)
        running = await self.store.find_active(user_id)
        if running is None:
            raise NotFoundError("No active fast.")

        now = self._now()
        actual_hours = round(
            (now - ensure_utc(running.started_at)).total_seconds() / SECONDS_PER_HOUR, 2
        )
        await self.store.update(
            running,
            status=FastingStatus.COMPLETED.value,
            ended_at=now,
            actual_hours=actual_hours,
            feeling=_blank_to_none(feeling),
            note=_blank_to_none(note),
        )
        logger.info(
            "Fast %s completed for user %s: %.2fh of %.2fh",
            running.id,
            user_id,
            actual_hours,
            running.target_hours,
        )
        return actual_hours

    async def cancel(self, user_id: uuid.UUID) -> bool:
        """Abandon the running fast. With nothing running this is a no-op; returns whether anything changed."""
        await self.store.lock_user(user_id)
        running = await self.store.find_active(user_id)
        if running is None:
            return False
        await self.store.update(running, status=FastingStatus.CANCELLED.value, ended_at=self._now())
        logger.info("Fast %s cancelled for user %s", running.id, user_id)
        return True

    # ── Reads ────────────────────────────────────────────────────────────

    async def current(self, user_id: uuid.UUID) -> FastingSession | None:
        return await self.store.find_active(user_id)

    def clamp_limit(self, limit: int | None) -> int:
        if not limit:
            return self.default_history_limit
        return max(1, min(int(limit), self.max_history_limit))

    async def history(
        self, user_id: uuid.UUID, limit: int | None = None
    ) -> tuple[list[FastingSession], dict[str, Any]]:
        """Finished sessions (newest first) plus aggregate stats over completed ones."""
        sessions = await self.store.history(user_id, self.clamp_limit(limit))
        stats = await self.store.stats(user_id)
        return sessions, stats

    # Derived values: computed from the clock on every call, never stored or cached.

    def elapsed_hours(self, session: FastingSession) -> float:
        """Hours since the fast started; finished fasts are measured up to ended_at."""
        end = ensure_utc(session.ended_at) if session.ended_at is not None else self._now()
        return (end - ensure_utc(session.started_at)).total_seconds() / SECONDS_PER_HOUR

    def goal_reached(self, session: FastingSession) -> bool:
        return self.elapsed_hours(session) >= session.target_hours

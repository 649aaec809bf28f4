"""FastingSession model — one row per fast, never deleted."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.clock import utcnow
from app.core.enums import FastingStatus
from app.db.base import Base
from app.db.types import UTCDateTime

ACTIVE_ONLY = text("status = 'active'")


class FastingSession(Base):
    """A fasting session.

    status moves active -> completed (end) or active -> cancelled (cancel, or
    implicitly when a new fast starts). actual_hours is only set on completion.
    """

    __tablename__ = "fasting_sessions"
    __table_args__ = (
        Index("ix_fasting_sessions_user_status", "user_id", "status"),
        # Storage-level guard: at most one active session per user
        Index(
            "uq_fasting_sessions_one_active",
            "user_id",
            unique=True,
            postgresql_where=ACTIVE_ONLY,
            sqlite_where=ACTIVE_ONLY,
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    ended_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    target_hours: Mapped[float] = mapped_column(Float, nullable=False, default=16.0)
    actual_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    protocol: Mapped[str] = mapped_column(String(20), nullable=False, default="16:8")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=FastingStatus.ACTIVE.value
    )
    feeling: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="fasting_sessions")

    @property
    def is_active(self) -> bool:
        return self.status == FastingStatus.ACTIVE.value

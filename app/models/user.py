"""User model — account row plus the profile fields the stats engine reads."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.clock import utcnow
from app.db.base import Base
from app.db.types import UTCDateTime


class User(Base):
    """Account owned by the auth subsystem. Profile fields are all optional."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    height: Mapped[float | None] = mapped_column(Float, nullable=True)  # cm
    gender: Mapped[str] = mapped_column(String(10), nullable=False, default="other")
    activity: Mapped[str] = mapped_column(String(20), nullable=False, default="moderate")
    goal: Mapped[str] = mapped_column(String(10), nullable=False, default="maintain")

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)

    fasting_sessions: Mapped[list["FastingSession"]] = relationship(
        "FastingSession", back_populates="user", cascade="all, delete-orphan"
    )

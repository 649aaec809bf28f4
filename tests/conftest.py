"""Shared fixtures: in-memory SQLite database, frozen clock, API client."""

from __future__ import annotations

import os

# Point the module-level engine at SQLite before anything imports app.db.session
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite://")

import uuid
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_clock
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import User  # noqa: F401 - registers all models on Base.metadata

T0 = datetime(2026, 3, 1, 6, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        # SQLite leaves FK enforcement off unless asked, PostgreSQL always enforces
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


async def make_user(session_maker, **profile) -> User:
    async with session_maker() as session:
        user = User(email=f"{uuid.uuid4().hex[:8]}@example.com", name="Test", **profile)
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def user(session_maker) -> User:
    return await make_user(
        session_maker,
        age=30,
        weight=70.0,
        height=175.0,
        gender="male",
        activity="moderate",
        goal="lose",
    )


@pytest_asyncio.fixture
async def client(session_maker, clock) -> AsyncIterator[AsyncClient]:
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_clock] = lambda: clock
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}

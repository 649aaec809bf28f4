"""Column types shared by the ORM models."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from app.core.clock import ensure_utc


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC timestamp on every backend.

    PostgreSQL stores timestamptz natively; SQLite drops the offset, so values are
    normalized to UTC on write and re-tagged as UTC on read.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        value = ensure_utc(value)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        return ensure_utc(value)

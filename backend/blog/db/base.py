"""SQLAlchemy Declarative Base — shared base class and column types for ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - UTCDateTime always hands back timezone-aware UTC datetimes

Design Decisions:
    - Separate file for Base: avoids circular imports between models and alembic env
    - UTCDateTime normalizes on bind and on load: SQLite drops tzinfo, Postgres keeps it
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp stored as UTC."""
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime cannot be stored as a UTC timestamp")
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all blog ORM models."""
    pass

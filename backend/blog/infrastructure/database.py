"""Database Session Manager — async connection pool with one transaction per store call.

Invariants:
    - transaction() commits on clean exit and rolls back on any exception
    - The pooled connection is returned on every exit path (session closed in finally)
    - All SQLAlchemy exceptions mapped to StoreUnavailableError (core/errors.py)
    - BlogError raised inside a transaction propagates unchanged after rollback

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: rows stay readable after the transaction closes
    - from_engine() lets tests hand in an in-memory SQLite engine
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from blog.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def transaction(
        self, operation: str,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Run one transaction; commit on success, roll back and map errors otherwise."""
        session = self._session_factory()
        try:
            async with session.begin():
                yield session
        except IntegrityError as e:
            logger.error(f"DB integrity error during {operation}: {e}")
            raise StoreUnavailableError("Integrity constraint violated", operation)
        except OperationalError as e:
            logger.error(f"DB operational error during {operation}: {e}")
            raise StoreUnavailableError("Connection or operational error", operation)
        except DBAPIError as e:
            logger.error(f"DB driver error during {operation}: {e}")
            raise StoreUnavailableError("Database driver error", operation)
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise StoreUnavailableError("Database operation failed", operation)
        except OSError as e:
            logger.error(f"DB connection error during {operation}: {e}")
            raise StoreUnavailableError("Connection refused", operation)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.transaction("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreUnavailableError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the process-wide session manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager

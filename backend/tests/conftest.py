"""Root conftest — shared database, store and HTTP fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db_manager dependency overridden to use the test database
    - db_manager singleton patched for code that reads it directly (readiness probe)

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, no external dependency
"""

import os
from datetime import datetime, timedelta, timezone

# Point settings at SQLite before blog.main reads them
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import blog.infrastructure.database as db_module  # noqa: E402
from blog.db.base import Base  # noqa: E402
from blog.infrastructure.database import DatabaseSessionManager, get_db_manager  # noqa: E402
from blog.main import app  # noqa: E402
from blog.services.post_store import PostStore  # noqa: E402

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def store(test_db_manager):
    return PostStore(test_db_manager)


@pytest.fixture
def seed_posts(store):
    """Create `count` posts, one minute apart starting at T0. Returns ids oldest first."""
    async def _seed(count: int) -> list[int]:
        ids = []
        for i in range(count):
            created = T0 + timedelta(minutes=i)
            ids.append(await store.create(f"Post {i}", f"Body *{i}*", created))
        return ids
    return _seed


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client with the database dependency overridden."""
    app.dependency_overrides[get_db_manager] = lambda: test_db_manager

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager

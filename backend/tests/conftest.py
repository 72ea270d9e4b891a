"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test that asks for test_engine gets a fresh in-memory SQLite database
    - Schema comes from ORM metadata (Alembic is not run in tests)
"""

import os

# Never point tests at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from infoshare.db.base import Base  # noqa: E402
import infoshare.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    # StaticPool: one shared connection, so every session sees the same :memory: DB
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session

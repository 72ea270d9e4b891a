"""API test fixtures: FastAPI test client over an in-memory database.

Invariants:
    - get_db overridden to use the per-test SQLite session factory
    - db_manager patched so the readiness check sees the test engine
    - fake_repo swaps the repository dependency for store-failure scenarios
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from infoshare.infrastructure.database import get_db, DatabaseSessionManager
from infoshare.infrastructure.post_repository import get_post_repository
import infoshare.infrastructure.database as db_module
from infoshare.main import app
from infoshare.models.post import Post


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_post(test_db):
    """Insert a post directly into the test DB."""
    post = Post(
        title="Seed title",
        description="Seed description",
        image="https://example.com/seed.png",
        date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    test_db.add(post)
    await test_db.commit()
    await test_db.refresh(post)
    return post


class FakeRepository:
    """Scriptable PostRepository: each method returns or raises what the test sets."""

    def __init__(self):
        self.results: dict = {}
        self.calls: list[tuple] = []

    async def _answer(self, name, *args):
        self.calls.append((name, *args))
        r = self.results.get(name)
        if isinstance(r, Exception):
            raise r
        return r

    async def insert_one(self, data):
        return await self._answer("insert_one", data)

    async def find_many(self):
        return await self._answer("find_many")

    async def find_one(self, post_id):
        return await self._answer("find_one", post_id)

    async def update_one(self, post_id, changes):
        return await self._answer("update_one", post_id, changes)

    async def delete_one(self, post_id):
        return await self._answer("delete_one", post_id)


@pytest.fixture
async def fake_repo():
    """Client whose routes talk to a FakeRepository instead of the database."""
    repo = FakeRepository()
    app.dependency_overrides[get_post_repository] = lambda: repo
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c, repo
    app.dependency_overrides.clear()

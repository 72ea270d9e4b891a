"""Post Repository: SQLAlchemy implementation of the PostRepository protocol.

Invariants:
    - Every operation is bounded by timeout_seconds, measured from its own start
    - Timeouts, SQLAlchemy, driver and socket failures roll back and surface as StoreError;
      never retried
    - find_many applies no ordering: callers get whatever order the store returns
    - update_one writes only the named columns (partial merge) and returns the matched count
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import asyncpg
from fastapi import Depends
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infoshare.config import get_settings
from infoshare.core.domain_types import PostId
from infoshare.core.errors import StoreError
from infoshare.infrastructure.database import get_db
from infoshare.models.post import Post

logger = logging.getLogger(__name__)

T = TypeVar("T")

# asyncpg connect failures can surface unwrapped by SQLAlchemy
STORE_FAILURES = (
    SQLAlchemyError, OSError, asyncpg.PostgresError, asyncpg.InterfaceError,
)


class SqlPostRepository:
    """Posts table accessed through one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession, timeout_seconds: float = 10.0):
        self._db = db
        self._timeout = timeout_seconds

    async def insert_one(self, data: dict) -> PostId:
        post = Post(**data)

        async def op() -> PostId:
            self._db.add(post)
            await self._db.flush()
            await self._db.commit()
            return PostId(post.id)

        return await self._bounded("insert_one", op)

    async def find_many(self) -> list[dict]:
        async def op() -> list[dict]:
            result = await self._db.execute(select(Post))
            return [p.to_record() for p in result.scalars().all()]

        return await self._bounded("find_many", op)

    async def find_one(self, post_id: PostId) -> dict | None:
        async def op() -> dict | None:
            # populate_existing: a re-fetch after update must not reuse a stale identity-map row
            result = await self._db.execute(
                select(Post)
                .where(Post.id == post_id)
                .execution_options(populate_existing=True),
            )
            post = result.scalar_one_or_none()
            return post.to_record() if post else None

        return await self._bounded("find_one", op)

    async def update_one(self, post_id: PostId, changes: dict) -> int:
        async def op() -> int:
            result = await self._db.execute(
                update(Post).where(Post.id == post_id).values(**changes),
            )
            await self._db.commit()
            return result.rowcount

        return await self._bounded("update_one", op)

    async def delete_one(self, post_id: PostId) -> int:
        async def op() -> int:
            result = await self._db.execute(
                delete(Post).where(Post.id == post_id),
            )
            await self._db.commit()
            return result.rowcount

        return await self._bounded("delete_one", op)

    async def _bounded(self, operation: str, op: Callable[[], Awaitable[T]]) -> T:
        """Run one store operation under the timeout, mapping failures to StoreError."""
        try:
            return await asyncio.wait_for(op(), timeout=self._timeout)
        except asyncio.TimeoutError:
            await self._rollback(operation)
            logger.error(
                f"Store {operation} timed out after {self._timeout}s",
                extra={"operation": operation},
            )
            raise StoreError(
                f"Store {operation} timed out", operation,
                details=f"operation exceeded {self._timeout}s timeout",
                timed_out=True,
            )
        except STORE_FAILURES as e:
            await self._rollback(operation)
            logger.error(
                f"Store {operation} failed: {e!r}", extra={"operation": operation},
            )
            raise StoreError(
                f"Store {operation} failed", operation,
                details=str(e) or type(e).__name__,
            )

    async def _rollback(self, operation: str) -> None:
        # the connection may already be gone; the original failure is what gets reported
        try:
            await self._db.rollback()
        except STORE_FAILURES as e:
            logger.warning(
                f"Rollback after failed {operation} also failed: {e!r}",
                extra={"operation": operation},
            )


def get_post_repository(db: AsyncSession = Depends(get_db)) -> SqlPostRepository:
    """FastAPI dependency: repository bound to the request's session."""
    return SqlPostRepository(db, get_settings().store_timeout_seconds)

"""Boundary Protocols: contract between the request handlers and the store.

Invariants:
    - Handlers depend on PostRepository, never on SQLAlchemy directly
    - Every method is bounded by the store timeout and raises StoreError on failure
    - "No record" is not a failure: find_one returns None, update/delete return 0
"""

from typing import Protocol

from infoshare.core.domain_types import PostId


class PostRepository(Protocol):
    """Contract for post persistence: implemented by infrastructure."""
    async def insert_one(self, data: dict) -> PostId: ...
    async def find_many(self) -> list[dict]: ...
    async def find_one(self, post_id: PostId) -> dict | None: ...
    async def update_one(self, post_id: PostId, changes: dict) -> int: ...
    async def delete_one(self, post_id: PostId) -> int: ...

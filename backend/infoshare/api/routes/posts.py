"""Posts: create, list, get, update and delete community posts.

Invariants:
    - Each handler is one linear validate → store call → respond path, no retries
    - id and date are always server-assigned; client values for them are discarded
    - Store failures surface as 500 with a per-operation message; "no record" is 404
    - Update re-fetches the record after writing; the two steps are not atomic
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError as SchemaValidationError

from infoshare.api.error_handlers import format_validation_details
from infoshare.core.enforce_post import (
    parse_post_id, check_new_post, strip_protected_fields, stamp_update,
)
from infoshare.core.errors import NotFoundError, StoreError, ValidationError
from infoshare.core.post_codec import encode_post, encode_posts
from infoshare.core.repository_protocols import PostRepository
from infoshare.infrastructure.post_repository import get_post_repository
from infoshare.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])


@contextmanager
def _store_failure(message: str, include_details: bool = True):
    """Re-label a StoreError with the message clients see for this step."""
    try:
        yield
    except StoreError as e:
        raise StoreError(
            message, e.operation,
            details=e.details if include_details else None,
            timed_out=e.timed_out,
        ) from e


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate,
    repo: PostRepository = Depends(get_post_repository),
):
    """Create a post; the store assigns the id, the server assigns the date."""
    check_new_post(body.title, body.description)
    data = {
        "title": body.title,
        "description": body.description,
        "image": body.image,
        "date": datetime.now(timezone.utc),
    }
    with _store_failure("Failed to create post", include_details=False):
        post_id = await repo.insert_one(data)
    logger.info("Post created", extra={"post_id": str(post_id)})
    return encode_post({**data, "id": post_id})


@router.get("")
async def list_posts(repo: PostRepository = Depends(get_post_repository)):
    """All posts, in whatever order the store yields them."""
    with _store_failure("Failed to fetch posts"):
        posts = await repo.find_many()
    return encode_posts(posts)


@router.get("/{post_id}")
async def get_post(
    post_id: str, repo: PostRepository = Depends(get_post_repository),
):
    object_id = parse_post_id(post_id)
    with _store_failure("Failed to fetch post"):
        post = await repo.find_one(object_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return encode_post(post)


@router.patch("/{post_id}")
async def update_post(
    post_id: str,
    body: dict[str, Any] = Body(...),
    repo: PostRepository = Depends(get_post_repository),
):
    """Overwrite the named fields, refresh date, and return the stored result.

    Only title, description and image are updatable. Any other key is
    dropped (not stored), so a body made solely of unknown keys such as
    {"likes": 3} answers 400 "No valid fields to update".
    """
    object_id = parse_post_id(post_id)
    try:
        fields = PostUpdate.model_validate(strip_protected_fields(body)).changed_fields()
    except SchemaValidationError as e:
        raise ValidationError(
            "Invalid request body", field="body",
            details=format_validation_details(e.errors()),
        )
    changes = stamp_update(fields, datetime.now(timezone.utc))

    with _store_failure("Failed to update post"):
        matched = await repo.update_one(object_id, changes)
    if matched == 0:
        raise NotFoundError("Post", post_id)

    with _store_failure("Failed to fetch updated post"):
        post = await repo.find_one(object_id)
    if post is None:
        # deleted between the update and the re-fetch
        raise StoreError(
            "Failed to fetch updated post", "find_one",
            details="no post matched after update",
        )
    logger.info(
        f"Post updated: {sorted(fields)}", extra={"post_id": post_id},
    )
    return encode_post(post)


@router.delete("/{post_id}")
async def delete_post(
    post_id: str, repo: PostRepository = Depends(get_post_repository),
):
    object_id = parse_post_id(post_id)
    with _store_failure("Failed to delete post"):
        deleted = await repo.delete_one(object_id)
    if deleted == 0:
        raise NotFoundError("Post", post_id)
    logger.info("Post deleted", extra={"post_id": post_id})
    return {"message": "Post deleted successfully"}

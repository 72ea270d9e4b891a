"""Post Enforcement: pure validation of identifiers, new posts and update sets.

Invariants:
    - All functions are pure: no IO, no clock reads (callers pass `now`)
    - Title is checked before description; the first failing check wins
    - Update sets never carry client-supplied identity or timestamp fields
    - Non-empty checks apply at creation only; updates only reject an empty set
"""

from datetime import datetime
from uuid import UUID

from infoshare.core.domain_types import PostId, PROTECTED_FIELDS
from infoshare.core.errors import ValidationError


def parse_post_id(raw: str | None) -> PostId:
    """Turn a path-embedded identifier into a PostId or raise ValidationError."""
    if not raw:
        raise ValidationError("Post ID is required", field="id")
    try:
        return PostId(UUID(raw))
    except ValueError:
        raise ValidationError("Invalid post ID format", field="id")


def check_new_post(title: str, description: str) -> None:
    """Required-field checks for creation."""
    if title == "":
        raise ValidationError("Title is required", field="title")
    if description == "":
        raise ValidationError("Description is required", field="description")


def strip_protected_fields(raw: dict) -> dict:
    """Copy of `raw` without the fields clients may not set."""
    return {k: v for k, v in raw.items() if k not in PROTECTED_FIELDS}


def stamp_update(fields: dict, now: datetime) -> dict:
    """Reject an empty update set; otherwise add the refreshed timestamp."""
    if not fields:
        raise ValidationError("No valid fields to update", field="body")
    return {**fields, "date": now}

"""Post Enforcement: tests for pure id, creation and update-set validation.

Tests cover:
    - parse_post_id accepts UUIDs, rejects empty and malformed input
    - check_new_post checks title before description
    - strip_protected_fields drops _id, id and date only
    - stamp_update rejects empty sets and stamps date
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from infoshare.core.enforce_post import (
    parse_post_id, check_new_post, strip_protected_fields, stamp_update,
)
from infoshare.core.errors import ValidationError


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─── parse_post_id ───────────────────────────────────────────────

def test_parse_post_id_accepts_uuid_string():
    uid = uuid4()
    assert parse_post_id(str(uid)) == uid


@pytest.mark.parametrize("raw", ["", None])
def test_parse_post_id_rejects_missing(raw):
    with pytest.raises(ValidationError) as exc:
        parse_post_id(raw)
    assert exc.value.message == "Post ID is required"
    assert exc.value.http_status == 400


@pytest.mark.parametrize("raw", ["not-an-id", "1234", "zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"])
def test_parse_post_id_rejects_malformed(raw):
    with pytest.raises(ValidationError) as exc:
        parse_post_id(raw)
    assert exc.value.message == "Invalid post ID format"


# ─── check_new_post ──────────────────────────────────────────────

def test_check_new_post_passes_with_both_fields():
    check_new_post("Title", "Description")


def test_check_new_post_title_first():
    with pytest.raises(ValidationError) as exc:
        check_new_post("", "")
    assert exc.value.message == "Title is required"
    assert exc.value.field == "title"


def test_check_new_post_missing_description():
    with pytest.raises(ValidationError) as exc:
        check_new_post("Title", "")
    assert exc.value.message == "Description is required"


def test_check_new_post_does_not_trim_whitespace():
    check_new_post(" ", " ")


# ─── strip_protected_fields / stamp_update ───────────────────────

def test_strip_protected_fields_removes_identity_and_date():
    raw = {"_id": "x", "id": "y", "date": "2000-01-01", "title": "New"}
    assert strip_protected_fields(raw) == {"title": "New"}


def test_strip_protected_fields_does_not_mutate_input():
    raw = {"_id": "x", "title": "New"}
    strip_protected_fields(raw)
    assert raw == {"_id": "x", "title": "New"}


def test_stamp_update_rejects_empty():
    with pytest.raises(ValidationError) as exc:
        stamp_update({}, NOW)
    assert exc.value.message == "No valid fields to update"


def test_stamp_update_adds_date():
    assert stamp_update({"title": "New"}, NOW) == {"title": "New", "date": NOW}

"""Post Codec: renders internal post records as wire JSON.

A record is a plain dict with keys id, title, description, image, date.
The wire form names the identifier "_id" and drops it (and image) when absent.
"""

from datetime import datetime, timezone

from infoshare.core.errors import StoreError


def encode_post(record: dict) -> dict:
    """Record -> wire dict. Raises KeyError/TypeError on a malformed record."""
    out = {}
    if record.get("id") is not None:
        out["_id"] = str(record["id"])
    out["title"] = record["title"]
    out["description"] = record["description"]
    if record.get("image") is not None:
        out["image"] = record["image"]
    out["date"] = _iso(record["date"])
    return out


def encode_posts(records: list[dict]) -> list[dict]:
    """Encode a whole result set; one bad record fails the batch."""
    try:
        return [encode_post(r) for r in records]
    except (KeyError, TypeError, AttributeError) as e:
        raise StoreError(
            "Failed to decode posts", "find_many", details=f"{type(e).__name__}: {e}",
        )


def _iso(value: datetime) -> str:
    # SQLite drops tzinfo; every stored date is UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()

"""Post ORM: the single persisted entity, one row per community post.

Invariants:
    - id is a UUID primary key assigned on insert, never updated
    - title and description are non-nullable text; image is optional
    - date is timezone-aware and always server-assigned
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infoshare.core.domain_types import COLLECTION_NAME
from infoshare.db.base import Base


class Post(Base):
    """Community post."""
    __tablename__ = COLLECTION_NAME

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_record(self) -> dict:
        """Plain-dict record handed back across the repository boundary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "date": self.date,
        }

"""ORM Models: SQLAlchemy declarative models.

Imported here so Base.metadata is complete before create_all or autogenerate runs.
"""

from infoshare.models.post import Post  # noqa: F401

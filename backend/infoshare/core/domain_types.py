"""Domain Types: identity type and field sets shared by validation, codec and store.

Invariants:
    - PostId wraps a UUID; the store assigns it, clients never do
    - PROTECTED_FIELDS are removed from every update before it reaches the store
"""

from typing import NewType
from uuid import UUID


PostId = NewType("PostId", UUID)

COLLECTION_NAME = "posts"

# "_id" is the wire name of the identifier, "id" the record name
PROTECTED_FIELDS: frozenset[str] = frozenset({"_id", "id", "date"})

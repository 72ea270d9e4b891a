"""Post Schemas: Pydantic models that decode create and update bodies.

Invariants:
    - Unknown keys are ignored: clients cannot smuggle _id or date into a record
    - Missing title/description decode to "" so enforce_post reports which one is missing
    - PostUpdate.changed_fields() returns only keys the client actually sent
    - title/description may not be set to null; image may (clears it)
"""

from pydantic import BaseModel, ConfigDict, field_validator


class PostCreate(BaseModel):
    """Create body: presence checks happen in core, types are checked here."""
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    description: str = ""
    image: str | None = None


class PostUpdate(BaseModel):
    """Partial update: typed optional field per updatable column."""
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    image: str | None = None

    @field_validator("title", "description")
    @classmethod
    def reject_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v

    def changed_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)

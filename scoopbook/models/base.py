"""
Shared base for persisted records.

Every record owned by a record store carries an identity and a creation
timestamp. Stores sort on `created_at` and look records up by `id`.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """
    Base class for anything kept in a record store.

    DESIGN DECISION: Assignment is validated, so an in-place field
    update through the store goes through the same rules as creation.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique record ID"
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        description="When the record was created (UTC)"
    )

"""Activity log domain entity."""

from datetime import datetime

from pydantic import BaseModel


class ActivityLog(BaseModel):
    """Append-only audit record of a mutation."""

    id: int | None = None
    description: str
    date: datetime | None = None  # assigned by the database

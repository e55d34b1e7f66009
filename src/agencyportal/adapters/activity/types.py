"""Activity log types."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActivityLogCreate(BaseModel):
    """Request to append an activity log entry."""

    model_config = ConfigDict(frozen=True)

    actor_user_id: str
    action: str
    resource_type: str | None = None
    resource_id: str | None = None
    metadata: dict[str, Any] | None = None


class ActivityLogEntry(BaseModel):
    """Activity log entry from database."""

    model_config = ConfigDict(frozen=True)

    id: str
    actor_user_id: str
    action: str
    resource_type: str | None = None
    resource_id: str | None = None
    metadata: dict[str, Any] | None = None
    timestamp: datetime

"""Append-only activity log."""

from datetime import datetime
from typing import Any

from sqlalchemy import ForeignKey, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from agencyportal.models.base import BaseModel


class ActivityLog(BaseModel):
    """One user action. Rows are never updated or deleted."""

    __tablename__ = "activity_logs"

    actor_user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(255), nullable=False)  # "CREATE_COMPANY"
    resource_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # ip, user_agent, method, path
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), index=True
    )

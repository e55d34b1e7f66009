"""Append-only activity log."""

from agencyportal.adapters.activity.recorder import get_client_ip, record_activity
from agencyportal.adapters.activity.repository import ActivityLog, PostgresActivityLog
from agencyportal.adapters.activity.types import ActivityLogCreate, ActivityLogEntry

__all__ = [
    "ActivityLog",
    "ActivityLogCreate",
    "ActivityLogEntry",
    "PostgresActivityLog",
    "get_client_ip",
    "record_activity",
]

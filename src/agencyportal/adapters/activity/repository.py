"""Activity log repository."""

import json
from typing import Any, Protocol, runtime_checkable
from uuid import uuid4

from agencyportal.adapters.activity.types import ActivityLogCreate, ActivityLogEntry
from agencyportal.adapters.db.app_db import AppDatabase


@runtime_checkable
class ActivityLog(Protocol):
    """Append-only store of user actions."""

    async def record(self, entry: ActivityLogCreate) -> str:
        """Append an entry and return its ID."""
        ...

    async def list_recent(
        self, limit: int = 50, actor_user_id: str | None = None
    ) -> list[ActivityLogEntry]:
        """List the most recent entries, newest first."""
        ...


class PostgresActivityLog:
    """PostgreSQL implementation of ActivityLog."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize the repository.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def record(self, entry: ActivityLogCreate) -> str:
        """Record an activity log entry.

        Args:
            entry: Activity log entry to record.

        Returns:
            ID of the created entry.
        """
        row = await self._db.execute_returning(
            """
            INSERT INTO activity_logs
                (id, actor_user_id, action, resource_type, resource_id, metadata)
            VALUES ($1, $2, $3, $4, $5, $6::jsonb)
            RETURNING id
            """,
            str(uuid4()),
            entry.actor_user_id,
            entry.action,
            entry.resource_type,
            entry.resource_id,
            json.dumps(entry.metadata) if entry.metadata is not None else None,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        result: str = row["id"]
        return result

    async def list_recent(
        self, limit: int = 50, actor_user_id: str | None = None
    ) -> list[ActivityLogEntry]:
        """List activity entries, newest first.

        Args:
            limit: Maximum entries to return.
            actor_user_id: Only entries by this user.

        Returns:
            Activity log entries.
        """
        if actor_user_id is None:
            rows = await self._db.fetch_all(
                "SELECT * FROM activity_logs ORDER BY timestamp DESC LIMIT $1",
                limit,
            )
        else:
            rows = await self._db.fetch_all(
                """SELECT * FROM activity_logs
                   WHERE actor_user_id = $1
                   ORDER BY timestamp DESC LIMIT $2""",
                actor_user_id,
                limit,
            )
        return [self._row_to_entry(row) for row in rows]

    def _row_to_entry(self, row: dict[str, Any]) -> ActivityLogEntry:
        metadata = row.get("metadata")
        if isinstance(metadata, str):
            metadata = json.loads(metadata)
        return ActivityLogEntry(
            id=row["id"],
            actor_user_id=row["actor_user_id"],
            action=row["action"],
            resource_type=row.get("resource_type"),
            resource_id=row.get("resource_id"),
            metadata=metadata,
            timestamp=row["timestamp"],
        )

"""Database adapters."""

from agencyportal.adapters.db.app_db import AppDatabase

__all__ = ["AppDatabase"]

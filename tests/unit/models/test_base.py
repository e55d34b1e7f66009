"""Unit tests for the ORM models."""

from __future__ import annotations

from agencyportal.models import ActivityLog, BaseModel, Company, User, metadata
from agencyportal.models.base import generate_id


class TestBaseModel:
    """Tests for BaseModel."""

    def test_base_model_has_id(self) -> None:
        """Test that base model has id column."""
        assert hasattr(BaseModel, "id")

    def test_base_model_has_timestamps(self) -> None:
        """Test that base model has created_at and updated_at columns."""
        assert hasattr(BaseModel, "created_at")
        assert hasattr(BaseModel, "updated_at")

    def test_generate_id_is_uuid_text(self) -> None:
        """Generated ids are 36 character strings and unique."""
        first, second = generate_id(), generate_id()

        assert len(first) == 36
        assert first != second


class TestSchema:
    """Tests for the table layout."""

    def test_tables(self) -> None:
        """Every portal table is registered on the shared metadata."""
        assert set(metadata.tables) == {
            "companies",
            "users",
            "projects",
            "digital_audits",
            "access_requests",
            "activity_logs",
        }

    def test_single_owner_index(self) -> None:
        """At most one owner company can exist."""
        index = next(i for i in Company.__table__.indexes if i.name == "uq_companies_single_owner")

        assert index.unique
        assert str(index.dialect_options["postgresql"]["where"]) == "type = 'owner'"

    def test_user_email_unique(self) -> None:
        """Emails identify users."""
        assert User.__table__.c.email.unique

    def test_activity_metadata_column_name(self) -> None:
        """The reserved attribute name maps onto the metadata column."""
        assert "metadata" in ActivityLog.__table__.c
        assert ActivityLog.__table__.c["metadata"].type.__class__.__name__ == "JSONB"

"""Base model with common fields for all models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import MetaData, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, registry

mapper_registry: registry = registry()

# Custom naming conventions for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


def generate_id() -> str:
    """Generate a primary key as UUID4 text."""
    return str(uuid4())


class BaseModel(DeclarativeBase):
    """Base model with common fields."""

    registry = mapper_registry
    metadata = metadata

    __abstract__ = True

    # Text keys so rows created outside the API can use readable ids
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

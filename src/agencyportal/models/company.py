"""Company model."""

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agencyportal.models.base import BaseModel


class Company(BaseModel):
    """The agency itself, a partner, a client, or a client's sub-company."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # owner, partner, client, sub
    parent_id: Mapped[str | None] = mapped_column(ForeignKey("companies.id"), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)

    parent = relationship("Company", remote_side="Company.id", back_populates="children")
    children = relationship("Company", back_populates="parent")
    users = relationship("User", back_populates="company")
    projects = relationship("Project", back_populates="company")

    __table_args__ = (
        # Only one owner company
        Index(
            "uq_companies_single_owner",
            "type",
            unique=True,
            postgresql_where=text("type = 'owner'"),
        ),
    )

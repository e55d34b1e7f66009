"""Project and digital audit models."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agencyportal.models.base import BaseModel


class Project(BaseModel):
    """A piece of work for a company."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_id: Mapped[str] = mapped_column(
        ForeignKey("companies.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_by: Mapped[str | None] = mapped_column(ForeignKey("users.id"), nullable=True)

    company = relationship("Company", back_populates="projects")


class DigitalAudit(BaseModel):
    """A digital presence audit of a client company."""

    __tablename__ = "digital_audits"

    client_company_id: Mapped[str] = mapped_column(
        ForeignKey("companies.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_by: Mapped[str | None] = mapped_column(ForeignKey("users.id"), nullable=True)

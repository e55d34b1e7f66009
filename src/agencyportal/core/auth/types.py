"""Auth domain types."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr


class Role(str, Enum):
    """Portal user roles."""

    OWNER = "owner"
    ADMIN = "admin"
    CLIENT_SERVICES = "client_services"
    SPECIALTY_SKILLS = "specialty_skills"
    PARTNER_ADMIN = "partner_admin"
    PARTNER_CONTRIBUTOR = "partner_contributor"
    PARTNER_VIEWER = "partner_viewer"
    CLIENT_EDITOR = "client_editor"
    CLIENT_VIEWER = "client_viewer"


class User(BaseModel):
    """User domain model."""

    id: str
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    company_id: str | None = None  # None only while onboarding
    password_hash: str | None = None  # None until a password is set
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime


class NewUser(BaseModel):
    """Fields for inserting a user."""

    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    company_id: str | None = None
    password_hash: str | None = None


class TokenPayload(BaseModel):
    """JWT token payload claims."""

    user_id: str
    iat: int  # issued at timestamp
    exp: int  # expiration timestamp

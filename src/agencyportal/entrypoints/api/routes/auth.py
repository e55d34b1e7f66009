"""Auth API routes for login, registration and password management."""

from typing import Annotated

from fastapi import APIRouter, Depends

from agencyportal.core.auth.service import AuthService
from agencyportal.entrypoints.api.deps import get_auth_service
from agencyportal.entrypoints.api.middleware.jwt_auth import CurrentUser
from agencyportal.entrypoints.api.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    """Authenticate with email and password and receive a bearer token."""
    result = await service.login(email=body.email, password=body.password)
    return LoginResponse(user=UserResponse.from_model(result["user"]), token=result["token"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(body: RegisterRequest, service: AuthServiceDep) -> UserResponse:
    """Register a new user with a password."""
    user = await service.register(
        email=body.email,
        password=body.password,
        role=body.role,
        company_id=body.company_id,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return UserResponse.from_model(user)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    user: CurrentUser,
    service: AuthServiceDep,
) -> MessageResponse:
    """Change the current user's password."""
    await service.change_password(user, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUser) -> UserResponse:
    """Get the current user."""
    return UserResponse.from_model(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(user: CurrentUser) -> MessageResponse:
    """Log out.

    Tokens are stateless and stay valid until they expire; the client is
    expected to discard its copy.
    """
    return MessageResponse(message="Logged out successfully")

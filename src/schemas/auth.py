"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=2, max_length=50)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ResendVerificationRequest(BaseModel):
    """Request a new verification email."""

    email: EmailStr = Field(..., max_length=255)


class UserResponse(BaseModel):
    """User information response (never includes credentials)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: str
    is_verified: bool
    active_household_id: int | None
    last_login: datetime | None
    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    success: bool = True
    message: str | None = None
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse

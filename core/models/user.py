# =============================================================================
# core/models/user.py - User & Auth Schemas
# =============================================================================
# These models define the API contract for registration and login:
# - UserCreate: Input for POST /api/users
# - LoginRequest: Input for POST /api/auth
# - TokenResponse: Output of both
# - UserResponse: The current user, without the password hash
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """
    Schema for registering a new user.

    Example:
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "password": "hunter22"
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )

    email: EmailStr = Field(
        ...,
        description="Unique email address, also used for the Gravatar avatar"
    )

    password: str = Field(
        ...,
        min_length=6,
        description="Plain-text password, hashed before storage"
    )


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for an access token."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Plain-text password")


class TokenResponse(BaseModel):
    """Access token returned after registration or login."""

    token: str = Field(..., description="Signed access token, sent back as a Bearer token")


class UserResponse(BaseModel):
    """
    Public view of a user.

    Never includes the password hash.
    """

    id: str
    name: str
    email: str
    avatar: str | None = None
    date: datetime | None = None

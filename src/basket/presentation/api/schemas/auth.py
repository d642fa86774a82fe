"""Authentication schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request schema for user registration.

    Password strength is checked by the password service so a weak password
    is reported as a 400 with a specific message.
    """

    username: str = Field(..., min_length=1, max_length=150)
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password (at least 8 characters)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "securepassword123",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    username: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "securepassword123",
            },
        },
    )


class UserResponse(BaseModel):
    """A registered user. Never includes the password or its hash."""

    id: UUID
    username: str
    email: str
    roles: list[str]
    created_at: datetime


class TokenResponse(BaseModel):
    """Session token issued at login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class IdentityResponse(BaseModel):
    """The caller's identity as carried by the verified token."""

    user_id: UUID
    username: str
    roles: list[str]

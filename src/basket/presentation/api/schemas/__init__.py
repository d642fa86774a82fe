"""Pydantic schemas for API request/response models."""

from basket.presentation.api.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from basket.presentation.api.schemas.cart import (
    AddItemRequest,
    CartResponse,
    CreateCartRequest,
    LineItemResponse,
)

__all__ = [
    # Auth
    "IdentityResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    # Cart
    "AddItemRequest",
    "CartResponse",
    "CreateCartRequest",
    "LineItemResponse",
]

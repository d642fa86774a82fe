"""Authentication router for registration, login and role-gated views."""

import logging

from fastapi import APIRouter, status

from basket.presentation.api.dependencies import (
    AdminIdentity,
    AuthService,
    DBSession,
    UserIdentity,
)
from basket.presentation.api.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from basket_identity import Identity

logger = logging.getLogger(__name__)

router = APIRouter()


def _identity_response(identity: Identity) -> IdentityResponse:
    return IdentityResponse(
        user_id=identity.user_id,
        username=identity.username,
        roles=sorted(role.value for role in identity.roles),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Weak password"},
        409: {"description": "Email or username already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> UserResponse:
    """Create an account with the default ``user`` role."""
    try:
        user = await auth_service.register(
            username=request.username,
            email=request.email,
            password=request.password,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=sorted(role.value for role in user.roles),
        created_at=user.created_at,
    )


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(request: LoginRequest, auth_service: AuthService) -> TokenResponse:
    """
    Authenticate with username and password.

    The same 401 is returned for an unknown username and a wrong password.
    """
    access_token = await auth_service.login(
        username=request.username,
        password=request.password,
    )
    return TokenResponse(
        access_token=access_token,
        expires_in=auth_service.token_lifetime_seconds,
    )


@router.get(
    "/user",
    summary="Profile of the calling user",
    responses={
        401: {"description": "Missing, invalid or expired token"},
        403: {"description": "Token lacks the user role"},
    },
)
async def get_profile(identity: UserIdentity) -> IdentityResponse:
    return _identity_response(identity)


@router.get(
    "/admin",
    summary="Admin dashboard",
    responses={
        401: {"description": "Missing, invalid or expired token"},
        403: {"description": "Token lacks the admin role"},
    },
)
async def get_dashboard(identity: AdminIdentity) -> IdentityResponse:
    logger.info("Admin dashboard accessed by %s", identity.username)
    return _identity_response(identity)

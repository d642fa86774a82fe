"""Authentication service for user registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from basket_auth import (
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
)
from basket_identity.application.context import Identity
from basket_identity.application.services.access_control import TokenGate
from basket_identity.domain.user import (
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserRole,
)

if TYPE_CHECKING:
    from basket_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates basket_auth infrastructure (password hashing, JWT tokens)
    with the User domain to provide:
    - User registration
    - Login with username and password
    - Token verification

    Login failures are deliberately indistinguishable: an unknown username
    and a wrong password raise the same error with the same message.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> User:
        """Create a user with the default role set.

        Raises
        ------
        WeakPasswordError
            If the password doesn't meet requirements
        EmailAlreadyExistsError
            If the email is already registered
        UsernameAlreadyExistsError
            If the username is already taken
        """
        password_hash = self._password_service.hash(password)
        user = User.create(
            username=username,
            email=email,
            password_hash=password_hash,
            roles=(UserRole.USER,),
        )

        if await self._user_repo.exists_by_email(user.email):
            raise EmailAlreadyExistsError(user.email)
        if await self._user_repo.exists_by_username(user.username):
            raise UsernameAlreadyExistsError(user.username)

        # The store's unique constraints still catch concurrent registrations
        await self._user_repo.save(user)

        logger.info("User registered: %s", user.username)
        return user

    async def login(self, username: str, password: str) -> str:
        """Check credentials and mint a session token.

        Raises
        ------
        InvalidCredentialsError
            If the user is unknown or the password does not match
        """
        user = await self._user_repo.find_by_username(username)
        if user is None:
            self._password_service.verify_dummy(password)
            logger.info("Login failed: unknown username")
            raise InvalidCredentialsError

        if not self._password_service.verify(password, user.password_hash):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError

        token = self._jwt_service.create_access_token(
            user_id=user.id,
            username=user.username,
            roles=[role.value for role in user.roles],
        )

        logger.info("User logged in: %s", user.username)
        return token

    def verify_token(self, token: str) -> Identity:
        """Verify a session token and return the caller's identity.

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, or not an access token
        """
        return TokenGate(self._jwt_service)(token)

    @property
    def token_lifetime_seconds(self) -> int:
        return int(self._jwt_service.access_token_lifetime.total_seconds())

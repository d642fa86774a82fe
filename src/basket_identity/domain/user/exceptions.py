"""User domain exceptions.

Registration conflicts and validation failures for user identities.
"""

from basket.domain.shared.exceptions import (
    ConflictError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email already registered",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )


class UsernameAlreadyExistsError(ConflictError):
    """Username already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            "Username already taken",
            code=ErrorCode.USERNAME_ALREADY_EXISTS,
            details={"username": username},
        )

"""Authentication exceptions.

These exceptions are raised by the basket_auth package and should be
caught and handled by the application layer (AuthenticationService) or
translated at the HTTP boundary.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a session token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when username or password is incorrect during login."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class AccessDeniedError(AuthError):
    """Raised when a verified identity lacks the role an endpoint requires."""

    def __init__(self, message: str = "Insufficient role for this resource"):
        super().__init__(message)

from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold. Checks are exact membership, no hierarchy."""

    USER = "user"
    ADMIN = "admin"

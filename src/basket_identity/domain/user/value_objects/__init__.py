"""Value objects for the user domain."""

from basket_identity.domain.user.value_objects.email import Email
from basket_identity.domain.user.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "UserRole",
]

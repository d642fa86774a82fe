"""Identity of the caller, decoded from a verified session token."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from basket_identity.domain.user import UserRole

if TYPE_CHECKING:
    from basket_auth import TokenPayload


@dataclass(frozen=True)
class Identity:
    """Immutable, request-scoped view of the authenticated caller."""

    user_id: UUID
    username: str
    roles: frozenset[UserRole]

    @classmethod
    def from_token_payload(cls, payload: TokenPayload) -> Identity:
        """Build an identity from a verified token.

        Unknown role names are dropped rather than trusted.
        """
        known = {role.value for role in UserRole}
        return cls(
            user_id=payload.user_id,
            username=payload.username,
            roles=frozenset(UserRole(r) for r in payload.roles if r in known),
        )

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    def __str__(self) -> str:
        return f"Identity({self.username})"

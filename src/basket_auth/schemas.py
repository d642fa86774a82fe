"""Auth schemas and data structures.

These are simple data classes used for transferring token data between
components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    This represents the data extracted from a verified JWT.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    username
        The user's login name
    roles
        Role names granted at the time the token was minted
    exp
        Token expiration timestamp
    token_type
        Always "access" for session tokens
    """

    user_id: UUID
    username: str
    roles: frozenset[str]
    exp: datetime
    token_type: str = "access"

    def is_access_token(self) -> bool:
        """Check if this is an access token."""
        return self.token_type == "access"

"""JWT token service.

Issues and verifies the signed, time-bounded session tokens handed out at
login. Tokens are stateless: nothing is stored server-side.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from basket_auth.exceptions import InvalidTokenError
from basket_auth.schemas import TokenPayload


class JWTService:
    """Service for session token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id, "alice", ["user"])
    >>> payload = service.verify_token(token)
    >>> print(payload.roles)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 60
    ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_minutes
            Minutes until a session token expires (default 60)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(minutes=access_token_expire_minutes)

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def create_access_token(
        self,
        user_id: UUID,
        username: str,
        roles: Iterable[str],
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a session token bound to a user identity and role set.

        Parameters
        ----------
        user_id
            The user's unique identifier
        username
            The user's login name
        roles
            Role names to embed in the token
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "sub": str(user_id),
            "username": username,
            "roles": sorted(set(roles)),
            "type": self.TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )

            user_id = UUID(payload["sub"])
            username = payload["username"]
            roles = payload["roles"]
            if not isinstance(roles, list) or not all(
                isinstance(r, str) for r in roles
            ):
                msg = "roles claim must be a list of strings"
                raise ValueError(msg)
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            token_type = payload.get("type", self.TOKEN_TYPE)

            return TokenPayload(
                user_id=user_id,
                username=username,
                roles=frozenset(roles),
                exp=exp,
                token_type=token_type,
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

"""User aggregate for identity concerns only."""

from datetime import datetime
from typing import Iterable, Union
from uuid import UUID, uuid4

from basket.domain.shared.exceptions import ValidationError
from basket.domain.shared.time import utc_now
from basket_identity.domain.user.value_objects import Email, UserRole


class User:
    """
    User aggregate root.

    Holds the login identity (username, email, password hash) and the set of
    roles granted to the user. The plaintext password never reaches this
    object; callers hash it first.
    """

    def __init__(  # NOQA: PLR0913
        self,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        roles: Iterable[Union[str, UserRole]] = (UserRole.USER,),
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        username = (username or "").strip()
        if not username:
            msg = "Username cannot be empty"
            raise ValidationError(msg)

        role_set = frozenset(
            role if isinstance(role, UserRole) else UserRole(role) for role in roles
        )
        if not role_set:
            msg = "A user must hold at least one role"
            raise ValueError(msg)

        self._id = id or uuid4()
        self._username = username
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._roles = role_set
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def roles(self) -> frozenset[UserRole]:
        return self._roles

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def has_role(self, role: UserRole) -> bool:
        return role in self._roles

    @classmethod
    def create(
        cls,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        roles: Iterable[UserRole] = (UserRole.USER,),
    ) -> "User":
        return cls(
            username=username,
            email=email,
            password_hash=password_hash,
            roles=roles,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        roles: Iterable[Union[str, UserRole]],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            username=username,
            email=email,
            password_hash=password_hash,
            roles=roles,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r})"

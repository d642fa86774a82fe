"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from basket_identity.domain.user.aggregates.user import User
from basket_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates (the credential store)."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check if a user exists with the given username."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert a new user.

        Raises
        ------
        EmailAlreadyExistsError
            If the store rejects the email as a duplicate
        UsernameAlreadyExistsError
            If the store rejects the username as a duplicate
        """

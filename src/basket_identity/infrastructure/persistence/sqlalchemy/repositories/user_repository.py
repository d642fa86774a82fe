"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from basket.domain.shared import ensure_tz_aware
from basket_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserRepository,
)
from basket_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return await self._find_one(stmt)

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username.strip())
        return await self._find_one(stmt)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(UserModel).where(UserModel.email == email_value)
        return await self._find_one(stmt)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        user = await self.find_by_email(email)
        return user is not None

    async def exists_by_username(self, username: str) -> bool:
        user = await self.find_by_username(username)
        return user is not None

    async def save(self, user: User) -> None:
        model = self._map_to_model(user)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            # The constraint name differs per backend, so inspect the message
            reason = str(e.orig).lower()
            if "username" in reason:
                raise UsernameAlreadyExistsError(user.username) from e
            raise EmailAlreadyExistsError(user.email) from e

        logger.info("Created user: %s (username: %s)", user.id, user.username)

    async def _find_one(self, stmt) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            roles=model.roles,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            roles=sorted(role.value for role in user.roles),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

"""Application context: the collaborators a request works with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from basket.application.services.cart_service import CartService
from basket_identity.application.services import AuthenticationService

if TYPE_CHECKING:
    from basket.application.services.cart_service import Transaction
    from basket.application.services.keyed_lock import KeyedLock
    from basket.domain.cart import CartRepository
    from basket_auth import JWTService, PasswordHashingService
    from basket_identity.domain.user import UserRepository


@dataclass(frozen=True)
class AppContext:
    """Explicitly wired stores and services for one unit of work.

    Built per request by the API layer and handed to the handlers, so no
    service is looked up from global state. Only the lock registry is
    shared between contexts.
    """

    user_repository: UserRepository
    cart_repository: CartRepository
    password_service: PasswordHashingService
    jwt_service: JWTService
    cart_locks: KeyedLock
    transaction: Transaction
    store_timeout_seconds: float = 5.0

    def authentication_service(self) -> AuthenticationService:
        return AuthenticationService(
            user_repository=self.user_repository,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
        )

    def cart_service(self) -> CartService:
        return CartService(
            cart_repository=self.cart_repository,
            transaction=self.transaction,
            locks=self.cart_locks,
            timeout_seconds=self.store_timeout_seconds,
        )

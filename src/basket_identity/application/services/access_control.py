"""Access control pipeline for guarded endpoints.

A request passes through an ordered list of gates before the handler runs:

1. ``TokenGate`` turns the bearer token into an ``Identity`` or raises
   ``InvalidTokenError``.
2. ``RoleGate`` checks that the identity holds the endpoint's role or raises
   ``AccessDeniedError``.

Gates have no side effects besides logging. A failing gate stops the
pipeline, so a role is never checked for an unverified caller.
"""

import logging
from typing import Optional

from basket_auth import AccessDeniedError, InvalidTokenError, JWTService
from basket_identity.application.context import Identity
from basket_identity.domain.user import UserRole

logger = logging.getLogger(__name__)


class TokenGate:
    """Stage 1: verify the session token and produce the caller's identity."""

    def __init__(self, jwt_service: JWTService):
        self._jwt_service = jwt_service

    def __call__(self, token: Optional[str]) -> Identity:
        if not token:
            logger.warning("Rejected request without bearer token")
            msg = "Missing bearer token"
            raise InvalidTokenError(msg)

        try:
            payload = self._jwt_service.verify_token(token)
        except InvalidTokenError as e:
            logger.warning("Rejected token: %s", e.message)
            raise

        if not payload.is_access_token():
            logger.warning(
                "Rejected %s token for user %s",
                payload.token_type,
                payload.user_id,
            )
            msg = f"Unexpected token type: {payload.token_type}"
            raise InvalidTokenError(msg)

        return Identity.from_token_payload(payload)


class RoleGate:
    """Stage 2: exact role membership, no hierarchy between roles."""

    def __init__(self, required_role: UserRole):
        self._required_role = required_role

    @property
    def required_role(self) -> UserRole:
        return self._required_role

    def __call__(self, identity: Identity) -> Identity:
        authorize(identity, self._required_role)
        return identity


def authorize(identity: Identity, required_role: UserRole) -> None:
    """Raise AccessDeniedError unless the identity holds ``required_role``."""
    if not identity.has_role(required_role):
        logger.warning(
            "User %s lacks role %s",
            identity.user_id,
            required_role.value,
        )
        raise AccessDeniedError


class AccessControlEvaluator:
    """Runs the token and role gates, in order, for one request.

    Examples
    --------
    >>> evaluator = AccessControlEvaluator(jwt_service)
    >>> identity = evaluator.evaluate(token, UserRole.ADMIN)
    """

    def __init__(self, jwt_service: JWTService):
        self._token_gate = TokenGate(jwt_service)

    def evaluate(self, token: Optional[str], required_role: UserRole) -> Identity:
        """Return the caller's identity if both gates pass.

        Raises
        ------
        InvalidTokenError
            If the token is missing, invalid or expired
        AccessDeniedError
            If the verified identity lacks ``required_role``
        """
        identity = self._token_gate(token)
        return RoleGate(required_role)(identity)

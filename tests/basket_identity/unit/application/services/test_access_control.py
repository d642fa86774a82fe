"""Unit tests for the access control gates."""

from datetime import timedelta
from unittest.mock import Mock
from uuid import uuid4

import pytest

from basket_auth import AccessDeniedError, InvalidTokenError, JWTService
from basket_identity import (
    AccessControlEvaluator,
    Identity,
    RoleGate,
    TokenGate,
    UserRole,
    authorize,
)


class TestTokenGate:
    def setup_method(self):
        self.jwt_service = JWTService(secret_key="gate-secret")
        self.gate = TokenGate(self.jwt_service)
        self.user_id = uuid4()

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_rejected(self, token):
        with pytest.raises(InvalidTokenError, match="Missing"):
            self.gate(token)

    def test_valid_token_yields_identity(self):
        token = self.jwt_service.create_access_token(self.user_id, "bob", ["user"])

        identity = self.gate(token)

        assert identity == Identity(
            user_id=self.user_id,
            username="bob",
            roles=frozenset({UserRole.USER}),
        )

    def test_expired_token_rejected(self):
        token = self.jwt_service.create_access_token(
            self.user_id,
            "bob",
            ["user"],
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(InvalidTokenError):
            self.gate(token)

    def test_unknown_roles_are_dropped(self):
        token = self.jwt_service.create_access_token(
            self.user_id,
            "bob",
            ["user", "superuser"],
        )

        assert self.gate(token).roles == frozenset({UserRole.USER})


class TestRoleGate:
    def test_exact_role_passes(self):
        identity = Identity(uuid4(), "bob", frozenset({UserRole.USER}))
        assert RoleGate(UserRole.USER)(identity) is identity

    def test_missing_role_denied(self):
        identity = Identity(uuid4(), "bob", frozenset({UserRole.USER}))

        with pytest.raises(AccessDeniedError):
            RoleGate(UserRole.ADMIN)(identity)

    def test_admin_does_not_imply_user(self):
        identity = Identity(uuid4(), "root", frozenset({UserRole.ADMIN}))

        with pytest.raises(AccessDeniedError):
            authorize(identity, UserRole.USER)

    def test_empty_role_set_denied_everywhere(self):
        identity = Identity(uuid4(), "ghost", frozenset())

        for role in UserRole:
            with pytest.raises(AccessDeniedError):
                authorize(identity, role)


class TestAccessControlEvaluator:
    def setup_method(self):
        self.jwt_service = JWTService(secret_key="gate-secret")
        self.evaluator = AccessControlEvaluator(self.jwt_service)

    def test_both_gates_pass(self):
        token = self.jwt_service.create_access_token(uuid4(), "root", ["admin"])

        identity = self.evaluator.evaluate(token, UserRole.ADMIN)

        assert identity.username == "root"

    def test_token_failure_wins_over_role_failure(self):
        """An invalid token is reported as such, never as a role problem."""
        with pytest.raises(InvalidTokenError):
            self.evaluator.evaluate("garbage", UserRole.ADMIN)

    def test_role_gate_not_consulted_for_bad_token(self):
        jwt_service = Mock(spec=JWTService)
        jwt_service.verify_token.side_effect = InvalidTokenError("bad")
        evaluator = AccessControlEvaluator(jwt_service)

        with pytest.raises(InvalidTokenError):
            evaluator.evaluate("whatever", UserRole.USER)

    def test_valid_token_without_role_denied(self):
        token = self.jwt_service.create_access_token(uuid4(), "bob", ["user"])

        with pytest.raises(AccessDeniedError):
            self.evaluator.evaluate(token, UserRole.ADMIN)

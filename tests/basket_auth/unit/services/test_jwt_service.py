"""Unit tests for JWTService."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from basket_auth.exceptions import InvalidTokenError
from basket_auth.services import JWTService


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        service = JWTService(secret_key="test-secret-key")
        assert service.access_token_lifetime == timedelta(minutes=60)

    def test_init_with_empty_secret_raises(self):
        """Test that empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")

    def test_init_with_custom_expiry(self):
        service = JWTService(secret_key="test-secret", access_token_expire_minutes=5)
        assert service.access_token_lifetime == timedelta(minutes=5)


class TestAccessTokens:
    """Tests for access token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(secret_key="test-secret-key-12345")
        self.user_id = uuid4()
        self.username = "alice"

    def test_create_access_token(self):
        """Test that access token is created successfully."""
        token = self.service.create_access_token(
            user_id=self.user_id,
            username=self.username,
            roles=["user"],
        )

        assert isinstance(token, str)
        assert len(token) > 0

    def test_verify_valid_access_token(self):
        """Test that valid access token is verified correctly."""
        token = self.service.create_access_token(
            user_id=self.user_id,
            username=self.username,
            roles=["user", "admin"],
        )

        payload = self.service.verify_token(token)

        assert payload.user_id == self.user_id
        assert payload.username == self.username
        assert payload.roles == frozenset({"user", "admin"})
        assert payload.token_type == "access"
        assert payload.is_access_token()

    def test_empty_role_set_round_trips(self):
        token = self.service.create_access_token(self.user_id, self.username, [])

        assert self.service.verify_token(token).roles == frozenset()

    def test_verify_expired_token_raises(self):
        """Test that expired token raises InvalidTokenError."""
        token = self.service.create_access_token(
            user_id=self.user_id,
            username=self.username,
            roles=["user"],
            expires_delta=timedelta(seconds=-1),  # Already expired
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.verify_token(token)

    def test_verify_invalid_token_raises(self):
        with pytest.raises(InvalidTokenError):
            self.service.verify_token("invalid.token.string")

    def test_verify_tampered_token_raises(self):
        """Test that a token with an altered signature is rejected."""
        token = self.service.create_access_token(
            user_id=self.user_id,
            username=self.username,
            roles=["user"],
        )
        head, body, signature = token.split(".")
        tampered_signature = ("A" if signature[0] != "A" else "B") + signature[1:]

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(f"{head}.{body}.{tampered_signature}")

    def test_token_signed_with_other_secret_raises(self):
        other = JWTService(secret_key="a-completely-different-secret")
        token = other.create_access_token(self.user_id, self.username, ["user"])

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_token_with_widened_roles_is_rejected(self):
        """Re-encoding the payload with more roles breaks the signature."""
        token = self.service.create_access_token(
            self.user_id,
            self.username,
            ["user"],
        )
        claims = jwt.decode(token, options={"verify_signature": False})
        claims["roles"] = ["user", "admin"]
        forged = jwt.encode(claims, "guessed-secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(forged)

    def test_malformed_roles_claim_raises(self):
        claims = {
            "sub": str(self.user_id),
            "username": self.username,
            "roles": "admin",
            "type": "access",
            "exp": 4102444800,
        }
        token = jwt.encode(claims, "test-secret-key-12345", algorithm="HS256")

        with pytest.raises(InvalidTokenError, match="Malformed"):
            self.service.verify_token(token)

    def test_missing_subject_raises(self):
        claims = {"username": self.username, "roles": [], "exp": 4102444800}
        token = jwt.encode(claims, "test-secret-key-12345", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

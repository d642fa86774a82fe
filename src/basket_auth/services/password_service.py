"""Password hashing service using bcrypt."""

import bcrypt

from basket_auth.exceptions import WeakPasswordError


class PasswordHashingService:
    """One-way, salted password hashing and verification.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("correct horse battery")
    >>> service.verify("correct horse battery", stored)
    True
    """

    MIN_LENGTH = 8
    # bcrypt only looks at the first 72 bytes of its input
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Tests pass a low
            value to keep hashing fast.
        """
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash a plaintext password after checking its strength.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if password matches the stored hash.

        Malformed hashes never verify.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same work as a real check against a throwaway hash.

        Login calls this when the username is unknown so both failure
        paths take comparable time. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"basket-dummy-password",
                bcrypt.gensalt(rounds=self._rounds),
            )
        encoded = password.encode("utf-8")[: self.MAX_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash)
        return False

    def validate_strength(self, password: str) -> None:
        """Check that a password is non-empty and within length bounds.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

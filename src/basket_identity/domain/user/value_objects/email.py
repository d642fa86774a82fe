"""Email value object.

Provides validated, normalized email addresses for user identification.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from basket_identity.domain.user.exceptions import InvalidEmailError


@dataclass(frozen=True)
class Email:
    """Value object representing a validated, lower-cased email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        try:
            result = validate_email(self.value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg) from e

        object.__setattr__(self, "value", result.normalized.lower())

    def __str__(self) -> str:
        return self.value

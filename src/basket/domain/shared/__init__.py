"""Shared domain components.

Exceptions and utilities used across domain boundaries.
"""

from basket.domain.shared.exceptions import (
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ServiceUnavailableError,
    StoreUnavailableError,
    ValidationError,
)
from basket.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "EntityNotFoundError",
    "ConflictError",
    "ConcurrencyError",
    "ServiceUnavailableError",
    "StoreUnavailableError",
    # Utilities
    "ensure_tz_aware",
    "utc_now",
]

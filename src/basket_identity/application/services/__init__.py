from basket_identity.application.services.access_control import (
    AccessControlEvaluator,
    RoleGate,
    TokenGate,
    authorize,
)
from basket_identity.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = [
    "AccessControlEvaluator",
    "AuthenticationService",
    "RoleGate",
    "TokenGate",
    "authorize",
]

"""School Records - Services initialization."""
from school_records.services.auth import (
    AccountDisabledError,
    AuthenticationError,
    AuthService,
    InvalidCredentialsError,
    TokenError,
    UserSession,
)
from school_records.services.errors import (
    ConflictError,
    PermissionDeniedError,
    RecordNotFoundError,
    ServiceError,
    ValidationFailedError,
)

__all__ = [
    "AccountDisabledError",
    "AuthenticationError",
    "AuthService",
    "InvalidCredentialsError",
    "TokenError",
    "UserSession",
    "ConflictError",
    "PermissionDeniedError",
    "RecordNotFoundError",
    "ServiceError",
    "ValidationFailedError",
]

"""
School Records - Service Errors
Domain exceptions raised by the service layer and mapped to HTTP statuses
by the application's exception handlers.
"""


class ServiceError(Exception):
    """Base class for recoverable service-layer failures."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFoundError(ServiceError):
    """The requested record does not exist."""
    status_code = 404


class PermissionDeniedError(ServiceError):
    """The session may not touch this record."""
    status_code = 403


class ConflictError(ServiceError):
    """The change would break a uniqueness or ownership rule."""
    status_code = 409


class ValidationFailedError(ServiceError):
    """Input passed schema validation but breaks a cross-field rule."""
    status_code = 400

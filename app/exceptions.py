"""
Domain exceptions

Every failure in grading, classification and progress tracking is raised
before any write, so handlers can map them straight to HTTP responses.
"""


class PlatformError(Exception):
    """Base exception for all platform errors."""

    status_code = 500
    error = "platform_error"

    def __init__(self, message: str = "Unexpected platform error"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(PlatformError):
    """Stored content is in a state that cannot be graded or tracked."""

    status_code = 422
    error = "configuration_error"


class NotFoundError(PlatformError):
    """A referenced assessment, module, user or result does not exist."""

    status_code = 404
    error = "not_found"


class ValidationError(PlatformError):
    """Malformed input or an out-of-range value."""

    status_code = 400
    error = "validation_error"


class PermissionDeniedError(PlatformError):
    """Caller's role does not allow the operation."""

    status_code = 403
    error = "permission_denied"


class ConflictError(PlatformError):
    """Operation conflicts with existing records."""

    status_code = 409
    error = "conflict"

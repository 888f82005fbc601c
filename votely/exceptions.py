"""
Domain errors raised by services and rendered by ``votely.errors``.

Each class carries the HTTP status and error code it maps to, so routes
never translate exceptions by hand.
"""


class ApiError(Exception):
    status_code = 400
    code = "BAD_REQUEST"
    message = "Request error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class ValidationFailed(ApiError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Validation error"


class PollValidationError(ValidationFailed):
    pass


class InvalidOptionIndex(ValidationFailed):
    message = "Invalid option index"


class InvalidIdentifier(ValidationFailed):
    message = "Invalid poll ID format"


class AuthenticationRequired(ApiError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Unauthorized"


class PermissionDenied(ApiError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Forbidden"


class PollForbidden(PermissionDenied):
    message = "Only the poll owner can modify this poll"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class PollNotFound(NotFound):
    message = "Poll not found"


class UserNotFound(NotFound):
    message = "User not found"


class Conflict(ApiError):
    status_code = 409
    code = "CONFLICT"
    message = "Resource already exists"


class StorageError(ApiError):
    """Transient store failure. Nothing was committed; the caller may retry."""

    status_code = 503
    code = "STORAGE_ERROR"
    message = "Storage is temporarily unavailable. Please try again."

    def __init__(self, message=None, details=None):
        super().__init__(message, details or {"retryable": True})

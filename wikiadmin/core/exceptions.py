"""App-wide exception hierarchy.

Every error that should reach a client as a structured payload is an
AppException subclass. Each class carries its HTTP status and a stable
error code; the global handlers render them as ``{"errors": {code, message}}``.
"""


class AppException(Exception):
    """Base exception for all application errors.

    Subclasses define their own status_code and code. Route handlers may also
    pass a specific code per failure site, e.g.
    ``InternalError("Error occurred in find user", code="retrieve-...-failed")``.
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self, message: str = "An unexpected error occurred", code: str | None = None
    ):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


# Bad request errors (400)
class BadRequestError(AppException):
    """Raised for expected, client-caused failures."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str = "Bad request", code: str | None = None):
        super().__init__(message, code)


class UpperLimitExceededError(BadRequestError):
    """Raised when activating a user would exceed the configured user limit."""

    code = "user-upper-limit-exceeded"

    def __init__(
        self, message: str = "The number of users has reached the upper limit"
    ):
        super().__init__(message)


# Not found errors (404)
class NotFoundError(AppException):
    """Base class for resource not found errors."""

    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "Resource not found", code: str | None = None):
        super().__init__(message, code)


# Conflict errors (409)
class ConflictError(AppException):
    """Base class for resource conflict errors."""

    status_code = 409
    code = "conflict"

    def __init__(self, message: str = "Resource conflict", code: str | None = None):
        super().__init__(message, code)


# Internal errors (500)
class InternalError(AppException):
    """Raised when a collaborator (database, auth provider) fails unexpectedly."""

    status_code = 500
    code = "internal_error"

    def __init__(
        self, message: str = "An internal error occurred", code: str | None = None
    ):
        super().__init__(message, code)

"""User domain exceptions."""

from wikiadmin.core.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    NotFoundError,
)


class UserAuthorizationError(AppException):
    """Base class for user authorization failures."""

    status_code = 403
    code = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class UserInactiveError(UserAuthorizationError):
    """Raised when the authenticated user is not active."""

    code = "user_inactive"

    def __init__(self, message: str = "User is inactive"):
        super().__init__(message)


class UserNotFoundError(BadRequestError):
    """Raised when a user addressed by an admin route does not exist.

    Reported as 400: the id came from the client.
    """

    code = "user-not-found"

    def __init__(self, message: str = "find-user-is-not-found"):
        super().__init__(message)


class UnknownAccountError(NotFoundError):
    """Raised when a valid auth token maps to no local user."""

    code = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when an account already exists for an email."""

    code = "email_exists"

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)

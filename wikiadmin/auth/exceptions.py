"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from wikiadmin.core.exceptions import AppException, BadRequestError
from wikiadmin.user.exceptions import UserAuthorizationError


# Authentication errors (401)
class AuthenticationError(AppException):
    """Base class for authentication failures."""

    status_code = 401
    code = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when no usable credentials were sent."""

    code = "invalid_credentials"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when authentication token is invalid or expired."""

    code = "invalid_token"

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


class SessionCookieError(AuthenticationError):
    """Raised when session cookie verification fails."""

    code = "session_cookie_error"

    def __init__(self, message: str = "Session cookie error"):
        super().__init__(message)


# Authorization errors (403)
class AdminRequiredError(UserAuthorizationError):
    """Raised when admin privileges are required."""

    code = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)


# Auth provider rejections of a password (400)
class WeakPasswordError(BadRequestError):
    """Raised when password does not meet strength requirements."""

    code = "weak_password"

    def __init__(self, message: str = "Password is too weak"):
        super().__init__(message)


class PasswordPolicyError(BadRequestError):
    """Raised when password does not meet policy requirements."""

    code = "password_policy_error"

    def __init__(
        self,
        message: str = "Password does not meet requirements",
        requirements: list[str] | None = None,
    ):
        self.requirements = requirements or []
        if requirements:
            message = f"{message}: {', '.join(requirements)}"
        super().__init__(message)


class ProviderError(AppException):
    """Raised when the auth provider fails for an unmapped reason."""

    status_code = 502
    code = "provider_error"

    def __init__(self, message: str = "Auth provider request failed"):
        super().__init__(message)

"""Firebase Authentication Service.

Thin wrapper over the Firebase Admin SDK for what the admin API needs:
verifying credentials of incoming requests and managing provider accounts
for invited users.
"""

import contextlib
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NoReturn

from firebase_admin import auth as firebase_admin_auth
from firebase_admin.exceptions import FirebaseError

from wikiadmin.auth.exceptions import (
    PasswordPolicyError,
    ProviderError,
    SessionCookieError,
    WeakPasswordError,
)
from wikiadmin.core.exceptions import AppException
from wikiadmin.user.exceptions import EmailExistsError, UnknownAccountError

logger = logging.getLogger(__name__)

ErrorMapping = dict[str, tuple[type[AppException], str]]


@dataclass(frozen=True)
class FirebaseUser:
    """A provider account created on behalf of a local user."""

    uid: str
    email: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Decoded token claims from Firebase."""

    uid: str
    email: str | None = None


_PASSWORD_ERRORS: ErrorMapping = {
    "WEAK_PASSWORD": (WeakPasswordError, "Password is too weak"),
    "INVALID_PASSWORD": (WeakPasswordError, "Password is too weak"),
}


class FirebaseAuthService:
    @staticmethod
    def _extract_token_claims(
        decoded: dict[str, Any], allow_sub: bool = False
    ) -> TokenClaims:
        uid = decoded.get("uid")
        if allow_sub and not uid:
            uid = decoded.get("sub")

        if not uid:
            raise AppException("Invalid token: missing uid")

        return TokenClaims(uid=uid, email=decoded.get("email"))

    def verify_session_cookie(
        self, session_cookie: str, check_revoked: bool = True
    ) -> TokenClaims:
        """Verify session cookie and return claims.

        Raises:
            SessionCookieError: If verification fails
        """
        try:
            decoded = firebase_admin_auth.verify_session_cookie(
                session_cookie, check_revoked=check_revoked
            )
            return self._extract_token_claims(decoded, allow_sub=True)
        except FirebaseError as e:
            raise SessionCookieError("Invalid session cookie") from e
        except AppException as e:
            raise SessionCookieError(str(e)) from e

    def verify_id_token(self, id_token: str) -> TokenClaims:
        """Verify ID token and return claims.

        Raises:
            AppException: If verification fails
        """
        try:
            decoded = firebase_admin_auth.verify_id_token(id_token)
            return self._extract_token_claims(decoded, allow_sub=False)
        except (ValueError, FirebaseError) as e:
            raise AppException("Invalid ID token") from e

    def create_user(self, email: str, password: str) -> FirebaseUser:
        """Create a provider account with an email/password sign-in.

        Raises:
            EmailExistsError: If email already registered
            WeakPasswordError: If password doesn't meet requirements
            PasswordPolicyError: If password doesn't meet policy requirements
            ProviderError: For other Firebase errors
        """
        try:
            firebase_user = firebase_admin_auth.create_user(
                email=email, password=password
            )
        except FirebaseError as e:
            self._raise_password_policy_error(e)
            self._handle_firebase_error(
                error=e,
                error_mappings={
                    "EMAIL_EXISTS": (EmailExistsError, "Email already registered"),
                    "EMAIL_ALREADY_EXISTS": (
                        EmailExistsError,
                        "Email already registered",
                    ),
                    **_PASSWORD_ERRORS,
                },
                default_message="Failed to create user",
            )
        return FirebaseUser(uid=firebase_user.uid, email=email)

    def set_password(self, uid: str, password: str) -> None:
        """Overwrite the password of a provider account (admin reset).

        Raises:
            UnknownAccountError: If no provider account has this uid
            WeakPasswordError: If password doesn't meet requirements
            PasswordPolicyError: If password doesn't meet policy requirements
            ProviderError: For other Firebase errors
        """
        try:
            firebase_admin_auth.update_user(uid, password=password)
        except FirebaseError as e:
            self._raise_password_policy_error(e)
            self._handle_firebase_error(
                error=e,
                error_mappings={
                    "USER_NOT_FOUND": (UnknownAccountError, "User not found"),
                    **_PASSWORD_ERRORS,
                },
                default_message="Failed to update password",
            )
        logger.info("Password reset for provider account %s", uid)

    def delete_user(self, uid: str) -> None:
        """Delete a provider account (best-effort, used for rollback)."""
        with contextlib.suppress(FirebaseError):
            firebase_admin_auth.delete_user(uid)

    @staticmethod
    def _extract_password_requirements(error_message: str) -> list[str]:
        match = re.search(r"Missing password requirements: \[([^\]]+)\]", error_message)
        if match:
            return [req.strip() for req in match.group(1).split(",")]
        return []

    def _raise_password_policy_error(self, error: FirebaseError) -> None:
        error_message = str(error)
        if "PASSWORD_DOES_NOT_MEET_REQUIREMENTS" in error_message:
            raise PasswordPolicyError(
                "Password does not meet requirements",
                requirements=self._extract_password_requirements(error_message),
            ) from error

    @staticmethod
    def _handle_firebase_error(
        error: FirebaseError,
        error_mappings: ErrorMapping,
        default_message: str = "Firebase operation failed",
    ) -> NoReturn:
        """Map a Firebase Admin SDK error to an AppException and raise it.

        The error code is checked first, then the message text.
        """
        error_code = getattr(error, "code", None)
        if error_code and error_code in error_mappings:
            exc_class, msg = error_mappings[error_code]
            raise exc_class(msg) from error

        error_message = str(error)
        for key, (exc_class, msg) in error_mappings.items():
            if key in error_message:
                raise exc_class(msg) from error

        raise ProviderError(default_message) from error


@lru_cache
def get_firebase_auth_service() -> FirebaseAuthService:
    """Get cached Firebase Auth Service instance."""
    return FirebaseAuthService()

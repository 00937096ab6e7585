"""Auth domain dependencies.

Authentication dependencies for FastAPI routes including get_current_user
and type aliases for authenticated user injection.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import select

from wikiadmin.auth.exceptions import (
    AdminRequiredError,
    InvalidCredentialsError,
    InvalidTokenError,
    SessionCookieError,
)
from wikiadmin.auth.service import FirebaseAuthService, get_firebase_auth_service
from wikiadmin.core.deps import SessionDep
from wikiadmin.core.exceptions import AppException
from wikiadmin.user.exceptions import UnknownAccountError, UserInactiveError
from wikiadmin.user.models import User, UserStatus

SESSION_COOKIE_NAME = "session"

security = HTTPBearer(auto_error=False)

FirebaseAuthDep = Annotated[FirebaseAuthService, Depends(get_firebase_auth_service)]


def get_current_user(
    request: Request,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> User:
    """Verify Firebase authentication and return the local, active User.

    Supports two authentication methods (in priority order):
    1. Session cookie (the wiki frontend)
    2. Bearer ID token (API clients)

    Raises:
        InvalidTokenError: If authentication token is invalid
        InvalidCredentialsError: If not authenticated
        UnknownAccountError: If no local user has the provider UID
        UserInactiveError: If user is not active
    """
    external_id: str | None = None

    session_cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if session_cookie:
        try:
            claims = firebase_auth.verify_session_cookie(
                session_cookie, check_revoked=True
            )
            external_id = claims.uid
        except SessionCookieError as e:
            raise InvalidTokenError() from e

    if external_id is None and credentials is not None:
        try:
            claims = firebase_auth.verify_id_token(credentials.credentials)
            external_id = claims.uid
        except AppException as e:
            raise InvalidTokenError() from e

    if not external_id:
        raise InvalidCredentialsError()

    user = session.exec(select(User).where(User.external_id == external_id)).first()

    if user is None:
        raise UnknownAccountError()

    if user.status != UserStatus.ACTIVE:
        raise UserInactiveError()

    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Require authentication without injecting user into path operation."""


def get_admin_user(user: CurrentUserDep) -> User:
    """Verify the current user has admin privileges.

    Raises:
        AdminRequiredError: If user is not an admin
    """
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require admin privileges without injecting user into path operation.

    Use as an endpoint-level dependency:
        @router.put("/{user_id}/giveAdmin", dependencies=[Depends(require_admin)])
    """

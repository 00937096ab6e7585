"""Tests for wikiadmin/auth/service.py - Firebase Auth Service."""

from unittest.mock import MagicMock, patch

import pytest
from firebase_admin.exceptions import FirebaseError
from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from wikiadmin.auth.exceptions import (
    PasswordPolicyError,
    ProviderError,
    SessionCookieError,
    WeakPasswordError,
)
from wikiadmin.auth.service import FirebaseAuthService, FirebaseUser, TokenClaims
from wikiadmin.core.exceptions import AppException
from wikiadmin.user.exceptions import EmailExistsError, UnknownAccountError

SERVICE_AUTH = "wikiadmin.auth.service.firebase_admin_auth"


@hypothesis_settings(max_examples=100)
@given(
    exception_class=st.sampled_from(
        [EmailExistsError, WeakPasswordError, UnknownAccountError, ProviderError]
    ),
    message=st.text(min_size=1, max_size=100),
)
def test_exception_hierarchy_invariant(exception_class, message):
    """Property: every provider-mapped error is an AppException keeping its message."""
    assert issubclass(exception_class, AppException)

    instance = exception_class(message)

    assert isinstance(instance, AppException)
    assert instance.message == message


@hypothesis_settings(max_examples=50)
@given(
    error_code=st.sampled_from(
        ["USER_NOT_FOUND", "INTERNAL_ERROR", "PERMISSION_DENIED", "UNAVAILABLE"]
    ),
    error_message=st.text(min_size=1, max_size=100),
)
def test_delete_user_error_suppression(error_code, error_message):
    """Property: delete_user never propagates Firebase errors."""
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.delete_user.side_effect = FirebaseError(
            code=error_code, message=error_message
        )

        FirebaseAuthService().delete_user("uid-1")

        mock_auth.delete_user.assert_called_once_with("uid-1")


def test_verify_session_cookie():
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.verify_session_cookie.return_value = {
            "sub": "uid-1",
            "email": "a@example.com",
        }

        claims = FirebaseAuthService().verify_session_cookie("cookie")

    assert claims == TokenClaims(uid="uid-1", email="a@example.com")


def test_verify_session_cookie_failure():
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.verify_session_cookie.side_effect = FirebaseError(
            code="UNAUTHENTICATED", message="expired"
        )

        with pytest.raises(SessionCookieError):
            FirebaseAuthService().verify_session_cookie("cookie")


def test_verify_id_token_requires_uid():
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.verify_id_token.return_value = {"sub": "uid-1"}

        with pytest.raises(AppException):
            FirebaseAuthService().verify_id_token("token")


def test_create_user():
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.create_user.return_value = MagicMock(uid="uid-1")

        result = FirebaseAuthService().create_user("a@example.com", "secret-pass")

    assert result == FirebaseUser(uid="uid-1", email="a@example.com")
    mock_auth.create_user.assert_called_once_with(
        email="a@example.com", password="secret-pass"
    )


@pytest.mark.parametrize(
    ("code", "message", "expected"),
    [
        ("ALREADY_EXISTS", "EMAIL_EXISTS", EmailExistsError),
        ("INVALID_ARGUMENT", "WEAK_PASSWORD : too short", WeakPasswordError),
        ("INTERNAL", "something else", ProviderError),
    ],
)
def test_create_user_error_mapping(code, message, expected):
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.create_user.side_effect = FirebaseError(code=code, message=message)

        with pytest.raises(expected):
            FirebaseAuthService().create_user("a@example.com", "pw")


def test_create_user_password_policy():
    message = (
        "PASSWORD_DOES_NOT_MEET_REQUIREMENTS : "
        "Missing password requirements: [Password must contain a numeric character]"
    )
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.create_user.side_effect = FirebaseError(
            code="INVALID_ARGUMENT", message=message
        )

        with pytest.raises(PasswordPolicyError) as exc_info:
            FirebaseAuthService().create_user("a@example.com", "password")

    assert exc_info.value.requirements == ["Password must contain a numeric character"]
    assert exc_info.value.status_code == 400


def test_set_password():
    with patch(SERVICE_AUTH) as mock_auth:
        FirebaseAuthService().set_password("uid-1", "new-pass")

    mock_auth.update_user.assert_called_once_with("uid-1", password="new-pass")


def test_set_password_unknown_account():
    with patch(SERVICE_AUTH) as mock_auth:
        mock_auth.update_user.side_effect = FirebaseError(
            code="NOT_FOUND", message="USER_NOT_FOUND"
        )

        with pytest.raises(UnknownAccountError):
            FirebaseAuthService().set_password("uid-1", "new-pass")

"""Tests for wikiadmin/main.py - Application lifespan and initialization."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from wikiadmin.main import app, lifespan


@pytest.mark.asyncio
async def test_lifespan_initialization():
    """Test lifespan context manager initializes Firebase and Resend."""
    mock_app = FastAPI()

    with (
        patch("wikiadmin.main.init_firebase") as mock_firebase,
        patch("wikiadmin.main.init_resend") as mock_resend,
    ):
        async with lifespan(mock_app):
            mock_firebase.assert_called_once()
            mock_resend.assert_called_once()


def test_routes_are_registered():
    paths = set(app.openapi()["paths"])

    assert {
        "/health",
        "/users/",
        "/users/exists",
        "/users/invite",
        "/users/external-accounts",
        "/users/external-accounts/{account_id}/remove",
        "/users/update.imageUrlCache",
        "/users/reset-password",
        "/users/{user_id}/recent",
        "/users/{user_id}/giveAdmin",
        "/users/{user_id}/removeAdmin",
        "/users/{user_id}/activate",
        "/users/{user_id}/deactivate",
        "/users/{user_id}/remove",
        "/app-settings",
        "/app-settings/site-url-setting",
        "/customize-setting",
        "/customize-setting/function",
    } <= paths

"""
App-wide constants for route configuration.

Single source of truth for route prefixes, tags, common OpenAPI response
definitions, and the email template environments.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    USER = RouteConfig(prefix="/users", tag="users")
    APP_SETTINGS = RouteConfig(prefix="/app-settings", tag="app-settings")
    CUSTOMIZE_SETTING = RouteConfig(
        prefix="/customize-setting", tag="customize-setting"
    )
    HEALTH = RouteConfig(prefix="/health", tag="health")


# Common response definitions for reuse across routers
class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {"description": "Validation failed or resource not found"}
    }
    UNAUTHORIZED: dict[int, dict[str, Any]] = {
        401: {"description": "Not authenticated or invalid credentials"}
    }
    FORBIDDEN: dict[int, dict[str, Any]] = {
        403: {"description": "User is inactive or lacks admin privileges"}
    }
    INTERNAL_ERROR: dict[int, dict[str, Any]] = {
        500: {"description": "A directory or configuration lookup failed"}
    }


# HTML Templates Directory
EmailTemplatesDir = Path(__file__).parent.parent / "templates" / "emails"
CompiledEmailTemplatesDir = EmailTemplatesDir / "compiled"

# Jinja2 environment for source templates (used by compile script)
JinjaEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(EmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml", "j2"]),
)

# Jinja2 environment for compiled templates (used at runtime)
JinjaCompiledEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(CompiledEmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml"]),
)

"""Global exception handlers for consistent error responses.

Two shapes leave this module:

- request validation failures: 400 ``{"errors": [{"code": "validation_failed",
  "message": "<field>: <reason>"}, ...]}``
- everything else: ``{"errors": {"code": ..., "message": ...}}``
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wikiadmin.core.exceptions import AppException

logger = logging.getLogger("wikiadmin.exception")

VALIDATION_FAILED = "validation_failed"
DEFAULT_VALIDATION_MESSAGE = "Invalid value"

# Pydantic prefixes messages raised from custom validators with this.
_VALUE_ERROR_PREFIX = "Value error, "

_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str:
    """Render an error location as the client-facing parameter name.

    ``("query", "selectedStatusList[]", 0)`` becomes ``selectedStatusList``.
    """
    parts = [
        str(part).removesuffix("[]")
        for part in loc
        if not isinstance(part, int) and part not in _LOCATION_ROOTS
    ]
    return ".".join(parts)


def _validation_message(error: dict[str, Any]) -> str:
    """Message of a ValueError raised by our own validators, else the default."""
    message = str(error.get("msg", ""))
    if error.get("type") == "value_error" and message.startswith(_VALUE_ERROR_PREFIX):
        return message.removeprefix(_VALUE_ERROR_PREFIX)
    return DEFAULT_VALIDATION_MESSAGE


def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with a uniform 400 payload."""
    errors = []
    seen: set[str] = set()
    for error in exc.errors():
        field = _field_name(error["loc"])
        message = f"{field}: {_validation_message(error)}" if field else error["msg"]
        # One entry per parameter, like a per-field validator chain.
        if message in seen:
            continue
        seen.add(message)
        errors.append({"code": VALIDATION_FAILED, "message": message})

    logger.info(
        "Validation failed: %s",
        "; ".join(e["message"] for e in errors),
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": 400,
            "error_type": VALIDATION_FAILED,
        },
    )
    return JSONResponse(status_code=400, content={"errors": errors})


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses."""
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": exc.status_code,
        "error_type": exc.code,
    }
    if exc.status_code >= 500:
        logger.error(
            "AppException: %s - %s",
            exc.code,
            exc.message,
            extra=extra,
            exc_info=exc,
        )
    else:
        logger.info("AppException: %s - %s", exc.code, exc.message, extra=extra)
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": {"code": exc.code, "message": exc.message}},
    )


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException raised by the framework (404 routes, 405, ...)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": {"code": "http_error", "message": str(exc.detail)}},
        headers=getattr(exc, "headers", None),
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors."""
    logger.error(
        "Unhandled exception: %s %s - %s",
        request.method,
        request.url.path,
        exc,
        extra={"method": request.method, "path": request.url.path, "status_code": 500},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "errors": {
                "code": "internal_error",
                "message": "An unexpected error occurred",
            }
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

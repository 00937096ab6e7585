from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wikiadmin.core.request_logging import REQUEST_ID_HEADER
from wikiadmin.core.settings import get_settings


def add_cors_middleware(app: FastAPI) -> None:
    """Allow the admin frontend origins; cookies carry the session."""
    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

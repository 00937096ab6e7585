from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from sqladmin import Admin

from wikiadmin.admin.auth import AdminAuth
from wikiadmin.admin.views import ADMIN_VIEWS
from wikiadmin.app_settings.router import router as app_settings_router
from wikiadmin.core.cors import add_cors_middleware
from wikiadmin.core.email import init_resend
from wikiadmin.core.exception_handlers import register_exception_handlers
from wikiadmin.core.firebase import init_firebase
from wikiadmin.core.logging import configure_logging
from wikiadmin.core.request_logging import add_request_logging_middleware
from wikiadmin.customize.router import router as customize_router
from wikiadmin.db.engine import engine
from wikiadmin.health.router import router as health_router
from wikiadmin.user.router import router as user_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_firebase()
    init_resend()
    yield


app = FastAPI(title="Wiki Admin", version="0.1.0", lifespan=lifespan)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(user_router)
api_router.include_router(app_settings_router)
api_router.include_router(customize_router)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin (SQLAdmin enables sessions via auth backend secret)
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
for view in ADMIN_VIEWS:
    admin.add_view(view)

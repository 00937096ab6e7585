import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from wikiadmin.core.settings import get_settings


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth for the operator account from ADMIN_USERNAME/ADMIN_PASSWORD.

    Independent of wiki admins (``User.is_admin``), who use the REST API.
    """

    def __init__(self) -> None:
        # Also signs the session cookie set by SQLAdmin.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", "")).strip()
        password = str(form.get("password", ""))

        settings = get_settings()
        ok = secrets.compare_digest(
            username, settings.admin_username
        ) and secrets.compare_digest(password, settings.admin_password)
        if ok:
            request.session["admin_user"] = username
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("admin_user"))

import hmac
import logging

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from enrollhub.core.settings import get_settings

logger = logging.getLogger(__name__)


class AdminAuth(AuthenticationBackend):
    """SQLAdmin login against the ADMIN_USERNAME/ADMIN_PASSWORD pair."""

    def __init__(self) -> None:
        # Must match the secret SQLAdmin's session middleware signs with.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", form.get("email", ""))).strip()
        password = str(form.get("password", ""))

        settings = get_settings()
        ok = hmac.compare_digest(
            username.encode(), settings.admin_username.encode()
        ) and hmac.compare_digest(password.encode(), settings.admin_password.encode())
        if ok:
            request.session["admin_user"] = username
        else:
            logger.warning("Rejected admin panel login for %r", username)
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("admin_user"))

"""Auth domain dependencies.

Session authentication for FastAPI routes including get_current_user,
role checks and the account service factory.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from enrollhub.auth.exceptions import (
    AdminRequiredError,
    NotAuthenticatedError,
    SessionExpiredError,
)
from enrollhub.auth.service import AccountService
from enrollhub.auth.tokens import TokenError
from enrollhub.core.constants import SESSION_COOKIE_NAME
from enrollhub.core.deps import (
    ImageStoreDep,
    MailerDep,
    SessionDep,
    SettingsDep,
    TokenIssuerDep,
)
from enrollhub.user.models import User
from enrollhub.user.repository import UserRepository

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    session: SessionDep,
    tokens: TokenIssuerDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> User:
    """Verify the session token and return the user it names.

    The token is read from the ``token`` cookie first, then from a
    ``Authorization: Bearer`` header. The user is always reloaded from the
    database.

    Raises:
        NotAuthenticatedError: If no token was presented
        SessionExpiredError: If the token is invalid, expired, or names a
            user that no longer exists
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials

    if not token:
        raise NotAuthenticatedError()

    try:
        user_id = tokens.verify_session(token)
    except TokenError as e:
        raise SessionExpiredError() from e

    user = UserRepository(session).get(user_id)
    if user is None:
        raise SessionExpiredError()

    return user


# Type aliases for dependency injection
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Require authentication without injecting user into path operation.

    Use as a router-level dependency when all routes require auth:
        router = APIRouter(dependencies=[Depends(require_auth)])

    For endpoints that need the user object, still use CurrentUserDep directly.
    FastAPI caches dependencies, so there's no duplicate auth overhead.
    """


def get_admin_user(user: CurrentUserDep) -> User:
    """Verify the current user has the Admin role."""
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require the Admin role without injecting user into path operation."""


def get_account_service(
    session: SessionDep,
    tokens: TokenIssuerDep,
    mailer: MailerDep,
    image_store: ImageStoreDep,
    settings: SettingsDep,
) -> AccountService:
    return AccountService(
        users=UserRepository(session),
        tokens=tokens,
        mailer=mailer,
        image_store=image_store,
        settings=settings,
    )


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]

"""Auth domain router.

Registration, activation, login, logout and password reset routes. Handlers
stay thin and delegate the account lifecycle to AccountService.
"""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Request, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import EmailStr
from pydantic import ValidationError as PydanticValidationError

from enrollhub.auth.dependencies import AccountServiceDep
from enrollhub.core.constants import SESSION_COOKIE_NAME, CommonResponses, Routes
from enrollhub.core.deps import SettingsDep
from enrollhub.core.exceptions import BadRequestError
from enrollhub.core.settings import Settings
from enrollhub.user.schemas import (
    ConfirmPasswordResetRequest,
    MessageResponse,
    PasswordResetRequest,
    Registration,
    SessionResponse,
    UserCreate,
    UserLogin,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=int(settings.session_expires_in.total_seconds()),
        httponly=True,
        secure=settings.is_secure_cookie,
        samesite="lax",
    )


async def _json_registration(request: Request) -> Registration:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequestError("Request body is not valid JSON") from e
    try:
        return UserCreate.model_validate(body).to_registration()
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


@router.post(
    "/create-user",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.SERVER_ERROR},
)
async def create_user(
    request: Request,
    accounts: AccountServiceDep,
    first_name: Annotated[str | None, Form()] = None,
    email: Annotated[EmailStr | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    last_name: Annotated[str | None, Form()] = None,
    phone_number: Annotated[str | None, Form()] = None,
    role: Annotated[str | None, Form()] = None,
    avatar: Annotated[UploadFile | None, File()] = None,
):
    """Start registration by emailing an activation link.

    Accepts a multipart form (with an optional avatar) or a JSON body. The
    account row is only created once the link is followed.
    """
    if request.headers.get("content-type", "").startswith("application/json"):
        registration = await _json_registration(request)
    else:
        registration = Registration(
            first_name=first_name,
            email=email,
            password=password,
            last_name=last_name,
            phone_number=phone_number,
            role=role,
        )
    sent_to = await accounts.register(registration, avatar=avatar)
    return MessageResponse(
        message=f"please check your email:- {sent_to} to activate your account!"
    )


@router.get(
    "/activation/{token}",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.SERVER_ERROR},
)
async def activate_user(
    token: str,
    response: Response,
    accounts: AccountServiceDep,
    settings: SettingsDep,
):
    """Create the account carried by an activation token and log it in."""
    user, session_token = accounts.activate(token)
    set_session_cookie(response, session_token, settings)
    return SessionResponse(user=UserRead.model_validate(user), token=session_token)


@router.post(
    "/login-user",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def login_user(
    payload: UserLogin,
    response: Response,
    accounts: AccountServiceDep,
    settings: SettingsDep,
):
    """Login with email/password and set the session cookie."""
    user, session_token = accounts.login(payload.email, payload.password)
    set_session_cookie(response, session_token, settings)
    return SessionResponse(user=UserRead.model_validate(user), token=session_token)


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie. Tokens are stateless and expire on their own."""
    response.delete_cookie(key=SESSION_COOKIE_NAME)
    return MessageResponse(message="Log out successful!")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={**CommonResponses.SERVER_ERROR},
)
async def request_password_reset(
    payload: PasswordResetRequest, accounts: AccountServiceDep
):
    """Email a single-use password reset link."""
    user = accounts.request_password_reset(payload.email)
    return MessageResponse(
        message=f"please check your email:- {user.email} to reset your password!"
    )


@router.put("/reset-password", response_model=MessageResponse)
async def confirm_password_reset(
    payload: ConfirmPasswordResetRequest, accounts: AccountServiceDep
):
    """Set a new password using the token from the reset email."""
    accounts.confirm_password_reset(payload.token, payload.password)
    return MessageResponse(message="Password reset successfully")

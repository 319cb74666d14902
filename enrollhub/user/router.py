"""User domain router.

Profile routes for the authenticated user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from enrollhub.auth.dependencies import AccountServiceDep, CurrentUserDep, require_auth
from enrollhub.core.constants import CommonResponses, Routes
from enrollhub.core.deps import SessionDep
from enrollhub.user.exceptions import UnknownUserIdError
from enrollhub.user.repository import UserRepository
from enrollhub.user.schemas import UserRead, UserResponse, UserUpdateMe

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.get(
    "/user-info/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user_info(user_id: int, session: SessionDep):
    """Get a user by ID."""
    user = UserRepository(session).get(user_id)
    if user is None:
        raise UnknownUserIdError()
    return UserResponse(user=UserRead.model_validate(user))


@router.put(
    "/update-user-info",
    response_model=UserResponse,
    responses={**CommonResponses.BAD_REQUEST},
)
async def update_user_info(
    user: CurrentUserDep, user_update: UserUpdateMe, accounts: AccountServiceDep
):
    """Update the current user's contact details.

    Only email, phone_number, first_name and last_name can change here.
    Any outstanding password reset link stops working.
    """
    updated = accounts.update_profile(user, user_update)
    return UserResponse(user=UserRead.model_validate(updated))


@router.put(
    "/update-avatar",
    response_model=UserResponse,
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.SERVER_ERROR},
)
async def update_avatar(
    user: CurrentUserDep,
    accounts: AccountServiceDep,
    avatar: Annotated[UploadFile | None, File()] = None,
):
    """Replace the current user's profile picture."""
    updated = await accounts.update_avatar(user, avatar)
    return UserResponse(user=UserRead.model_validate(updated))

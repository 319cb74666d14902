"""Account lifecycle service.

Registration -> activation -> login, profile updates and the password reset
round trip. Every method is one-shot: failures are raised as AppException
subclasses and nothing is retried. Writes that already happened are not
undone when a later mail or upload step fails.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import UploadFile

from enrollhub.auth.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordPolicyError,
    PasswordRequiredError,
    TokenRequiredError,
)
from enrollhub.auth.passwords import (
    hash_password,
    meets_password_policy,
    verify_password,
)
from enrollhub.auth.tokens import (
    TokenError,
    TokenExpired,
    TokenIssuer,
    hash_reset_token,
    new_reset_token,
)
from enrollhub.core.email import (
    Mailer,
    activation_message,
    password_reset_message,
    welcome_message,
)
from enrollhub.core.exceptions import RequiredFieldsError
from enrollhub.core.images import ImageStore
from enrollhub.core.settings import Settings
from enrollhub.user.exceptions import (
    AvatarRequiredError,
    EmailExistsError,
    UserNotFoundError,
)
from enrollhub.user.models import DEFAULT_ROLE, User
from enrollhub.user.repository import UserRepository
from enrollhub.user.schemas import Registration, UserUpdateMe

logger = logging.getLogger(__name__)

# Fields of a pending user carried inside the activation token.
ACTIVATION_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "password",
    "phone_number",
    "profile_pic",
    "role",
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class AccountService:
    """Orchestrates the credential store, token issuer, mailer and image store."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenIssuer,
        mailer: Mailer,
        image_store: ImageStore,
        settings: Settings,
    ):
        self.users = users
        self.tokens = tokens
        self.mailer = mailer
        self.image_store = image_store
        self.settings = settings

    async def register(
        self, registration: Registration, avatar: UploadFile | None = None
    ) -> str:
        """Email an activation link for a candidate user.

        No row is written; the candidate travels inside the activation token.

        Returns:
            The email address the activation link was sent to

        Raises:
            RequiredFieldsError: first_name, email or password missing
            PasswordPolicyError: password too weak
            EmailExistsError: email already registered
            ImageUploadError: avatar could not be stored
            MailDeliveryError: activation email could not be sent
        """
        if not (
            registration.first_name and registration.email and registration.password
        ):
            raise RequiredFieldsError()

        if not meets_password_policy(registration.password):
            raise PasswordPolicyError()

        if self.users.find_by_email(registration.email) is not None:
            raise EmailExistsError()

        profile_pic = ""
        if avatar is not None:
            uploaded = await self.image_store.upload(
                avatar, self.settings.avatar_folder
            )
            profile_pic = uploaded.secure_url

        candidate: dict[str, Any] = {
            "first_name": registration.first_name,
            "last_name": registration.last_name or "",
            "email": registration.email,
            "password": hash_password(
                registration.password, rounds=self.settings.password_hash_rounds
            ),
            "phone_number": registration.phone_number or "",
            "profile_pic": profile_pic,
            "role": registration.role or DEFAULT_ROLE,
        }
        activation_token = self.tokens.issue_activation(candidate)
        activation_url = (
            f"{self.settings.api_base_url}/user/activation/{activation_token}"
        )

        self.mailer.send(
            activation_message(
                email=registration.email,
                first_name=registration.first_name,
                activation_url=activation_url,
                expires_minutes=self.settings.activation_expires_minutes,
            )
        )
        logger.info("Activation email sent to %s", registration.email)
        return registration.email

    def activate(self, activation_token: str) -> tuple[User, str]:
        """Create the user carried by an activation token and start a session.

        Replaying a token whose user already exists fails on the unique email
        index with EmailExistsError; no second row is written.

        Returns:
            Tuple of (created user, session token)
        """
        try:
            claims = self.tokens.verify_activation(activation_token)
        except TokenExpired as e:
            raise InvalidTokenError("Activation link has expired") from e
        except TokenError as e:
            raise InvalidTokenError() from e

        fields = {key: claims[key] for key in ACTIVATION_FIELDS if key in claims}
        if not all(fields.get(key) for key in ("first_name", "email", "password")):
            raise InvalidTokenError()

        user = self.users.insert(User(**fields))
        logger.info("Activated user %s", user.id, extra={"user_id": user.id})

        self.mailer.send(
            welcome_message(
                email=user.email, first_name=user.first_name, last_name=user.last_name
            )
        )
        return user, self.tokens.issue_session(user.id)

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Check credentials and return (user, session token)."""
        if not email or not password:
            raise RequiredFieldsError("Please provide all fields!")

        user = self.users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        if not verify_password(password, user.password):
            logger.info("Failed login for user %s", user.id, extra={"user_id": user.id})
            raise InvalidCredentialsError()

        return user, self.tokens.issue_session(user.id)

    def request_password_reset(self, email: str) -> User:
        """Store a fresh reset token on the user and email it.

        The stored token replaces any earlier one. If the email fails the new
        token stays valid until it expires.
        """
        user = self.users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        plain, digest = new_reset_token()
        user.reset_password_token = digest
        user.reset_password_expires_at = (
            datetime.now(UTC) + self.settings.reset_token_expires_in
        )
        user = self.users.save(user)
        logger.info("Password reset requested", extra={"user_id": user.id})

        reset_url = f"{self.settings.client_url.rstrip('/')}/reset-password/{plain}"
        self.mailer.send(
            password_reset_message(
                email=user.email,
                first_name=user.first_name,
                reset_url=reset_url,
                expires_minutes=self.settings.reset_token_expires_minutes,
            )
        )
        return user

    def confirm_password_reset(self, token: str | None, password: str | None) -> User:
        """Replace the password of the user holding ``token`` and consume it."""
        if not token:
            raise TokenRequiredError()
        if not password:
            raise PasswordRequiredError()

        user = self.users.find_by_reset_token(hash_reset_token(token))
        if user is None:
            raise InvalidTokenError("Invalid token!")

        expires_at = user.reset_password_expires_at
        if expires_at is not None and _as_utc(expires_at) <= datetime.now(UTC):
            raise InvalidTokenError("Reset token has expired")

        if not meets_password_policy(password):
            raise PasswordPolicyError()

        user.password = hash_password(
            password, rounds=self.settings.password_hash_rounds
        )
        user.reset_password_token = ""
        user.reset_password_expires_at = None
        user = self.users.save(user)
        logger.info("Password reset completed", extra={"user_id": user.id})
        return user

    def update_profile(self, user: User, update: UserUpdateMe) -> User:
        """Apply the supplied contact fields; always clears any pending reset."""
        changes = {
            key: value
            for key, value in update.model_dump(exclude_unset=True).items()
            if value
        }

        new_email = changes.get("email")
        if new_email and new_email != user.email:
            if self.users.email_taken_by_other(new_email, user.id):
                raise EmailExistsError()

        for key, value in changes.items():
            setattr(user, key, value)
        user.reset_password_token = ""
        user.reset_password_expires_at = None
        return self.users.save(user)

    async def update_avatar(self, user: User, avatar: UploadFile | None) -> User:
        """Upload a new profile picture and return the reloaded row."""
        if avatar is None:
            raise AvatarRequiredError()

        uploaded = await self.image_store.upload(avatar, self.settings.avatar_folder)
        user.profile_pic = uploaded.secure_url
        return self.users.save(user)

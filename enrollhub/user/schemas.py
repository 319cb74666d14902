"""User domain schemas.

Request and response schemas for account operations.

Security notes:
- password and reset_password_token are hashes and never leave the server
- UserUpdateMe is restricted to contact fields to prevent privilege escalation
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, EmailStr, field_serializer
from sqlmodel import SQLModel


class UserRead(SQLModel):
    """Response schema for a user record."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    profile_pic: str
    role: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Format datetime as ISO 8601 string in UTC with a Z suffix."""
        if value.tzinfo is not None:
            utc_value = value.astimezone(UTC)
        else:
            # Naive datetime - stored as UTC by TimestampMixin
            utc_value = value.replace(tzinfo=UTC)
        return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Registration:
    """Registration input after form parsing, before validation."""

    first_name: str | None
    email: str | None
    password: str | None
    last_name: str | None = None
    phone_number: str | None = None
    role: str | None = None


class UserCreate(BaseModel):
    """JSON body accepted by create-user as an alternative to the multipart form."""

    first_name: str | None = None
    email: EmailStr | None = None
    password: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    role: str | None = None

    def to_registration(self) -> Registration:
        return Registration(**self.model_dump())


class UserLogin(BaseModel):
    email: EmailStr | None = None
    password: str | None = None


class UserUpdateMe(SQLModel):
    """Schema for users updating their own profile.

    Users cannot modify: password, role, profile_pic, reset token.
    """

    email: EmailStr | None = None
    phone_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class PasswordResetRequest(BaseModel):
    email: EmailStr


class ConfirmPasswordResetRequest(BaseModel):
    token: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class UserResponse(BaseModel):
    success: bool = True
    user: UserRead


class SessionResponse(BaseModel):
    """Returned by activation and login; the token is also set as a cookie."""

    success: bool = True
    user: UserRead
    token: str

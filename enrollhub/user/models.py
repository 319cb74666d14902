"""User domain models.

SQLModel table definition for User.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from enrollhub.core.mixins import TimestampMixin

DEFAULT_ROLE = "user"
ADMIN_ROLE = "Admin"


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password and reset_password_token hold one-way hashes and must
    never be exposed in API responses.
    """

    __tablename__: str = "users"

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(default="", max_length=100)
    # Unique index: the only authority on email uniqueness.
    email: str = Field(index=True, unique=True, max_length=255)
    password: str = Field(max_length=255)
    phone_number: str = Field(default="", max_length=30)
    profile_pic: str = Field(default="", max_length=500)
    role: str = Field(default=DEFAULT_ROLE, max_length=20)
    reset_password_token: str = Field(default="", index=True, max_length=128)
    reset_password_expires_at: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

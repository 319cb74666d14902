"""Enrollment domain models."""

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from enrollhub.core.mixins import CreatedAtMixin


class Enrollment(CreatedAtMixin, SQLModel, table=True):
    """Links a user to a course; a user can enroll in a course once."""

    __tablename__: str = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    course_id: int = Field(foreign_key="courses.id", index=True, ondelete="CASCADE")

"""Reusable model mixins.

Timestamp columns shared by the users, courses and enrollments tables.
"""

from datetime import UTC, datetime

from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    """Return current UTC time without microseconds."""
    return datetime.now(UTC).replace(microsecond=0)


class CreatedAtMixin:
    """Adds an immutable ``created_at`` column."""

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )


class TimestampMixin(CreatedAtMixin):
    """Adds ``created_at`` and an ``updated_at`` column refreshed on every UPDATE.

    Usage:
        class Course(TimestampMixin, SQLModel, table=True):
            id: int | None = Field(default=None, primary_key=True)
    """

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now,
        },
    )

"""Tests for enrollhub/user/models.py - users table definition."""

from enrollhub.user.models import User


def test_reset_expiry_column_is_timezone_aware():
    """Expiry instants are stored as timestamptz, independent of server TimeZone."""
    column = User.__table__.c.reset_password_expires_at

    assert column.type.timezone is True
    assert column.nullable is True


def test_email_column_is_unique():
    column = User.__table__.c.email

    assert column.unique is True
    assert column.index is True

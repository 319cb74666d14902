"""Auth domain exceptions.

Account lifecycle failures are reported as 400s to match the public API;
session failures are 401 and role checks 403.
"""

from enrollhub.auth.passwords import PASSWORD_POLICY_MESSAGE
from enrollhub.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)


# Validation errors (400) - auth specific
class PasswordPolicyError(ValidationError):
    """Raised when a password does not meet the strength policy."""

    error_type = "password_policy_error"

    def __init__(self, message: str = PASSWORD_POLICY_MESSAGE):
        super().__init__(message)


class InvalidCredentialsError(ValidationError):
    """Raised when the password does not match the stored hash."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Please provide the correct information"):
        super().__init__(message)


class InvalidTokenError(ValidationError):
    """Raised when an activation or reset token cannot be used."""

    error_type = "invalid_token"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenRequiredError(ValidationError):
    error_type = "token_required"

    def __init__(self, message: str = "Token required!"):
        super().__init__(message)


class PasswordRequiredError(ValidationError):
    error_type = "password_required"

    def __init__(self, message: str = "Password required"):
        super().__init__(message)


# Authentication errors (401)
class NotAuthenticatedError(AuthenticationError):
    """Raised when a protected route is called without a session token."""

    error_type = "not_authenticated"

    def __init__(self, message: str = "Please login to continue"):
        super().__init__(message)


class SessionExpiredError(AuthenticationError):
    """Raised when the session token is expired, tampered with or stale."""

    error_type = "session_expired"

    def __init__(self, message: str = "Session has expired, please login again"):
        super().__init__(message)


# Authorization errors (403)
class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)

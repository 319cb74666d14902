"""User domain exceptions.

Account lookups and duplicate emails are reported as 400s, like every other
account lifecycle failure.
"""

from enrollhub.core.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when no user matches an email address."""

    status_code = 400
    error_type = "user_not_found"

    def __init__(self, message: str = "User doesn't exist!"):
        super().__init__(message)


class UnknownUserIdError(NotFoundError):
    """Raised when a user id does not resolve to a row."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when an email already belongs to another user."""

    status_code = 400
    error_type = "email_exists"

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class AvatarRequiredError(ValidationError):
    error_type = "avatar_required"

    def __init__(self, message: str = "Please provide an avatar image"):
        super().__init__(message)

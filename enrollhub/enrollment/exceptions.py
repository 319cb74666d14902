"""Enrollment domain exceptions."""

from enrollhub.core.exceptions import ConflictError


class AlreadyEnrolledError(ConflictError):
    error_type = "already_enrolled"

    def __init__(self, message: str = "You are already enrolled in this course"):
        super().__init__(message)

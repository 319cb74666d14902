"""Course domain exceptions."""

from enrollhub.core.exceptions import NotFoundError, ValidationError


class CourseNotFoundError(NotFoundError):
    error_type = "course_not_found"

    def __init__(self, message: str = "Course not found"):
        super().__init__(message)


class InvalidDurationError(ValidationError):
    error_type = "invalid_duration"

    def __init__(self, message: str = "Duration must be greater than 0"):
        super().__init__(message)

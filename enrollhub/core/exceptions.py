"""App-wide exception hierarchy.

This module provides a unified exception system with automatic HTTP status code
mapping and consistent error response formatting. Domain packages subclass
these categories in their own ``exceptions`` modules.
"""


class AppException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class and define their own
    status_code and error_type for consistent API responses.
    """

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


# Validation errors (400)
class ValidationError(AppException):
    """Base class for validation errors."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class RequiredFieldsError(ValidationError):
    """Raised when a request omits one or more mandatory fields."""

    error_type = "required_fields"

    def __init__(self, message: str = "Please provide all required fields!"):
        super().__init__(message)


class BadRequestError(ValidationError):
    """Raised for general bad request errors."""

    error_type = "bad_request"

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


# Authentication errors (401)
class AuthenticationError(AppException):
    """Base class for authentication failures."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


# Authorization errors (403)
class AuthorizationError(AppException):
    """Base class for authorization failures."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


# Not found errors (404)
class NotFoundError(AppException):
    """Base class for resource not found errors."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


# Conflict errors (409)
class ConflictError(AppException):
    """Base class for resource conflict errors."""

    status_code = 409
    error_type = "conflict"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


# External service errors (5xx)
class ExternalServiceError(AppException):
    """Base class for upstream collaborator failures (mail, image store)."""

    status_code = 500
    error_type = "external_service_error"

    def __init__(self, message: str = "External service error"):
        super().__init__(message)


class MailDeliveryError(ExternalServiceError):
    """Raised when the transactional mail provider rejects a message."""

    error_type = "mail_delivery_error"

    def __init__(self, message: str = "Failed to send email"):
        super().__init__(message)


class ImageUploadError(ExternalServiceError):
    """Raised when the image store cannot ingest an upload."""

    error_type = "image_upload_error"

    def __init__(self, message: str = "Failed to upload image"):
        super().__init__(message)

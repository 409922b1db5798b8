"""
Custom exceptions for the Academia API.

Services raise these; the API exception handler renders them as
``ErrorSchema`` payloads with the matching status code.
"""

from ninja import Schema


class ErrorSchema(Schema):
    """Standard error response schema."""

    code: str
    message: str
    details: dict | None = None


class APIException(Exception):
    """Base exception for API errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred."

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict | None = None,
    ):
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> tuple[int, ErrorSchema]:
        """Convert exception to API response tuple."""
        return self.status_code, ErrorSchema(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# Authentication Exceptions
class NotAuthenticatedError(APIException):
    """User is not authenticated."""

    status_code = 401
    code = "NOT_AUTHENTICATED"
    message = "Authentication required."


class InvalidCredentialsError(APIException):
    """Invalid login credentials."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password."


class AccountDisabledError(APIException):
    """User account is disabled."""

    status_code = 401
    code = "ACCOUNT_DISABLED"
    message = "This account is disabled."


# Authorization Exceptions
class PermissionDeniedError(APIException):
    """User is authenticated but not allowed to act on this resource."""

    status_code = 403
    code = "PERMISSION_DENIED"
    message = "You do not have permission to perform this action."


class NotOwnerError(PermissionDeniedError):
    """User is not the owner of the resource."""

    code = "NOT_OWNER"
    message = "You do not own this resource."


# Resource Exceptions
class NotFoundError(APIException):
    """Resource not found."""

    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found."


class ConflictError(APIException):
    """Request contradicts the current state of the resource."""

    status_code = 409
    code = "CONFLICT"
    message = "The request conflicts with the current state of the resource."


class AlreadyExistsError(ConflictError):
    """Resource already exists."""

    code = "ALREADY_EXISTS"
    message = "This resource already exists."


# Validation Exceptions
class ValidationError(APIException):
    """
    Invalid input data.

    ``details`` names the offending ``field`` and the violated constraint
    (``min``/``max``, ``min_length`` or ``allowed``).
    """

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid data."

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict | None = None,
        *,
        field: str | None = None,
        **constraint,
    ):
        if field is not None:
            details = {"field": field, **constraint, **(details or {})}
        super().__init__(message=message, code=code, details=details)

    @property
    def field(self) -> str | None:
        return (self.details or {}).get("field")


class BadRequestError(APIException):
    """Bad request."""

    status_code = 400
    code = "BAD_REQUEST"
    message = "Bad request."


# File Exceptions
class FileTooLargeError(APIException):
    """File exceeds size limit."""

    status_code = 413
    code = "FILE_TOO_LARGE"
    message = "The file exceeds the maximum allowed size."


class InvalidFileTypeError(APIException):
    """File type not allowed."""

    status_code = 415
    code = "INVALID_FILE_TYPE"
    message = "This file type is not allowed."

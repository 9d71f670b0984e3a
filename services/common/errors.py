"""
Shared error classes and utilities for the folder services.

Provides:
- Base exception class for service errors
- Common subclasses (Validation, NotFound, Service)
- Shared error response model
- Utility to convert exceptions to error responses

Common Usage Patterns:
=====================

Basic Exception Usage:
>>> from services.common.errors import ValidationError, NotFoundError
>>>
>>> # Validation error with field context
>>> error = ValidationError("max_folders must be positive", field="max_folders", value=0)
>>>
>>> # Resource not found
>>> error = NotFoundError("Folder", "f6f3d6a4-...")

Error Response Conversion:
>>> from services.common.errors import exception_to_response
>>>
>>> try:
...     paginator.paginate(request)
... except Exception as e:
...     error_response = exception_to_response(e)

Error Code Taxonomy:
===================
- VALIDATION_* / INVALID_ARGUMENT / NIL_REQUEST : caller supplied bad input
- NOT_FOUND / INVALID_TOKEN : referenced resource or continuation is unknown
- SERVICE_* / SOURCE_FETCH_FAILED / TOKEN_GENERATION_FAILED : internal failures
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from services.common.logging_config import new_request_id, request_id_var


class ErrorCode(str, Enum):
    """
    Standardized error codes for the folder services.

    Error codes are organized by category and follow the ALL_CAPS naming
    convention.
    """

    # ==========================================
    # GENERAL ERRORS
    # ==========================================
    VALIDATION_FAILED = "VALIDATION_FAILED"  # Input validation failed
    NOT_FOUND = "NOT_FOUND"  # Resource not found
    INTERNAL_ERROR = "INTERNAL_ERROR"  # Generic internal error
    SERVICE_ERROR = "SERVICE_ERROR"  # Generic service error

    # ==========================================
    # PAGINATION ERRORS
    # ==========================================
    NIL_REQUEST = "NIL_REQUEST"  # Request object missing
    INVALID_ARGUMENT = "INVALID_ARGUMENT"  # Page size out of range
    INVALID_TOKEN = "INVALID_TOKEN"  # Unknown, consumed or malformed token
    TOKEN_GENERATION_FAILED = "TOKEN_GENERATION_FAILED"  # Could not mint a token

    # ==========================================
    # SOURCE ERRORS
    # ==========================================
    SOURCE_FETCH_FAILED = "SOURCE_FETCH_FAILED"  # Folder lookup failed


class ErrorResponse(BaseModel):
    """
    Standardized error response model.

    Attributes:
        type: Error type categorization (e.g., "validation_error", "not_found")
        message: Human-readable error message
        details: Optional dictionary containing additional error context
        timestamp: ISO 8601 timestamp of when the error occurred
        request_id: Identifier correlating the error with log entries
    """

    type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
    request_id: str


def _current_request_id() -> str:
    """Return the request id bound to the current context, or a fresh one."""
    request_id = request_id_var.get()
    if request_id and request_id != "uninitialized":
        return request_id
    return new_request_id()


class ServiceException(Exception):
    """
    Base exception class for all folder service errors.

    The class records a timestamp and the current request id so the error can
    be correlated with the log entries emitted while handling the request.

    Attributes:
        message: Human-readable error message
        details: Dictionary containing additional error context
        error_type: Categorization of the error (validation_error, not_found, etc.)
        error_code: Specific error code from the ErrorCode enum
        timestamp: ISO 8601 timestamp when error occurred
        request_id: Identifier for request tracing
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_type: str = "internal_error",
        error_code: Optional[ErrorCode] = None,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.error_type = error_type
        self.error_code = error_code
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.request_id = request_id or _current_request_id()
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """
        Convert exception to ErrorResponse Pydantic model.

        Includes the error code in details if present.
        """
        details = {
            **self.details,
            **({"code": self.error_code.value} if self.error_code else {}),
        }
        return ErrorResponse(
            type=self.error_type,
            message=self.message,
            details=details if details else None,
            timestamp=self.timestamp,
            request_id=self.request_id,
        )


class ValidationError(ServiceException):
    """
    Exception for input validation errors.

    Args:
        message: Human-readable description of the validation failure
        field: Optional field name that failed validation
        value: Optional invalid value that was provided
        details: Optional additional validation context
        code: Specific error code (defaults to VALIDATION_FAILED)
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ):
        validation_details = dict(details or {})
        if field:
            validation_details["field"] = field
        if value is not None:
            validation_details["value"] = str(value)
        super().__init__(
            message=message,
            details=validation_details,
            error_type="validation_error",
            error_code=code,
        )
        self.field = field
        self.value = value


class NotFoundError(ServiceException):
    """
    Exception for resource not found errors.

    Args:
        resource: Type of resource (e.g., "Folder", "Pagination token")
        identifier: Optional identifier that was searched for
        details: Optional additional context about the search
        code: Specific error code (defaults to NOT_FOUND)
    """

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        if identifier:
            message = f"{resource} {identifier} not found"
        else:
            message = f"{resource} not found"
        notfound_details = {
            **(details or {}),
            "resource": resource,
        }
        if identifier:
            notfound_details["identifier"] = identifier
        super().__init__(
            message=message,
            details=notfound_details,
            error_type="not_found",
            error_code=code,
        )
        self.resource = resource
        self.identifier = identifier


class ServiceError(ServiceException):
    """
    Exception for internal service errors.

    Used when an internal operation or a collaborator the service depends on
    fails.

    Args:
        message: Description of the service failure
        details: Optional additional context about the failure
        code: Specific error code (defaults to SERVICE_ERROR)
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.SERVICE_ERROR,
    ):
        super().__init__(
            message=message,
            details=details,
            error_type="service_error",
            error_code=code,
        )


def exception_to_response(exc: Exception) -> ErrorResponse:
    """
    Convert any exception to a standardized ErrorResponse Pydantic model.

    ServiceException subclasses use their own to_error_response(). Anything
    else becomes a safe "internal_error" response with the original exception
    type preserved in the details.

    Examples:
        >>> response = exception_to_response(ValidationError("Bad input"))
        >>> response.type
        'validation_error'

        >>> response = exception_to_response(ValueError("Something went wrong"))
        >>> response.type
        'internal_error'
        >>> response.details["error_type"]
        'ValueError'
    """
    if isinstance(exc, ServiceException):
        return exc.to_error_response()
    return ErrorResponse(
        type="internal_error",
        message=str(exc),
        details={
            "error_type": type(exc).__name__,
            "code": ErrorCode.INTERNAL_ERROR.value,
        },
        timestamp=datetime.now(timezone.utc).isoformat(),
        request_id=_current_request_id(),
    )

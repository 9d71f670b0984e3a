"""
Custom exceptions for the folders service.

Every error reaches the immediate caller unchanged; the service never retries
or swallows one.
"""

from typing import Optional

from services.common.errors import ErrorCode, ServiceError, ValidationError
from services.common.pagination.exceptions import (
    InvalidArgumentError,
    InvalidTokenError,
    TokenGenerationError,
)


class NilRequestError(ValidationError):
    """The request object itself is missing."""

    def __init__(self, request_type: str):
        super().__init__(
            f"{request_type} cannot be None",
            details={"request_type": request_type},
            code=ErrorCode.NIL_REQUEST,
        )
        self.request_type = request_type


class SourceFetchError(ServiceError):
    """The folder source failed to return an organization's folders."""

    def __init__(self, org_id: Optional[str] = None, reason: Optional[str] = None):
        details = {}
        if org_id:
            details["org_id"] = org_id
        if reason:
            details["reason"] = reason
        super().__init__(
            "Failed to fetch folders for the given organization",
            details=details,
            code=ErrorCode.SOURCE_FETCH_FAILED,
        )
        self.org_id = org_id


__all__ = [
    "NilRequestError",
    "SourceFetchError",
    "InvalidArgumentError",
    "InvalidTokenError",
    "TokenGenerationError",
]

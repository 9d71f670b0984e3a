"""
Errors raised by the token-based pagination engine.

Messages and details never include a token value: a token is a capability and
must not leak into logs or error payloads.
"""

from typing import Any, Dict, Optional

from services.common.errors import (
    ErrorCode,
    NotFoundError,
    ServiceError,
    ValidationError,
)


class InvalidArgumentError(ValidationError):
    """Requested page size is not a positive integer."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message,
            field=field,
            value=value,
            code=ErrorCode.INVALID_ARGUMENT,
        )


class InvalidTokenError(NotFoundError):
    """
    Continuation token is unknown, already consumed, expired or malformed.

    The cases are deliberately indistinguishable to the caller; the only
    recovery is to start a new sequence with an empty token.
    """

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            "Pagination token",
            details=details,
            code=ErrorCode.INVALID_TOKEN,
        )


class TokenGenerationError(ServiceError):
    """A fresh continuation token could not be created or registered."""

    def __init__(self, message: str = "Failed to generate pagination token"):
        super().__init__(message, code=ErrorCode.TOKEN_GENERATION_FAILED)


class DuplicateTokenError(KeyError):
    """Raised by the store when a live entry already holds the token."""

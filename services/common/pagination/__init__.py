"""
Common token-based pagination utilities.

This module provides in-memory continuation-token pagination: a snapshot is
captured once per sequence, handed out in chunks, and each chunk is paired with
a single-use token signed with the itsdangerous library.
"""

from .cursor import Cursor, extract_chunk
from .exceptions import (
    DuplicateTokenError,
    InvalidArgumentError,
    InvalidTokenError,
    TokenGenerationError,
)
from .store import PaginationStore
from .token_manager import TokenManager

__all__ = [
    "Cursor",
    "extract_chunk",
    "PaginationStore",
    "TokenManager",
    "DuplicateTokenError",
    "InvalidArgumentError",
    "InvalidTokenError",
    "TokenGenerationError",
]

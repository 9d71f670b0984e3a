"""
In-memory, process-local store mapping continuation tokens to cursors.

The store is the only shared mutable state in a paginated listing. Entries are
spread over shards, each guarded by its own lock, so requests for different
tokens rarely contend. Every operation holds exactly one shard lock for its
whole duration; ``take_and_remove`` is a single locked pop, so two callers
presenting the same token can never both receive the cursor.

Entries live until their token is presented. Sequences a client abandons stay
in the store forever unless ``ttl_seconds`` is set. With a TTL, expired entries
are treated as absent, and ``put`` sweeps the whole store at most once per TTL
period, so abandoned sequences are reclaimed without an external scheduler.
"""

import threading
import time
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from services.common.logging_config import get_logger

from .cursor import Cursor
from .exceptions import DuplicateTokenError

T = TypeVar("T")

logger = get_logger(__name__)


class StoredCursor(Generic[T]):
    """Internal store entry holding a cursor and its optional expiry."""

    __slots__ = ("cursor", "expires_at")

    def __init__(self, cursor: Cursor[T], expires_at: Optional[float] = None):
        self.cursor = cursor
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class _Shard(Generic[T]):
    __slots__ = ("lock", "entries")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.entries: Dict[str, StoredCursor[T]] = {}


class PaginationStore(Generic[T]):
    """
    Thread-safe token → cursor mapping.

    Args:
        shard_count: Number of independently locked shards
        ttl_seconds: Lifetime of an entry; None or 0 disables expiry
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        shard_count: int = 16,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self._shards: List[_Shard[T]] = [_Shard() for _ in range(shard_count)]
        self.ttl_seconds = ttl_seconds or None
        self._clock = clock
        self._purge_lock = threading.Lock()
        self._next_purge_at = clock() + self.ttl_seconds if self.ttl_seconds else None

    def _shard_for(self, token: str) -> _Shard[T]:
        return self._shards[hash(token) % len(self._shards)]

    def put(self, token: str, cursor: Cursor[T]) -> None:
        """
        Register a cursor under a token.

        Raises:
            ValueError: If the cursor is already exhausted
            DuplicateTokenError: If a live entry already holds the token
        """
        if cursor.exhausted:
            raise ValueError("Exhausted cursors are never stored")

        now = self._clock()
        expires_at = now + self.ttl_seconds if self.ttl_seconds else None
        shard = self._shard_for(token)
        with shard.lock:
            existing = shard.entries.get(token)
            if existing is not None and not existing.is_expired(now):
                raise DuplicateTokenError("token already registered")
            shard.entries[token] = StoredCursor(cursor, expires_at)

        if self.ttl_seconds:
            self._maybe_purge(now)

    def take_and_remove(self, token: str) -> Optional[Cursor[T]]:
        """
        Atomically look up and delete the cursor held under a token.

        Returns:
            The cursor, or None if the token is unknown, consumed or expired
        """
        shard = self._shard_for(token)
        with shard.lock:
            entry = shard.entries.pop(token, None)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug("Discarded expired pagination cursor")
            return None
        return entry.cursor

    def _maybe_purge(self, now: float) -> None:
        """Sweep expired entries if a TTL period has passed since the last sweep."""
        if now < self._next_purge_at:
            return
        # Only one caller sweeps; the others carry on
        if not self._purge_lock.acquire(blocking=False):
            return
        try:
            if now >= self._next_purge_at:
                self._next_purge_at = now + self.ttl_seconds
                self.purge_expired()
        finally:
            self._purge_lock.release()

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        if not self.ttl_seconds:
            return 0

        now = self._clock()
        removed = 0
        for shard in self._shards:
            with shard.lock:
                expired_keys = [
                    key
                    for key, entry in shard.entries.items()
                    if entry.is_expired(now)
                ]
                for key in expired_keys:
                    del shard.entries[key]
            removed += len(expired_keys)

        if removed:
            logger.info(f"Purged {removed} expired pagination cursors", removed=removed)
        return removed

    def clear(self) -> int:
        """Drop every entry and return how many were held."""
        removed = 0
        for shard in self._shards:
            with shard.lock:
                removed += len(shard.entries)
                shard.entries.clear()
        return removed

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str):
            return False
        shard = self._shard_for(token)
        with shard.lock:
            entry = shard.entries.get(token)
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        now = self._clock()
        count = 0
        for shard in self._shards:
            with shard.lock:
                count += sum(
                    1 for entry in shard.entries.values() if not entry.is_expired(now)
                )
        return count

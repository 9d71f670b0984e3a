"""
Cursor state and chunk extraction.

A cursor pairs an immutable snapshot with the index of the next element to
hand out. Extraction is a pure function: it returns a new cursor and never
touches the one it was given.
"""

from dataclasses import dataclass, replace
from typing import Generic, Iterable, List, Tuple, TypeVar

from .exceptions import InvalidArgumentError

T = TypeVar("T")


@dataclass(frozen=True)
class Cursor(Generic[T]):
    """Position within a snapshot captured at the start of a sequence."""

    snapshot: Tuple[T, ...]
    next_index: int = 0

    @classmethod
    def start(cls, items: Iterable[T]) -> "Cursor[T]":
        """Capture ``items`` into a fresh snapshot positioned at the beginning."""
        return cls(snapshot=tuple(items), next_index=0)

    @property
    def remaining(self) -> int:
        return len(self.snapshot) - self.next_index

    @property
    def exhausted(self) -> bool:
        return self.next_index >= len(self.snapshot)


def extract_chunk(cursor: Cursor[T], max_items: int) -> Tuple[List[T], Cursor[T]]:
    """
    Take the next chunk from a cursor.

    Args:
        cursor: Current position in the snapshot
        max_items: Upper bound on the chunk length, at least 1

    Returns:
        Tuple of (chunk, advanced cursor). The chunk is a new list of
        ``min(cursor.remaining, max_items)`` elements.

    Raises:
        InvalidArgumentError: If max_items is below 1
    """
    if isinstance(max_items, bool) or not isinstance(max_items, int) or max_items < 1:
        raise InvalidArgumentError(
            "max_items must be a positive integer", field="max_items", value=max_items
        )

    chunk_size = min(cursor.remaining, max_items)
    start = cursor.next_index
    chunk = list(cursor.snapshot[start : start + chunk_size])
    return chunk, replace(cursor, next_index=start + chunk_size)

"""
Tests for cursor state and chunk extraction.
"""

import pytest

from services.common.pagination import Cursor, InvalidArgumentError, extract_chunk


class TestCursor:
    """Test cursor construction and properties."""

    def test_start(self):
        """Test that a new cursor begins at index 0 over a tuple snapshot."""
        items = ["a", "b", "c"]
        cursor = Cursor.start(items)

        assert cursor.snapshot == ("a", "b", "c")
        assert cursor.next_index == 0
        assert cursor.remaining == 3
        assert cursor.exhausted is False

    def test_snapshot_detached_from_source_list(self):
        """Test that later changes to the input list are not visible."""
        items = ["a", "b"]
        cursor = Cursor.start(items)
        items.append("c")

        assert cursor.snapshot == ("a", "b")

    def test_empty_cursor_is_exhausted(self):
        """Test that an empty snapshot starts exhausted."""
        cursor = Cursor.start([])

        assert cursor.exhausted is True
        assert cursor.remaining == 0

    def test_cursor_is_immutable(self):
        """Test that cursor fields cannot be reassigned."""
        cursor = Cursor.start([1])

        with pytest.raises(AttributeError):
            cursor.next_index = 1


class TestExtractChunk:
    """Test chunk extraction."""

    def test_first_chunk(self):
        """Test extracting from the start of a snapshot."""
        cursor = Cursor.start(range(1, 8))

        chunk, advanced = extract_chunk(cursor, 3)

        assert chunk == [1, 2, 3]
        assert advanced.next_index == 3
        assert advanced.snapshot is cursor.snapshot

    def test_last_chunk_is_short(self):
        """Test that the final chunk holds only the remaining elements."""
        cursor = Cursor(snapshot=tuple(range(1, 8)), next_index=6)

        chunk, advanced = extract_chunk(cursor, 3)

        assert chunk == [7]
        assert advanced.exhausted is True

    def test_max_items_larger_than_snapshot(self):
        """Test that an oversized bound returns everything."""
        cursor = Cursor.start("abc")

        chunk, advanced = extract_chunk(cursor, 100)

        assert chunk == ["a", "b", "c"]
        assert advanced.next_index == 3

    def test_exhausted_cursor_yields_empty_chunk(self):
        """Test extracting from an exhausted cursor."""
        cursor = Cursor(snapshot=(1, 2), next_index=2)

        chunk, advanced = extract_chunk(cursor, 5)

        assert chunk == []
        assert advanced.next_index == 2

    def test_input_cursor_unchanged(self):
        """Test that extraction never modifies the given cursor."""
        cursor = Cursor.start([1, 2, 3, 4])

        extract_chunk(cursor, 2)

        assert cursor.next_index == 0
        assert cursor.snapshot == (1, 2, 3, 4)

    def test_chunk_is_a_fresh_list(self):
        """Test that mutating a chunk does not reach the snapshot."""
        cursor = Cursor.start([1, 2, 3])

        chunk, advanced = extract_chunk(cursor, 2)
        chunk.append(99)
        chunk[0] = -1

        assert advanced.snapshot == (1, 2, 3)
        again, _ = extract_chunk(cursor, 2)
        assert again == [1, 2]
        assert again is not chunk

    def test_repeated_extraction_covers_snapshot(self):
        """Test that chained extraction visits every element once."""
        cursor = Cursor.start(range(10))
        seen = []

        while not cursor.exhausted:
            chunk, cursor = extract_chunk(cursor, 4)
            seen.extend(chunk)

        assert seen == list(range(10))

    @pytest.mark.parametrize("max_items", [0, -1, -50])
    def test_rejects_non_positive_max_items(self, max_items):
        """Test that max_items below 1 is rejected."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            extract_chunk(Cursor.start([1]), max_items)

        assert exc_info.value.field == "max_items"

    @pytest.mark.parametrize("max_items", [True, 1.5, "3", None])
    def test_rejects_non_integer_max_items(self, max_items):
        """Test that max_items must be an actual integer."""
        with pytest.raises(InvalidArgumentError):
            extract_chunk(Cursor.start([1]), max_items)

"""
Cursor over an in-memory byte buffer.

Every read returns None at end of data instead of raising, so
parsers decide which shortfalls are errors.
"""

from typing import Optional


class ByteReader:
    """Forward-only reader with one-byte lookahead."""

    def __init__(self, data: bytes, offset: int = 0):
        self.data = data
        self.offset = offset

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it, or None at end."""
        if self.offset >= len(self.data):
            return None
        return self.data[self.offset]

    def read_until(self, delimiter: bytes) -> Optional[bytes]:
        """
        Read up to a delimiter and consume it.

        Returns the bytes before the delimiter, or None if the delimiter
        never occurs (the cursor is left unchanged).
        """
        end = self.data.find(delimiter, self.offset)
        if end < 0:
            return None
        chunk = self.data[self.offset:end]
        self.offset = end + len(delimiter)
        return chunk

    def read_exact(self, size: int) -> Optional[bytes]:
        """Read exactly size bytes, or return None if fewer remain."""
        if self.remaining() < size:
            return None
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def remaining(self) -> int:
        return len(self.data) - self.offset

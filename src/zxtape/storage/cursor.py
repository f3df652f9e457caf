"""
Forward-Only Byte Cursor
========================

Tape images are decoded with a strictly sequential scan: the start of a
block is only known once the previous block has been consumed. ByteCursor
wraps an in-memory buffer with the three operations the decoders need:

- read(n): consume and return the next n bytes
- peek(n): return the next n bytes without consuming them
- discard(n): consume n bytes without returning them

The cursor never seeks backwards. Any request for more bytes than remain
raises UnexpectedEndOfStreamError carrying the offset of the failed read.
"""

from pathlib import Path
from typing import BinaryIO, Union

from zxtape.errors import UnexpectedEndOfStreamError


class ByteCursor:
    """
    In-memory, forward-only reader over a tape image.

    Example:
        >>> cursor = ByteCursor(b"\\x20\\xe8\\x03")
        >>> cursor.peek(1)
        b' '
        >>> cursor.read(3)
        b' \\xe8\\x03'
        >>> cursor.at_end()
        True
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "ByteCursor":
        """Buffer the remainder of a binary stream."""
        return cls(stream.read())

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "ByteCursor":
        """
        Buffer a whole file from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        return cls(Path(filepath).read_bytes())

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        """Return True once every byte has been consumed."""
        return self._pos >= len(self._data)

    def _check(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"negative read size {size}")
        if size > self.remaining:
            raise UnexpectedEndOfStreamError(size, self.remaining, offset=self._pos)

    def read(self, size: int) -> bytes:
        self._check(size)
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def peek(self, size: int) -> bytes:
        self._check(size)
        return self._data[self._pos:self._pos + size]

    def discard(self, size: int) -> None:
        self._check(size)
        self._pos += size

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, remaining={self.remaining})"

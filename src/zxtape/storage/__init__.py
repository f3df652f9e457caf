"""
Byte-Level Storage Primitives
=============================

- **ByteCursor**: forward-only reader with read/peek/discard
- **fields**: little-endian integer, 24-bit length and text readers
"""

from zxtape.storage.cursor import ByteCursor
from zxtape.storage.fields import (
    TEXT_ENCODING,
    read_u8,
    read_u16le,
    read_i16le,
    read_u32le,
    read_u24_as_u32,
    read_fixed,
    read_text,
    peek_u8,
    peek_u16le,
)

__all__ = [
    "ByteCursor",
    "TEXT_ENCODING",
    "read_u8",
    "read_u16le",
    "read_i16le",
    "read_u32le",
    "read_u24_as_u32",
    "read_fixed",
    "read_text",
    "peek_u8",
    "peek_u16le",
]

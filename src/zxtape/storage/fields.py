"""
Primitive Field Codec
=====================

Little-endian field readers shared by the TAP and TZX decoders.

Field Widths
------------
- BYTE:    8-bit unsigned
- WORD:    16-bit unsigned, LSB first
- SWORD:   16-bit signed, LSB first (jump and call offsets)
- DWORD:   32-bit unsigned, LSB first
- BYTE[3]: 24-bit length, zero-extended to 32 bits

All readers consume exactly the bytes of their field and raise
UnexpectedEndOfStreamError if the image ends early.

Text
----
Every text field in a TZX image uses ISO 8859-1 (Latin 1). Multi-line texts
separate lines with a carriage return (0x0D), which is kept as-is.
"""

import struct

from zxtape.storage.cursor import ByteCursor

TEXT_ENCODING = "latin-1"


def read_u8(cursor: ByteCursor) -> int:
    return cursor.read(1)[0]


def read_u16le(cursor: ByteCursor) -> int:
    return struct.unpack("<H", cursor.read(2))[0]


def read_i16le(cursor: ByteCursor) -> int:
    return struct.unpack("<h", cursor.read(2))[0]


def read_u32le(cursor: ByteCursor) -> int:
    return struct.unpack("<I", cursor.read(4))[0]


def read_u24_as_u32(cursor: ByteCursor) -> int:
    """Read a 3-byte length field; the missing high byte is taken as 0."""
    return struct.unpack("<I", cursor.read(3) + b"\x00")[0]


def read_fixed(cursor: ByteCursor, size: int) -> bytes:
    return cursor.read(size)


def read_text(cursor: ByteCursor, size: int) -> str:
    """Read a fixed-length Latin 1 text field."""
    return cursor.read(size).decode(TEXT_ENCODING)


def peek_u8(cursor: ByteCursor) -> int:
    return cursor.peek(1)[0]


def peek_u16le(cursor: ByteCursor) -> int:
    return struct.unpack("<H", cursor.peek(2))[0]

"""
zxtape Error Hierarchy
======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from ZXTapeError, allowing callers to catch every
decoding failure with a single except clause if desired.

Exception Hierarchy
-------------------
ZXTapeError (base)
├── TapeFormatError (the image itself is malformed or unsupported)
│   ├── MalformedHeaderError - bad "ZXTape!" signature or terminator
│   ├── UnsupportedVersionError - major version newer than we understand
│   ├── UnsupportedBlockKindError - tag byte outside the known block set
│   ├── DeprecatedBlockKindError - withdrawn block kind (0x16, 0x17, 0x34, 0x40)
│   ├── UnexpectedFlagByteError - TAP header whose flag byte is not 0
│   ├── UnknownHeaderSubtypeError - TAP header type outside 0-3
│   └── UnexpectedEndOfStreamError - fewer bytes left than a field needs
└── BlockIdMismatchError - a decoder was handed a block it does not own

Design Philosophy
-----------------
A malformed image is an input-validation failure. Every error aborts the
whole parse: there is no retry, no partial container and no default value
substituted for a corrupt field.

Format errors optionally carry the byte offset where the problem was
detected, so messages read:
    offset 0x0000002A: unsupported TZX block ID 0x4B
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ZXTapeError(Exception):
    """
    Base exception for all zxtape errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every decoding failure with a single except clause:

        try:
            container = parse_tzx_file("game.tzx")
        except ZXTapeError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Tape Format Exceptions
# =============================================================================

class TapeFormatError(ZXTapeError):
    """
    Base exception for malformed or unsupported tape images.

    Attributes:
        message: The error description
        offset: Byte offset in the image where the problem was found (optional)
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.offset is None:
            return self.message
        return f"offset 0x{self.offset:08X}: {self.message}"


class MalformedHeaderError(TapeFormatError):
    """
    The container signature does not match.

    Raised when the first eight bytes of a TZX image are not
    "ZXTape!" followed by the 0x1A terminator, and when a glue block
    carries a damaged copy of that signature.
    """

    def __init__(self, signature: bytes, offset: Optional[int] = None):
        self.signature = bytes(signature)
        super().__init__(f"incorrect TZX signature {self.signature!r}", offset=offset)


class UnsupportedVersionError(TapeFormatError):
    """
    The image was written for a newer major revision of the TZX format.

    Minor revision differences are tolerated; only the major number is
    compared against the highest version this decoder understands.
    """

    def __init__(
        self,
        major: int,
        minor: int,
        supported_major: int,
        offset: Optional[int] = None,
    ):
        self.major = major
        self.minor = minor
        self.supported_major = supported_major
        super().__init__(
            f"unsupported TZX version {major}.{minor:02d} "
            f"(highest supported major version is {supported_major})",
            offset=offset,
        )


class UnsupportedBlockKindError(TapeFormatError):
    """Tag byte outside the closed set of TZX block kinds."""

    def __init__(self, block_id: int, offset: Optional[int] = None):
        self.block_id = block_id
        super().__init__(f"unsupported TZX block ID 0x{block_id:02X}", offset=offset)


class DeprecatedBlockKindError(TapeFormatError):
    """
    Tag byte names a block kind withdrawn from the TZX format.

    Compliant writers never emit these (C64 ROM type data, C64 turbo
    data, emulation info, snapshot), so they are reported separately from
    tags that are simply unknown.
    """

    def __init__(self, block_id: int, offset: Optional[int] = None):
        self.block_id = block_id
        super().__init__(f"TZX block ID 0x{block_id:02X} is deprecated", offset=offset)


class UnexpectedFlagByteError(TapeFormatError):
    """A 19-byte TAP unit decoded as a header has a non-zero flag byte."""

    def __init__(self, flag: int, offset: Optional[int] = None):
        self.flag = flag
        super().__init__(f"expected header flag byte to be 0, got {flag}", offset=offset)


class UnknownHeaderSubtypeError(TapeFormatError):
    """TAP header type byte is not Program, Numeric, Alphanumeric or Bytes."""

    def __init__(self, subtype: int, offset: Optional[int] = None):
        self.subtype = subtype
        super().__init__(f"unknown header type {subtype}", offset=offset)


class UnexpectedEndOfStreamError(TapeFormatError):
    """
    The image ended in the middle of a field.

    Attributes:
        requested: Number of bytes the field needed
        available: Number of bytes that were left
    """

    def __init__(self, requested: int, available: int, offset: Optional[int] = None):
        self.requested = requested
        self.available = available
        super().__init__(
            f"unexpected end of stream: needed {requested} bytes, {available} left",
            offset=offset,
        )


# =============================================================================
# Internal Defects
# =============================================================================

class BlockIdMismatchError(ZXTapeError):
    """
    A block decoder read a tag byte other than its own.

    The dispatcher hands each tag to exactly one decoder, so this can only
    happen when the dispatch table is wrong. It is never caused by bad input.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected block ID 0x{expected:02X}, got 0x{actual:02X}")

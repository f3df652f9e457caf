"""
TAP Unit Decoder
================

This module decodes TAP units, either one at a time for a TZX block that
embeds a single unit, or in a loop over a whole standalone TAP file.

Decode Modes
------------
The only way to tell a header from a data unit is the declared length: a
header is always 19 bytes. A 19-byte data unit is legal, though, and some
loaders (e.g. Turbo Outrun) write them. The format guarantees that two
headers are never adjacent, so a standalone scan alternates:

- Standalone(header_allowed=True): the next 19-byte unit is a header,
  after which header_allowed becomes False for one unit.
- SingleShot(): used by TZX blocks that embed exactly one unit. There is
  no previous unit, so a 19-byte unit is always a header.

decode_next() returns the mode to use for the following unit, so the
alternation is carried by the caller's loop rather than hidden state.

Usage Examples
--------------
Scanning a TAP file:
    >>> from zxtape.tap import parse_tap_file
    >>> tape = parse_tap_file("game.tap")
    >>> for block in tape.blocks:
    ...     print(block.summary())

Decoding one embedded unit:
    >>> block, _ = decode_next(cursor, SingleShot())
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging

from zxtape.errors import (
    UnexpectedFlagByteError,
    UnknownHeaderSubtypeError,
)
from zxtape.storage import ByteCursor, peek_u16le
from zxtape.tap.records import (
    FLAG_HEADER,
    HEADER_CLASSES,
    HEADER_LENGTH,
    FragmentData,
    StandardData,
    TapeDataBlock,
    TapeHeader,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Decode Modes
# =============================================================================

@dataclass(frozen=True)
class Standalone:
    """Scanning a TAP file; header_allowed is False right after a header."""
    header_allowed: bool = True


@dataclass(frozen=True)
class SingleShot:
    """
    Decoding the single unit embedded in a TZX block.

    Attributes:
        length: The unit length already read by the enclosing block
            (turbo-speed and pure-data blocks use a 24-bit field). When None
            the unit starts with its own 2-byte length prefix.
    """
    length: Optional[int] = None


DecodeMode = Union[Standalone, SingleShot]


# =============================================================================
# Unit Decoding
# =============================================================================

def decode_next(cursor: ByteCursor, mode: DecodeMode) -> tuple[TapeDataBlock, DecodeMode]:
    """
    Decode one TAP unit.

    Args:
        cursor: Positioned at the unit's length prefix, or at its first body
            byte for SingleShot with an explicit length
        mode: Standalone state or SingleShot

    Returns:
        Tuple of (decoded unit, mode for the next unit)

    Raises:
        UnexpectedFlagByteError: A header-length unit whose flag is not 0
        UnknownHeaderSubtypeError: A header whose type byte is not 0-3
        UnexpectedEndOfStreamError: The image ends inside the unit
    """
    if isinstance(mode, SingleShot):
        header_allowed = True
        length = mode.length
    else:
        header_allowed = mode.header_allowed
        length = None

    prefixed = length is None
    declared = peek_u16le(cursor) if prefixed else length

    if declared == HEADER_LENGTH and header_allowed:
        block = _read_header(cursor, length)
        next_header_allowed = False
    else:
        block = _read_data(cursor, declared, length)
        next_header_allowed = True

    if isinstance(mode, Standalone):
        return block, Standalone(header_allowed=next_header_allowed)
    return block, mode


def _read_header(cursor: ByteCursor, length: Optional[int]) -> TapeHeader:
    """Check flag and header type without consuming, then read the header."""
    offset = cursor.position
    skip = 2 if length is None else 0
    lookahead = cursor.peek(skip + 2)
    flag = lookahead[skip]
    subtype = lookahead[skip + 1]

    if flag != FLAG_HEADER:
        raise UnexpectedFlagByteError(flag, offset=offset + skip)

    header_class = HEADER_CLASSES.get(subtype)
    if header_class is None:
        raise UnknownHeaderSubtypeError(subtype, offset=offset + skip + 1)

    header = header_class.read(cursor, length)
    logger.debug(f"Parsed {header.name} header '{header.filename}' at offset {offset}")
    return header


def _read_data(cursor: ByteCursor, declared: int, length: Optional[int]) -> TapeDataBlock:
    # Fragments are either 0 or 1 bytes long
    if declared < 2:
        block = FragmentData.read(cursor, length)
    else:
        block = StandardData.read(cursor, length)
    logger.debug(f"Parsed {block.name} ({declared} bytes)")
    return block


# =============================================================================
# Standalone TAP Files
# =============================================================================

@dataclass(frozen=True)
class TapeFile:
    """
    A decoded TAP file.

    Attributes:
        blocks: Units in tape order
    """
    blocks: tuple[TapeDataBlock, ...]

    def __len__(self) -> int:
        return len(self.blocks)

    def headers(self) -> list[TapeHeader]:
        return [block for block in self.blocks if isinstance(block, TapeHeader)]


def decode_tape(cursor: ByteCursor) -> TapeFile:
    """
    Decode every unit until the cursor is exhausted.

    An empty file is a valid, empty tape.
    """
    blocks: list[TapeDataBlock] = []
    mode: DecodeMode = Standalone()

    while not cursor.at_end():
        block, mode = decode_next(cursor, mode)
        blocks.append(block)

    logger.debug(f"Decoded TAP file with {len(blocks)} blocks")
    return TapeFile(blocks=tuple(blocks))


def parse_tap(data: bytes) -> TapeFile:
    """
    Decode a TAP image from bytes.

    Raises:
        TapeFormatError: If the image is malformed
    """
    return decode_tape(ByteCursor(data))


def parse_tap_file(filepath: Union[str, Path]) -> TapeFile:
    """
    Decode a TAP image from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        TapeFormatError: If the image is malformed
    """
    return decode_tape(ByteCursor.from_file(filepath))

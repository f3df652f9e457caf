"""
TAP Tape-Data Units
===================

The TAP format stores a tape as a plain sequence of "header or data" units,
exactly as the ZX Spectrum ROM save routine writes them. The same units are
embedded in several TZX block kinds.

This module provides:
- **Record types**: headers (program, numeric array, character array,
  bytes), standard data and fragments
- **decode_next**: decode one unit in Standalone or SingleShot mode
- **parse_tap / parse_tap_file**: decode a whole TAP file
- **Checksum utilities**: XOR checksum calculation and reporting

Quick Start
-----------
    >>> from zxtape.tap import parse_tap_file
    >>> tape = parse_tap_file("game.tap")
    >>> for header in tape.headers():
    ...     print(header.summary())
"""

from zxtape.tap.records import (
    HEADER_LENGTH,
    FLAG_HEADER,
    FLAG_DATA,
    NO_AUTOSTART,
    HeaderType,
    TapeDataBlock,
    TapeHeader,
    ProgramHeader,
    NumericHeader,
    AlphanumericHeader,
    ByteHeader,
    StandardData,
    FragmentData,
)

from zxtape.tap.checksum import (
    ChecksumResult,
    calculate_checksum,
    check_unit,
)

from zxtape.tap.parser import (
    Standalone,
    SingleShot,
    DecodeMode,
    TapeFile,
    decode_next,
    decode_tape,
    parse_tap,
    parse_tap_file,
)

__all__ = [
    # Constants
    "HEADER_LENGTH",
    "FLAG_HEADER",
    "FLAG_DATA",
    "NO_AUTOSTART",
    # Records
    "HeaderType",
    "TapeDataBlock",
    "TapeHeader",
    "ProgramHeader",
    "NumericHeader",
    "AlphanumericHeader",
    "ByteHeader",
    "StandardData",
    "FragmentData",
    # Checksum
    "ChecksumResult",
    "calculate_checksum",
    "check_unit",
    # Decoder
    "Standalone",
    "SingleShot",
    "DecodeMode",
    "TapeFile",
    "decode_next",
    "decode_tape",
    "parse_tap",
    "parse_tap_file",
]

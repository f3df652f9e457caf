"""
zxtape - ZX Spectrum Cassette Image Decoder
===========================================

This package decodes the two common ZX Spectrum tape image formats into
typed, immutable records:

- **TAP**: the plain sequence of header and data units written by the
  Spectrum ROM save routine
- **TZX**: a container of typed blocks that adds custom timings, raw
  recordings, flow control and archive information around TAP units

Main Components
---------------
- **storage**: forward-only byte cursor and little-endian field readers
- **tap**: TAP unit records, decoder and checksum utilities
- **tzx**: TZX block classes, dispatcher and container parser
- **cli**: the `zxtape` command-line tool

Quick Start
-----------
Read a TZX image:
    >>> from zxtape import parse_tzx_file
    >>> parser = parse_tzx_file("game.tzx")
    >>> print(parser.get_info())

Read a TAP file:
    >>> from zxtape import parse_tap_file
    >>> tape = parse_tap_file("game.tap")
    >>> for block in tape.blocks:
    ...     print(block.summary())

Or use the command-line tool:
    $ zxtape list game.tzx
    $ zxtape info game.tzx
    $ zxtape validate game.tap

Reference Documentation
-----------------------
- TZX format: https://www.worldofspectrum.org/TZXformat.html
- TAP format: http://www.zx-modules.de/fileformats/tapformat.html
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from zxtape.config import DecoderConfig
from zxtape.errors import (
    ZXTapeError,
    TapeFormatError,
    MalformedHeaderError,
    UnsupportedVersionError,
    UnsupportedBlockKindError,
    DeprecatedBlockKindError,
    UnexpectedFlagByteError,
    UnknownHeaderSubtypeError,
    UnexpectedEndOfStreamError,
    BlockIdMismatchError,
)
from zxtape.storage import ByteCursor

# TAP module exports
from zxtape.tap import (
    TapeDataBlock,
    TapeHeader,
    ProgramHeader,
    NumericHeader,
    AlphanumericHeader,
    ByteHeader,
    StandardData,
    FragmentData,
    Standalone,
    SingleShot,
    TapeFile,
    decode_next,
    parse_tap,
    parse_tap_file,
)

# TZX module exports
from zxtape.tzx import (
    Block,
    BlockType,
    TZXHeader,
    TZXContainer,
    TZXParser,
    decode_container,
    dispatch,
    is_tzx,
    parse_tzx,
    parse_tzx_file,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "DecoderConfig",
    # Exception hierarchy
    "ZXTapeError",
    "TapeFormatError",
    "MalformedHeaderError",
    "UnsupportedVersionError",
    "UnsupportedBlockKindError",
    "DeprecatedBlockKindError",
    "UnexpectedFlagByteError",
    "UnknownHeaderSubtypeError",
    "UnexpectedEndOfStreamError",
    "BlockIdMismatchError",
    # Storage
    "ByteCursor",
    # TAP
    "TapeDataBlock",
    "TapeHeader",
    "ProgramHeader",
    "NumericHeader",
    "AlphanumericHeader",
    "ByteHeader",
    "StandardData",
    "FragmentData",
    "Standalone",
    "SingleShot",
    "TapeFile",
    "decode_next",
    "parse_tap",
    "parse_tap_file",
    # TZX
    "Block",
    "BlockType",
    "TZXHeader",
    "TZXContainer",
    "TZXParser",
    "decode_container",
    "dispatch",
    "is_tzx",
    "parse_tzx",
    "parse_tzx_file",
]

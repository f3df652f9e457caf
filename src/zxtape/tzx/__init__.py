"""
TZX Cassette Images
===================

TZX stores a ZX Spectrum tape as a sequence of typed blocks: data recorded
with standard or custom timings, raw pulse and sample recordings, flow
control (groups, loops, jumps, calls) and descriptive information (text,
archive info, hardware requirements).

This module provides:
- **Block classes**: one frozen dataclass per live block kind
- **dispatch**: tag byte to block class lookup
- **decode_container**: decode a whole image from a cursor
- **TZXParser**: parser object with query methods
- **Reference tables**: archive fields, hardware kinds and device names

Quick Start
-----------
    >>> from zxtape.tzx import parse_tzx_file
    >>> parser = parse_tzx_file("game.tzx")
    >>> for block in parser.blocks:
    ...     print(f"{block.NAME}: {block.summary()}")
"""

from zxtape.tzx.blocks import (
    BlockType,
    DEPRECATED_BLOCK_TYPES,
    ArchiveField,
    CompressionType,
    Block,
    StandardSpeedData,
    TurboSpeedData,
    PureTone,
    SequenceOfPulses,
    PureData,
    DirectRecording,
    CswRecording,
    PauseTapeCommand,
    GroupStart,
    GroupEnd,
    JumpTo,
    LoopStart,
    LoopEnd,
    CallSequence,
    ReturnFromSequence,
    Selection,
    Select,
    StopTapeWhen48k,
    SetSignalLevel,
    TextDescription,
    Message,
    ArchiveEntry,
    ArchiveInfo,
    HardwareInfo,
    HardwareType,
    CustomInfo,
    GlueBlock,
)

from zxtape.tzx.generalized import (
    SymbolPolarity,
    Symbol,
    PilotRunLength,
    GeneralizedData,
    unpack_symbol_stream,
)

from zxtape.tzx.hardware import (
    HardwareKind,
    Compatibility,
    get_hardware_name,
)

from zxtape.tzx.dispatch import BLOCK_CLASSES, dispatch

from zxtape.tzx.header import SIGNATURE, TZXHeader

from zxtape.tzx.parser import (
    TZXContainer,
    TZXParser,
    decode_container,
    is_tzx,
    parse_tzx,
    parse_tzx_file,
)

__all__ = [
    # Enumerations
    "BlockType",
    "DEPRECATED_BLOCK_TYPES",
    "ArchiveField",
    "CompressionType",
    "SymbolPolarity",
    "HardwareKind",
    "Compatibility",
    # Blocks
    "Block",
    "StandardSpeedData",
    "TurboSpeedData",
    "PureTone",
    "SequenceOfPulses",
    "PureData",
    "DirectRecording",
    "CswRecording",
    "GeneralizedData",
    "PauseTapeCommand",
    "GroupStart",
    "GroupEnd",
    "JumpTo",
    "LoopStart",
    "LoopEnd",
    "CallSequence",
    "ReturnFromSequence",
    "Select",
    "StopTapeWhen48k",
    "SetSignalLevel",
    "TextDescription",
    "Message",
    "ArchiveInfo",
    "HardwareType",
    "CustomInfo",
    "GlueBlock",
    # Block components
    "Selection",
    "ArchiveEntry",
    "HardwareInfo",
    "Symbol",
    "PilotRunLength",
    "unpack_symbol_stream",
    "get_hardware_name",
    # Dispatch and container
    "BLOCK_CLASSES",
    "dispatch",
    "SIGNATURE",
    "TZXHeader",
    "TZXContainer",
    "TZXParser",
    "decode_container",
    "is_tzx",
    "parse_tzx",
    "parse_tzx_file",
]

"""
TZX Block Definitions
=====================

This module defines one frozen dataclass per live TZX block kind. Each
class knows its tag byte (BLOCK_TYPE), its display name (NAME) and how to
read itself from a cursor positioned at that tag byte.

Block Format
------------
Every block starts with its one-byte ID followed by a kind-specific body.
Bodies come in a handful of shapes:

- **Fixed**: a few WORD/DWORD fields (pure tone, pause, jump, loop start,
  set signal level) or no body at all (group end, loop end, return).
- **Length-prefixed**: a count or byte length followed by that many
  elements (group name, text, message, archive info, select, call sequence,
  hardware type, custom info).
- **Embedded TAP unit**: timing fields followed by one TAP unit (standard
  speed, turbo speed, pure data).
- **Opaque**: a declared length of raw samples kept as-is (direct recording,
  CSW recording).

The generalized data block (0x19) lives in zxtape.tzx.generalized.

Block IDs
---------
- $10-$19: Data blocks
- $20-$2B: Flow control and signal commands
- $30-$35: Information blocks
- $5A:     Glue block (start of a concatenated TZX file)
- $16, $17, $34, $40: Withdrawn; rejected by the dispatcher

Rules
-----
- All multi-byte values are little-endian.
- Timings are in Z80 T-states (1/3500000 s) unless stated otherwise.
- All texts are ISO 8859-1; multi-line texts separate lines with 0x0D.

Reference
---------
- TZX format: https://www.worldofspectrum.org/TZXformat.html
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional

from zxtape.errors import BlockIdMismatchError, MalformedHeaderError, TapeFormatError
from zxtape.storage import (
    ByteCursor,
    read_u8,
    read_u16le,
    read_i16le,
    read_u32le,
    read_u24_as_u32,
    read_fixed,
    read_text,
)
from zxtape.tap import SingleShot, TapeDataBlock, decode_next
from zxtape.tzx.hardware import Compatibility, HardwareKind, get_hardware_name


# =============================================================================
# Enumeration Types
# =============================================================================

class BlockType(IntEnum):
    """TZX block ID bytes."""
    STANDARD_SPEED_DATA = 0x10
    TURBO_SPEED_DATA = 0x11
    PURE_TONE = 0x12
    SEQUENCE_OF_PULSES = 0x13
    PURE_DATA = 0x14
    DIRECT_RECORDING = 0x15
    C64_ROM_TYPE_DATA = 0x16        # Withdrawn
    C64_TURBO_DATA = 0x17           # Withdrawn
    CSW_RECORDING = 0x18
    GENERALIZED_DATA = 0x19
    PAUSE_TAPE_COMMAND = 0x20
    GROUP_START = 0x21
    GROUP_END = 0x22
    JUMP_TO = 0x23
    LOOP_START = 0x24
    LOOP_END = 0x25
    CALL_SEQUENCE = 0x26
    RETURN_FROM_SEQUENCE = 0x27
    SELECT = 0x28
    STOP_TAPE_WHEN_48K = 0x2A
    SET_SIGNAL_LEVEL = 0x2B
    TEXT_DESCRIPTION = 0x30
    MESSAGE = 0x31
    ARCHIVE_INFO = 0x32
    HARDWARE_TYPE = 0x33
    EMULATION_INFO = 0x34           # Withdrawn
    CUSTOM_INFO = 0x35
    SNAPSHOT = 0x40                 # Withdrawn
    GLUE_BLOCK = 0x5A

    @classmethod
    def is_deprecated(cls, type_byte: int) -> bool:
        """Check if a tag byte names a withdrawn block kind."""
        return type_byte in DEPRECATED_BLOCK_TYPES


DEPRECATED_BLOCK_TYPES = frozenset({
    BlockType.C64_ROM_TYPE_DATA,
    BlockType.C64_TURBO_DATA,
    BlockType.EMULATION_INFO,
    BlockType.SNAPSHOT,
})


class ArchiveField(IntEnum):
    """Text identification bytes used by the Archive Info block."""
    TITLE = 0x00
    PUBLISHER = 0x01
    AUTHORS = 0x02
    YEAR = 0x03
    LANGUAGE = 0x04
    CATEGORY = 0x05
    PRICE = 0x06
    LOADER = 0x07
    ORIGIN = 0x08
    COMMENT = 0xFF

    def get_description(self) -> str:
        descriptions = {
            ArchiveField.TITLE: "Full title",
            ArchiveField.PUBLISHER: "Software house/publisher",
            ArchiveField.AUTHORS: "Author(s)",
            ArchiveField.YEAR: "Year of publication",
            ArchiveField.LANGUAGE: "Language",
            ArchiveField.CATEGORY: "Game/utility type",
            ArchiveField.PRICE: "Price",
            ArchiveField.LOADER: "Protection scheme/loader",
            ArchiveField.ORIGIN: "Origin",
            ArchiveField.COMMENT: "Comment(s)",
        }
        return descriptions[self]


class CompressionType(IntEnum):
    """CSW recording compression schemes."""
    RLE = 0x01
    Z_RLE = 0x02


# =============================================================================
# Block Base Class
# =============================================================================

@dataclass(frozen=True)
class Block:
    """
    Base class for TZX blocks.

    Subclasses set BLOCK_TYPE and NAME and implement _read_body(), which
    is called once the tag byte has been consumed and checked.
    """

    BLOCK_TYPE: ClassVar[BlockType]
    NAME: ClassVar[str]

    @classmethod
    def read(cls, cursor: ByteCursor) -> "Block":
        """
        Read the block, starting at its tag byte.

        Raises:
            BlockIdMismatchError: The tag byte belongs to another block kind
            TapeFormatError: The body is malformed or truncated
        """
        block_id = read_u8(cursor)
        if block_id != cls.BLOCK_TYPE:
            raise BlockIdMismatchError(cls.BLOCK_TYPE, block_id)
        return cls._read_body(cursor)

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "Block":
        raise NotImplementedError("Subclasses must implement _read_body()")

    @property
    def block_id(self) -> int:
        return int(self.BLOCK_TYPE)

    @property
    def tape_data(self) -> Optional[TapeDataBlock]:
        """The embedded TAP unit, for the three kinds that carry one."""
        return None

    def summary(self) -> str:
        """One-line description of the block contents."""
        return ""


# =============================================================================
# Data Blocks
# =============================================================================

@dataclass(frozen=True)
class StandardSpeedData(Block):
    """
    Standard Speed Data (ID $10).

    A TAP unit saved with the ROM timings.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Pause after this block (ms) {1000}
        0x02    2+n     TAP unit, including its own length prefix
    """
    pause: int
    data_block: TapeDataBlock

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.STANDARD_SPEED_DATA
    NAME: ClassVar[str] = "Standard Speed Data"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "StandardSpeedData":
        pause = read_u16le(cursor)
        data_block, _ = decode_next(cursor, SingleShot())
        return cls(pause=pause, data_block=data_block)

    @property
    def tape_data(self) -> TapeDataBlock:
        return self.data_block

    def summary(self) -> str:
        return f"{self.data_block.summary()}, pause {self.pause} ms"


@dataclass(frozen=True)
class TurboSpeedData(Block):
    """
    Turbo Speed Data (ID $11).

    Like standard speed data, but every timing is given explicitly. Values
    in braces are the ROM defaults.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Length of PILOT pulse {2168}
        0x02    2       Length of SYNC first pulse {667}
        0x04    2       Length of SYNC second pulse {735}
        0x06    2       Length of ZERO bit pulse {855}
        0x08    2       Length of ONE bit pulse {1710}
        0x0A    2       Length of PILOT tone in pulses {8063 header, 3223 data}
        0x0C    1       Used bits in the last byte {8}
        0x0D    2       Pause after this block (ms) {1000}
        0x0F    3       Length of data that follows
        0x12    n       TAP unit body (no length prefix)
    """
    pilot_pulse: int
    sync_first_pulse: int
    sync_second_pulse: int
    zero_bit_pulse: int
    one_bit_pulse: int
    pilot_tone: int
    used_bits: int
    pause: int
    length: int
    data_block: TapeDataBlock

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.TURBO_SPEED_DATA
    NAME: ClassVar[str] = "Turbo Speed Data"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "TurboSpeedData":
        pilot_pulse = read_u16le(cursor)
        sync_first_pulse = read_u16le(cursor)
        sync_second_pulse = read_u16le(cursor)
        zero_bit_pulse = read_u16le(cursor)
        one_bit_pulse = read_u16le(cursor)
        pilot_tone = read_u16le(cursor)
        used_bits = read_u8(cursor)
        pause = read_u16le(cursor)
        length = read_u24_as_u32(cursor)
        data_block, _ = decode_next(cursor, SingleShot(length=length))
        return cls(
            pilot_pulse=pilot_pulse,
            sync_first_pulse=sync_first_pulse,
            sync_second_pulse=sync_second_pulse,
            zero_bit_pulse=zero_bit_pulse,
            one_bit_pulse=one_bit_pulse,
            pilot_tone=pilot_tone,
            used_bits=used_bits,
            pause=pause,
            length=length,
            data_block=data_block,
        )

    @property
    def tape_data(self) -> TapeDataBlock:
        return self.data_block

    def summary(self) -> str:
        return f"{self.data_block.summary()}, pause {self.pause} ms"


@dataclass(frozen=True)
class PureTone(Block):
    """Pure Tone (ID $12): one pulse length repeated."""
    pulse_length: int
    pulse_count: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.PURE_TONE
    NAME: ClassVar[str] = "Pure Tone"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "PureTone":
        return cls(pulse_length=read_u16le(cursor), pulse_count=read_u16le(cursor))

    def summary(self) -> str:
        return f"{self.pulse_count} x {self.pulse_length} T-states"


@dataclass(frozen=True)
class SequenceOfPulses(Block):
    """Pulse Sequence (ID $13): up to 255 pulses of individual lengths."""
    pulse_lengths: tuple[int, ...]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.SEQUENCE_OF_PULSES
    NAME: ClassVar[str] = "Sequence of Pulses"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "SequenceOfPulses":
        count = read_u8(cursor)
        return cls(pulse_lengths=tuple(read_u16le(cursor) for _ in range(count)))

    def summary(self) -> str:
        return f"{len(self.pulse_lengths)} pulses"


@dataclass(frozen=True)
class PureData(Block):
    """
    Pure Data (ID $14).

    Turbo speed data without the pilot tone and sync pulses.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Length of ZERO bit pulse
        0x02    2       Length of ONE bit pulse
        0x04    1       Used bits in the last byte
        0x05    2       Pause after this block (ms)
        0x07    3       Length of data that follows
        0x0A    n       TAP unit body (no length prefix)
    """
    zero_bit_pulse: int
    one_bit_pulse: int
    used_bits: int
    pause: int
    length: int
    data_block: TapeDataBlock

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.PURE_DATA
    NAME: ClassVar[str] = "Pure Data"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "PureData":
        zero_bit_pulse = read_u16le(cursor)
        one_bit_pulse = read_u16le(cursor)
        used_bits = read_u8(cursor)
        pause = read_u16le(cursor)
        length = read_u24_as_u32(cursor)
        data_block, _ = decode_next(cursor, SingleShot(length=length))
        return cls(
            zero_bit_pulse=zero_bit_pulse,
            one_bit_pulse=one_bit_pulse,
            used_bits=used_bits,
            pause=pause,
            length=length,
            data_block=data_block,
        )

    @property
    def tape_data(self) -> TapeDataBlock:
        return self.data_block

    def summary(self) -> str:
        return f"{self.data_block.summary()}, pause {self.pause} ms"


@dataclass(frozen=True)
class DirectRecording(Block):
    """
    Direct Recording (ID $15).

    Raw EAR samples, one bit per sample, most significant bit played first.
    Kept without interpretation.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Number of T-states per sample
        0x02    2       Pause after this block (ms)
        0x04    1       Used bits (samples) in the last byte (1-8)
        0x05    3       Length of sample data
        0x08    n       Sample data
    """
    tstates_per_sample: int
    pause: int
    used_bits: int
    samples: bytes

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.DIRECT_RECORDING
    NAME: ClassVar[str] = "Direct Recording"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "DirectRecording":
        tstates_per_sample = read_u16le(cursor)
        pause = read_u16le(cursor)
        used_bits = read_u8(cursor)
        length = read_u24_as_u32(cursor)
        return cls(
            tstates_per_sample=tstates_per_sample,
            pause=pause,
            used_bits=used_bits,
            samples=read_fixed(cursor, length),
        )

    @property
    def length(self) -> int:
        return len(self.samples)

    def summary(self) -> str:
        return f"{self.length} bytes, pause {self.pause} ms"


@dataclass(frozen=True)
class CswRecording(Block):
    """
    CSW Recording (ID $18).

    Compressed square wave data, kept as raw bytes.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    4       Block length (without these four bytes)
        0x04    2       Pause after this block (ms)
        0x06    3       Sampling rate
        0x09    1       Compression type (1 = RLE, 2 = Z-RLE)
        0x0A    4       Number of stored pulses (after decompression)
        0x0E    n       CSW data (block length - 10)
    """
    length: int
    pause: int
    sample_rate: int
    compression: int
    stored_pulse_count: int
    data: bytes

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.CSW_RECORDING
    NAME: ClassVar[str] = "CSW Recording"

    # Bytes of fixed fields counted by the length word
    FIXED_SIZE: ClassVar[int] = 10

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "CswRecording":
        offset = cursor.position
        length = read_u32le(cursor)
        if length < cls.FIXED_SIZE:
            raise TapeFormatError(
                f"CSW recording length {length} is shorter than its "
                f"{cls.FIXED_SIZE} bytes of fixed fields",
                offset=offset,
            )
        pause = read_u16le(cursor)
        sample_rate = read_u24_as_u32(cursor)
        compression = read_u8(cursor)
        stored_pulse_count = read_u32le(cursor)
        return cls(
            length=length,
            pause=pause,
            sample_rate=sample_rate,
            compression=compression,
            stored_pulse_count=stored_pulse_count,
            data=read_fixed(cursor, length - cls.FIXED_SIZE),
        )

    def get_compression_name(self) -> str:
        try:
            return CompressionType(self.compression).name
        except ValueError:
            return f"Unknown (0x{self.compression:02X})"

    def summary(self) -> str:
        return (
            f"{len(self.data)} bytes {self.get_compression_name()}, "
            f"{self.sample_rate} Hz, pause {self.pause} ms"
        )


# =============================================================================
# Flow Control Blocks
# =============================================================================

@dataclass(frozen=True)
class PauseTapeCommand(Block):
    """Pause / Stop the Tape (ID $20). A pause of 0 stops the tape."""
    pause: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.PAUSE_TAPE_COMMAND
    NAME: ClassVar[str] = "Pause Tape Command"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "PauseTapeCommand":
        return cls(pause=read_u16le(cursor))

    @property
    def stops_tape(self) -> bool:
        return self.pause == 0

    def summary(self) -> str:
        return "stop the tape" if self.stops_tape else f"{self.pause} ms"


@dataclass(frozen=True)
class GroupStart(Block):
    """Group Start (ID $21): marks the start of a named group of blocks."""
    group_name: str

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.GROUP_START
    NAME: ClassVar[str] = "Group Start"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "GroupStart":
        length = read_u8(cursor)
        return cls(group_name=read_text(cursor, length))

    def summary(self) -> str:
        return self.group_name


@dataclass(frozen=True)
class GroupEnd(Block):
    """Group End (ID $22). No body."""

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.GROUP_END
    NAME: ClassVar[str] = "Group End"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "GroupEnd":
        return cls()


@dataclass(frozen=True)
class JumpTo(Block):
    """Jump to Block (ID $23): signed offset relative to this block."""
    relative_jump: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.JUMP_TO
    NAME: ClassVar[str] = "Jump To"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "JumpTo":
        return cls(relative_jump=read_i16le(cursor))

    def summary(self) -> str:
        return f"{self.relative_jump:+d} blocks"


@dataclass(frozen=True)
class LoopStart(Block):
    """Loop Start (ID $24)."""
    repetitions: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.LOOP_START
    NAME: ClassVar[str] = "Loop Start"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "LoopStart":
        return cls(repetitions=read_u16le(cursor))

    def summary(self) -> str:
        return f"{self.repetitions} repetitions"


@dataclass(frozen=True)
class LoopEnd(Block):
    """Loop End (ID $25). No body."""

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.LOOP_END
    NAME: ClassVar[str] = "Loop End"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "LoopEnd":
        return cls()


@dataclass(frozen=True)
class CallSequence(Block):
    """Call Sequence (ID $26): signed offsets of the blocks to call, in order."""
    offsets: tuple[int, ...]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.CALL_SEQUENCE
    NAME: ClassVar[str] = "Call Sequence"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "CallSequence":
        count = read_u16le(cursor)
        return cls(offsets=tuple(read_i16le(cursor) for _ in range(count)))

    def summary(self) -> str:
        return f"{len(self.offsets)} calls"


@dataclass(frozen=True)
class ReturnFromSequence(Block):
    """Return from Sequence (ID $27). No body."""

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.RETURN_FROM_SEQUENCE
    NAME: ClassVar[str] = "Return from Sequence"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "ReturnFromSequence":
        return cls()


@dataclass(frozen=True)
class Selection:
    """One entry of a Select block."""
    relative_offset: int
    description: str


@dataclass(frozen=True)
class Select(Block):
    """
    Select Block (ID $28).

    A menu of tape positions, e.g. "Part 1", "Part 2".

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Length of the whole block (without these two bytes)
        0x02    1       Number of selections
        0x03    ...     Selections: signed WORD offset, BYTE length, text
    """
    length: int
    selections: tuple[Selection, ...]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.SELECT
    NAME: ClassVar[str] = "Select"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "Select":
        length = read_u16le(cursor)
        count = read_u8(cursor)
        selections = []
        for _ in range(count):
            relative_offset = read_i16le(cursor)
            text_length = read_u8(cursor)
            selections.append(Selection(relative_offset, read_text(cursor, text_length)))
        return cls(length=length, selections=tuple(selections))

    def summary(self) -> str:
        return f"{len(self.selections)} selections"


@dataclass(frozen=True)
class StopTapeWhen48k(Block):
    """Stop the Tape if in 48K Mode (ID $2A). Length field is always 0."""
    length: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.STOP_TAPE_WHEN_48K
    NAME: ClassVar[str] = "Stop Tape when 48k Mode"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "StopTapeWhen48k":
        return cls(length=read_u32le(cursor))


@dataclass(frozen=True)
class SetSignalLevel(Block):
    """Set Signal Level (ID $2B): 0 = low, 1 = high."""
    length: int
    signal_level: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.SET_SIGNAL_LEVEL
    NAME: ClassVar[str] = "Set Signal Level"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "SetSignalLevel":
        return cls(length=read_u32le(cursor), signal_level=read_u8(cursor))

    def summary(self) -> str:
        return "high" if self.signal_level else "low"


# =============================================================================
# Information Blocks
# =============================================================================

@dataclass(frozen=True)
class TextDescription(Block):
    """Text Description (ID $30)."""
    text: str

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.TEXT_DESCRIPTION
    NAME: ClassVar[str] = "Text Description"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "TextDescription":
        length = read_u8(cursor)
        return cls(text=read_text(cursor, length))

    def summary(self) -> str:
        return self.text


@dataclass(frozen=True)
class Message(Block):
    """Message Block (ID $31): text shown for display_time seconds."""
    display_time: int
    text: str

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.MESSAGE
    NAME: ClassVar[str] = "Message"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "Message":
        display_time = read_u8(cursor)
        length = read_u8(cursor)
        return cls(display_time=display_time, text=read_text(cursor, length))

    def summary(self) -> str:
        return f"{self.text} ({self.display_time} s)"


@dataclass(frozen=True)
class ArchiveEntry:
    """One text string of an Archive Info block."""
    field_id: int
    text: str

    def get_field_name(self) -> str:
        try:
            return ArchiveField(self.field_id).get_description()
        except ValueError:
            return f"Unknown (0x{self.field_id:02X})"


@dataclass(frozen=True)
class ArchiveInfo(Block):
    """
    Archive Info (ID $32).

    Title, publisher, authors, year and similar. Usually the first block.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    2       Length of the whole block (without these two bytes)
        0x02    1       Number of text strings
        0x03    ...     Text strings: BYTE id, BYTE length, text
    """
    length: int
    entries: tuple[ArchiveEntry, ...]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.ARCHIVE_INFO
    NAME: ClassVar[str] = "Archive Info"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "ArchiveInfo":
        length = read_u16le(cursor)
        count = read_u8(cursor)
        entries = []
        for _ in range(count):
            field_id = read_u8(cursor)
            text_length = read_u8(cursor)
            entries.append(ArchiveEntry(field_id, read_text(cursor, text_length)))
        return cls(length=length, entries=tuple(entries))

    def get(self, field: ArchiveField) -> Optional[str]:
        """Return the first text stored for a field, if any."""
        for entry in self.entries:
            if entry.field_id == field:
                return entry.text
        return None

    def summary(self) -> str:
        title = self.get(ArchiveField.TITLE)
        return title if title is not None else f"{len(self.entries)} entries"


@dataclass(frozen=True)
class HardwareInfo:
    """One machine or peripheral entry of a Hardware Type block."""
    kind: int
    hardware_id: int
    compatibility: int

    def get_name(self) -> str:
        name = get_hardware_name(self.kind, self.hardware_id)
        return name or f"Unknown (0x{self.kind:02X}/0x{self.hardware_id:02X})"

    def get_compatibility(self) -> Optional[Compatibility]:
        try:
            return Compatibility(self.compatibility)
        except ValueError:
            return None

    def get_kind(self) -> Optional[HardwareKind]:
        try:
            return HardwareKind(self.kind)
        except ValueError:
            return None


@dataclass(frozen=True)
class HardwareType(Block):
    """Hardware Type (ID $33): count, then (kind, id, compatibility) triples."""
    entries: tuple[HardwareInfo, ...]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.HARDWARE_TYPE
    NAME: ClassVar[str] = "Hardware Type"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "HardwareType":
        count = read_u8(cursor)
        entries = tuple(
            HardwareInfo(read_u8(cursor), read_u8(cursor), read_u8(cursor))
            for _ in range(count)
        )
        return cls(entries=entries)

    def summary(self) -> str:
        return ", ".join(entry.get_name() for entry in self.entries)


@dataclass(frozen=True)
class CustomInfo(Block):
    """
    Custom Info (ID $35).

    A 10-character identification string (e.g. "POKEs     ") followed by
    a DWORD length and that many bytes of free-form data.
    """
    identification: str
    data: bytes

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.CUSTOM_INFO
    NAME: ClassVar[str] = "Custom Info"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "CustomInfo":
        identification = read_text(cursor, 10)
        length = read_u32le(cursor)
        return cls(identification=identification, data=read_fixed(cursor, length))

    def summary(self) -> str:
        return f"{self.identification.rstrip()}: {len(self.data)} bytes"


@dataclass(frozen=True)
class GlueBlock(Block):
    """
    Glue Block (ID $5A).

    Left behind when two TZX files are concatenated: the second file's
    header, whose leading "Z" doubles as the block ID.

    Structure:
        Offset  Size    Description
        ------  ----    -----------
        0x00    7       "XTape!" + 0x1A
        0x07    1       Major version
        0x08    1       Minor version
    """
    major_version: int
    minor_version: int

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.GLUE_BLOCK
    NAME: ClassVar[str] = "Glue Block"

    SIGNATURE: ClassVar[bytes] = b"XTape!\x1a"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "GlueBlock":
        offset = cursor.position
        signature = read_fixed(cursor, len(cls.SIGNATURE))
        if signature != cls.SIGNATURE:
            raise MalformedHeaderError(b"Z" + signature, offset=offset - 1)
        return cls(major_version=read_u8(cursor), minor_version=read_u8(cursor))

    def summary(self) -> str:
        return f"v{self.major_version}.{self.minor_version:02d}"

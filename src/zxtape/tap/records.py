"""
TAP Record Type Definitions
===========================

This module defines the data structures for TAP tape-data units. The same
units are embedded in three TZX block kinds (standard speed, turbo speed
and pure data), so they are decoded by one shared set of classes.

Unit Structure Overview
-----------------------
A standalone TAP file is a sequence of units:

    Offset  Size    Description
    ------  ----    -----------
    0       2       Length of the unit body (little-endian WORD)
    2       n       Unit body

Inside turbo-speed and pure-data TZX blocks the 2-byte prefix is replaced by
the block's own 24-bit length field; the body is unchanged.

Unit Bodies
-----------
**Header** (length 19, flag 0):
    Byte 0:     Flag (always 0x00)
    Byte 1:     Header type (0-3, see HeaderType)
    Byte 2-11:  Filename, space padded to 10 characters
    Byte 12-13: Length of the data block that follows
    Byte 14-15: Parameter 1 (meaning depends on header type)
    Byte 16-17: Parameter 2 (meaning depends on header type)
    Byte 18:    Checksum (XOR of bytes 0-17)

**Standard data** (length 2 or more):
    Byte 0:     Flag (0xFF for ROM data blocks, anything for custom loaders)
    Byte 1..n:  Payload (length - 2 bytes)
    Last byte:  Checksum (XOR of flag and payload)

**Fragment** (length 0 or 1):
    Payload only. No flag, no checksum. Fragments cannot be written by the
    ROM save routine; some protected loaders use them.

Reference
---------
- TAP format: http://www.zx-modules.de/fileformats/tapformat.html
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional
import struct

from zxtape.storage import (
    ByteCursor,
    TEXT_ENCODING,
    read_u8,
    read_u16le,
    read_fixed,
)


# Declared length of every header unit body
HEADER_LENGTH = 19

# Flag byte values written by the Spectrum ROM save routine
FLAG_HEADER = 0x00
FLAG_DATA = 0xFF

# Program header parameter 1 at or above this value means "no auto-run line"
NO_AUTOSTART = 32768

# A bytes header describing the 6912-byte screen memory at 16384
SCREEN_ADDRESS = 16384
SCREEN_LENGTH = 6912

_HEADER_BODY = struct.Struct("<BB10sHHHB")


# =============================================================================
# Enumeration Types
# =============================================================================

class HeaderType(IntEnum):
    """Header type byte (offset 1 of a header body)."""
    PROGRAM = 0
    NUMERIC_ARRAY = 1
    CHARACTER_ARRAY = 2
    BYTES = 3


# =============================================================================
# Record Base Class
# =============================================================================

@dataclass(frozen=True)
class TapeDataBlock:
    """
    Base class for TAP units.

    Attributes:
        length: The declared body length, from the 2-byte prefix or the
            enclosing TZX block's 24-bit length field.
    """
    length: int

    NAME: ClassVar[str] = "Tape Data"

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def payload(self) -> bytes:
        """The data carried by the unit (empty for headers)."""
        return b""

    def summary(self) -> str:
        return f"{self.name}: {len(self.payload)} bytes"


# =============================================================================
# Header Records
# =============================================================================

@dataclass(frozen=True)
class TapeHeader(TapeDataBlock):
    """
    Common fields of the four 19-byte header kinds.

    The meaning of param1/param2 depends on the header type; subclasses
    expose them under their proper names.
    """
    flag: int
    data_type: int
    filename_bytes: bytes
    data_length: int
    param1: int
    param2: int
    checksum: int

    HEADER_TYPE: ClassVar[HeaderType]

    @classmethod
    def read(cls, cursor: ByteCursor, length: Optional[int] = None) -> "TapeHeader":
        """
        Read a header unit.

        Args:
            cursor: Positioned at the length prefix, or at the flag byte when
                the enclosing block supplies ``length``
            length: Declared length read by the enclosing block, or None to
                read the 2-byte prefix here
        """
        if length is None:
            length = read_u16le(cursor)
        (flag, data_type, filename, data_length,
         param1, param2, checksum) = _HEADER_BODY.unpack(read_fixed(cursor, HEADER_LENGTH))
        return cls(
            length=length,
            flag=flag,
            data_type=data_type,
            filename_bytes=filename,
            data_length=data_length,
            param1=param1,
            param2=param2,
            checksum=checksum,
        )

    @property
    def filename(self) -> str:
        """The filename without its space padding."""
        return self.filename_bytes.decode(TEXT_ENCODING).rstrip()

    def body_bytes(self) -> bytes:
        """The 18 bytes covered by the checksum (flag through parameter 2)."""
        return _HEADER_BODY.pack(
            self.flag, self.data_type, self.filename_bytes,
            self.data_length, self.param1, self.param2, 0,
        )[:-1]

    def summary(self) -> str:
        return f'{self.name}: "{self.filename}"'


def _array_letter(param1: int) -> Optional[str]:
    # Variable name is the high byte of parameter 1: (1..26) + 128 or + 192
    index = (param1 >> 8) & 0x1F
    if 1 <= index <= 26:
        return chr(ord("A") + index - 1)
    return None


@dataclass(frozen=True)
class ProgramHeader(TapeHeader):
    """Header for a BASIC program (type 0)."""

    NAME: ClassVar[str] = "BASIC Program"
    HEADER_TYPE: ClassVar[HeaderType] = HeaderType.PROGRAM

    @property
    def autostart_line(self) -> Optional[int]:
        """LINE parameter of SAVE, or None when the program does not auto-run."""
        return self.param1 if self.param1 < NO_AUTOSTART else None

    @property
    def program_length(self) -> int:
        """Length of the BASIC program; the remainder up to data_length is variables."""
        return self.param2

    def summary(self) -> str:
        text = super().summary()
        if self.autostart_line is not None:
            text += f" LINE {self.autostart_line}"
        return text


@dataclass(frozen=True)
class NumericHeader(TapeHeader):
    """Header for a numeric array (type 1)."""

    NAME: ClassVar[str] = "Numeric Data Array"
    HEADER_TYPE: ClassVar[HeaderType] = HeaderType.NUMERIC_ARRAY

    @property
    def variable_name(self) -> Optional[str]:
        return _array_letter(self.param1)

    def summary(self) -> str:
        return f"{super().summary()} DATA {self.variable_name or '?'}()"


@dataclass(frozen=True)
class AlphanumericHeader(TapeHeader):
    """Header for a character array (type 2)."""

    NAME: ClassVar[str] = "Alphanumeric Data Array"
    HEADER_TYPE: ClassVar[HeaderType] = HeaderType.CHARACTER_ARRAY

    @property
    def variable_name(self) -> Optional[str]:
        letter = _array_letter(self.param1)
        return f"{letter}$" if letter else None

    def summary(self) -> str:
        return f"{super().summary()} DATA {self.variable_name or '?'}()"


@dataclass(frozen=True)
class ByteHeader(TapeHeader):
    """Header for a block of memory (type 3), including SCREEN$."""

    NAME: ClassVar[str] = "Byte Data"
    HEADER_TYPE: ClassVar[HeaderType] = HeaderType.BYTES

    @property
    def start_address(self) -> int:
        return self.param1

    @property
    def is_screen(self) -> bool:
        return self.data_length == SCREEN_LENGTH and self.start_address == SCREEN_ADDRESS

    @property
    def name(self) -> str:
        return "SCREEN$" if self.is_screen else self.NAME

    def summary(self) -> str:
        return f"{super().summary()} CODE {self.start_address},{self.data_length}"


HEADER_CLASSES: dict[int, type[TapeHeader]] = {
    HeaderType.PROGRAM: ProgramHeader,
    HeaderType.NUMERIC_ARRAY: NumericHeader,
    HeaderType.CHARACTER_ARRAY: AlphanumericHeader,
    HeaderType.BYTES: ByteHeader,
}


# =============================================================================
# Data Records
# =============================================================================

@dataclass(frozen=True)
class StandardData(TapeDataBlock):
    """
    Flag byte, payload, checksum.

    Attributes:
        flag: 0xFF for ROM data blocks; custom loaders use any value
        data: length - 2 payload bytes (may be empty)
        checksum: Stored checksum byte (not validated while decoding)
    """
    flag: int
    data: bytes
    checksum: int

    NAME: ClassVar[str] = "Standard Data"

    @classmethod
    def read(cls, cursor: ByteCursor, length: Optional[int] = None) -> "StandardData":
        if length is None:
            length = read_u16le(cursor)
        flag = read_u8(cursor)
        data = read_fixed(cursor, length - 2)
        checksum = read_u8(cursor)
        return cls(length=length, flag=flag, data=data, checksum=checksum)

    @property
    def payload(self) -> bytes:
        return self.data

    @property
    def is_rom_data(self) -> bool:
        """True when the flag is the one the ROM writes after a header."""
        return self.flag == FLAG_DATA

    def summary(self) -> str:
        text = super().summary()
        if not self.is_rom_data:
            text += f" (flag 0x{self.flag:02X})"
        return text


@dataclass(frozen=True)
class FragmentData(TapeDataBlock):
    """A 0 or 1 byte unit with no flag and no checksum."""
    data: bytes

    NAME: ClassVar[str] = "Data Fragment"

    @classmethod
    def read(cls, cursor: ByteCursor, length: Optional[int] = None) -> "FragmentData":
        if length is None:
            length = read_u16le(cursor)
        return cls(length=length, data=read_fixed(cursor, length))

    @property
    def payload(self) -> bytes:
        return self.data

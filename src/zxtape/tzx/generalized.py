"""
TZX Generalized Data Block
==========================

Block $19 describes a loader's signal as an alphabet of symbols, where each
symbol is a short sequence of pulses. Pilot/sync and data each have their
own alphabet, so a loader that writes two bits at a time with four distinct
waves is as easy to describe as the ROM loader.

Structure
---------
    Offset  Size    Description
    ------  ----    -----------
    0x00    4       Block length (without these four bytes)
    0x04    2       Pause after this block (ms)
    0x06    4       TOTP: total symbols in the pilot/sync stream (can be 0)
    0x0A    1       NPP:  maximum pulses per pilot/sync symbol
    0x0B    1       ASP:  pilot/sync alphabet size (0 = 256)
    0x0C    4       TOTD: total symbols in the data stream (can be 0)
    0x10    1       NPD:  maximum pulses per data symbol
    0x11    1       ASD:  data alphabet size (0 = 256)
    0x12    ...     Pilot/sync alphabet, ASP x (flags + NPP WORDs)  [TOTP > 0]
            ...     Pilot/sync stream, TOTP x (symbol + WORD count)  [TOTP > 0]
            ...     Data alphabet, ASD x (flags + NPD WORDs)         [TOTD > 0]
            ...     Data stream, ceil(NB * TOTD / 8) bytes           [TOTD > 0]

Each data symbol index takes NB = ceil(log2(ASD)) bits, most significant
bit first. Symbols shorter than the maximum pulse count end with a
zero-length pulse. Bytes left inside the declared length after the data
stream are skipped; contents that run past it are a format error.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional
import logging

from zxtape.errors import TapeFormatError
from zxtape.storage import (
    ByteCursor,
    read_u8,
    read_u16le,
    read_u32le,
    read_fixed,
)
from zxtape.tzx.blocks import Block, BlockType

# Logger for this module
logger = logging.getLogger(__name__)


class SymbolPolarity(IntEnum):
    """Starting level of a symbol (flags bits 0-1)."""
    EDGE = 0            # Opposite to the current level (the usual case)
    NO_EDGE = 1         # Same as the current level, prolongs the previous pulse
    FORCE_LOW = 2
    FORCE_HIGH = 3


@dataclass(frozen=True)
class Symbol:
    """
    One alphabet entry.

    Attributes:
        flags: Raw flags byte; bits 0-1 hold the starting polarity
        pulse_lengths: Pulse lengths in T-states, up to the first zero
    """
    flags: int
    pulse_lengths: tuple[int, ...]

    @classmethod
    def read(cls, cursor: ByteCursor, max_pulses: int) -> "Symbol":
        flags = read_u8(cursor)
        pulses = [read_u16le(cursor) for _ in range(max_pulses)]
        if 0 in pulses:
            pulses = pulses[:pulses.index(0)]
        return cls(flags=flags, pulse_lengths=tuple(pulses))

    @property
    def polarity(self) -> SymbolPolarity:
        return SymbolPolarity(self.flags & 0x03)


@dataclass(frozen=True)
class PilotRunLength:
    """Pilot/sync stream entry: a symbol index and how often it repeats."""
    symbol: int
    repetitions: int

    @classmethod
    def read(cls, cursor: ByteCursor) -> "PilotRunLength":
        return cls(symbol=read_u8(cursor), repetitions=read_u16le(cursor))


def alphabet_size(value: int) -> int:
    """Decode an ASP/ASD byte, where 0 stands for 256."""
    return value or 256


def bits_per_symbol(size: int) -> int:
    """NB = ceil(log2(size)); a one-symbol alphabet needs no bits."""
    return (size - 1).bit_length()


def unpack_symbol_stream(data: bytes, count: int, bits: int) -> tuple[int, ...]:
    """
    Split a packed data stream into symbol indices.

    Example:
        >>> unpack_symbol_stream(bytes([0b10110000]), 4, 1)
        (1, 0, 1, 1)
    """
    if bits == 0:
        return (0,) * count

    mask = (1 << bits) - 1
    symbols = []
    accumulator = 0
    available = 0
    stream = iter(data)

    for _ in range(count):
        while available < bits:
            accumulator = (accumulator << 8) | next(stream)
            available += 8
        available -= bits
        symbols.append((accumulator >> available) & mask)
        accumulator &= (1 << available) - 1

    return tuple(symbols)


@dataclass(frozen=True)
class GeneralizedData(Block):
    """
    Generalized Data (ID $19).

    Pilot fields are None when TOTP is 0; data fields are None when TOTD
    is 0.
    """
    length: int
    pause: int
    pilot_symbol_count: int         # TOTP
    max_pilot_pulses: int           # NPP
    pilot_alphabet_size: int        # ASP, 0 already expanded to 256
    data_symbol_count: int          # TOTD
    max_data_pulses: int            # NPD
    data_alphabet_size: int         # ASD, 0 already expanded to 256
    pilot_symbols: Optional[tuple[Symbol, ...]]
    pilot_stream: Optional[tuple[PilotRunLength, ...]]
    data_symbols: Optional[tuple[Symbol, ...]]
    data_stream: Optional[tuple[int, ...]]

    BLOCK_TYPE: ClassVar[BlockType] = BlockType.GENERALIZED_DATA
    NAME: ClassVar[str] = "Generalized Data"

    @classmethod
    def _read_body(cls, cursor: ByteCursor) -> "GeneralizedData":
        length = read_u32le(cursor)
        start = cursor.position

        pause = read_u16le(cursor)
        totp = read_u32le(cursor)
        npp = read_u8(cursor)
        asp = alphabet_size(read_u8(cursor))
        totd = read_u32le(cursor)
        npd = read_u8(cursor)
        asd = alphabet_size(read_u8(cursor))

        pilot_symbols = pilot_stream = None
        if totp > 0:
            pilot_symbols = tuple(Symbol.read(cursor, npp) for _ in range(asp))
            pilot_stream = tuple(PilotRunLength.read(cursor) for _ in range(totp))

        data_symbols = data_stream = None
        if totd > 0:
            data_symbols = tuple(Symbol.read(cursor, npd) for _ in range(asd))
            bits = bits_per_symbol(asd)
            packed = read_fixed(cursor, (bits * totd + 7) // 8)
            data_stream = unpack_symbol_stream(packed, totd, bits)

        consumed = cursor.position - start
        if consumed > length:
            raise TapeFormatError(
                f"generalized data block declares {length} bytes "
                f"but its contents take {consumed}",
                offset=start - 4,
            )
        if consumed < length:
            logger.debug(f"Skipping {length - consumed} trailing generalized data bytes")
            cursor.discard(length - consumed)

        return cls(
            length=length,
            pause=pause,
            pilot_symbol_count=totp,
            max_pilot_pulses=npp,
            pilot_alphabet_size=asp,
            data_symbol_count=totd,
            max_data_pulses=npd,
            data_alphabet_size=asd,
            pilot_symbols=pilot_symbols,
            pilot_stream=pilot_stream,
            data_symbols=data_symbols,
            data_stream=data_stream,
        )

    def summary(self) -> str:
        return (
            f"{self.pilot_symbol_count} pilot symbols, "
            f"{self.data_symbol_count} data symbols, pause {self.pause} ms"
        )

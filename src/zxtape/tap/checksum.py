"""
TAP Checksum Calculations
=========================

Every header and standard data unit ends with a checksum byte: all bytes of
the unit body, flag included, XORed together.

Decoding never rejects a unit because of its checksum. Protected loaders
routinely store deliberately "wrong" values, so these helpers only report;
the `zxtape validate` command uses them to print warnings.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Optional

from zxtape.tap.records import TapeDataBlock, TapeHeader, StandardData


@dataclass
class ChecksumResult:
    """
    Result of checking one unit's checksum.

    Attributes:
        stored: The checksum byte stored in the unit
        calculated: XOR of the flag and body bytes
    """
    stored: int
    calculated: int

    @property
    def is_valid(self) -> bool:
        return self.stored == self.calculated


def calculate_checksum(data: bytes, initial: int = 0) -> int:
    """
    XOR all bytes together.

    Example:
        >>> calculate_checksum(bytes([0xFF, 0x01, 0x02]))
        252
    """
    return reduce(lambda acc, b: acc ^ b, data, initial)


def check_unit(block: TapeDataBlock) -> Optional[ChecksumResult]:
    """
    Check the checksum of a header or standard data unit.

    Returns:
        A ChecksumResult, or None for fragments (which have no checksum)
    """
    if isinstance(block, TapeHeader):
        return ChecksumResult(block.checksum, calculate_checksum(block.body_bytes()))
    if isinstance(block, StandardData):
        return ChecksumResult(block.checksum, calculate_checksum(block.data, block.flag))
    return None
